"""
Product image reconciliation helpers (pure, no database access).

Database-backed pieces live in ``index_service`` and ``sync_service`` and
are imported from there directly.
"""

from .color_service import (
    COLOR_EQUIVALENCE_TABLE,
    COLOR_TABLE_VERSION,
    color_aliases,
    colors_equivalent,
    colors_match,
    normalize_color_token,
)
from .filename_service import (
    ImageFilenameError,
    ParsedImage,
    has_primary_marker,
    parse_image_filename,
    parse_image_listing,
)
from .match_service import (
    DEFAULT_IMAGE_URL,
    CatalogMatchError,
    MatchResult,
    match_product,
    match_products,
)
from .media_service import (
    ImageGroup,
    group_images,
    image_group_key,
)

__all__ = [
    "COLOR_EQUIVALENCE_TABLE",
    "COLOR_TABLE_VERSION",
    "color_aliases",
    "colors_equivalent",
    "colors_match",
    "normalize_color_token",
    "ImageFilenameError",
    "ParsedImage",
    "has_primary_marker",
    "parse_image_filename",
    "parse_image_listing",
    "DEFAULT_IMAGE_URL",
    "CatalogMatchError",
    "MatchResult",
    "match_product",
    "match_products",
    "ImageGroup",
    "group_images",
    "image_group_key",
]
