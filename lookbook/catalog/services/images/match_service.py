"""
Joining product records with image groups.

Exact ``(model ref, colour token)`` lookup first, then the alias table for
the same model ref. A product without images is a normal outcome and gets
the default image; only malformed input raises ``CatalogMatchError``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .color_service import colors_equivalent
from .media_service import GroupKey, ImageGroup, image_group_key

DEFAULT_IMAGE_URL = "/images/default.png"

MATCH_EXACT = "exact"
MATCH_EQUIVALENT = "equivalent"


class CatalogMatchError(ValueError):
    """Caller passed data that breaks the matcher contract."""


@dataclass
class MatchResult:
    """
    Product paired with its images.

    Attributes:
        product: The record passed in, untouched.
        image_url: First URL of the matched group, or the default image.
        gallery: Ordered URLs of the group (empty when unmatched).
        group_key: Key of the matched group, ``None`` when unmatched.
        match_kind: ``"exact"``, ``"equivalent"`` or ``None``.
    """

    product: Any
    image_url: str
    gallery: List[str] = field(default_factory=list)
    group_key: Optional[GroupKey] = None
    match_kind: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.group_key is not None


def _index_by_model_ref(groups: Mapping[GroupKey, ImageGroup]) -> Dict[str, List[ImageGroup]]:
    """model ref -> its groups sorted by colour token (fixes fallback tie-break)."""
    by_model: Dict[str, List[ImageGroup]] = {}
    for key, group in groups.items():
        if not isinstance(group, ImageGroup):
            raise CatalogMatchError(f"Group {key!r} is not an ImageGroup: {type(group).__name__}")
        by_model.setdefault(group.model_ref, []).append(group)
    for candidates in by_model.values():
        candidates.sort(key=lambda group: group.color_token)
    return by_model


def _product_key(product: Any) -> GroupKey:
    try:
        model_ref = product.model_ref
        color = product.color
    except AttributeError as exc:
        raise CatalogMatchError(f"Product record lacks model_ref/color: {product!r}") from exc
    if model_ref is None or color is None:
        raise CatalogMatchError(f"Product record has null model_ref/color: {product!r}")
    return image_group_key(str(model_ref), str(color))


def _match_one(
    product: Any,
    groups: Mapping[GroupKey, ImageGroup],
    by_model: Dict[str, List[ImageGroup]],
    default_image_url: str,
) -> MatchResult:
    key = _product_key(product)

    group = groups.get(key)
    kind = MATCH_EXACT if group is not None else None
    if group is None:
        model_ref, color_token = key
        for candidate in by_model.get(model_ref, ()):
            if colors_equivalent(candidate.color_token, color_token):
                group, kind = candidate, MATCH_EQUIVALENT
                break

    if group is None:
        return MatchResult(product=product, image_url=default_image_url)
    return MatchResult(
        product=product,
        image_url=group.image_url,
        gallery=group.gallery,
        group_key=group.key,
        match_kind=kind,
    )


def match_products(
    products: Iterable[Any],
    groups: Mapping[GroupKey, ImageGroup],
    default_image_url: str = DEFAULT_IMAGE_URL,
) -> List[MatchResult]:
    """
    Match every product against ``groups`` (as built by ``group_images``).

    Products are any objects exposing ``model_ref`` and ``color``. Results
    come back in input order; the same inputs always give the same results.
    """
    if not isinstance(groups, Mapping):
        raise CatalogMatchError(f"groups must be a mapping, got {type(groups).__name__}")
    by_model = _index_by_model_ref(groups)
    return [_match_one(product, groups, by_model, default_image_url) for product in products]


def match_product(
    product: Any,
    groups: Mapping[GroupKey, ImageGroup],
    default_image_url: str = DEFAULT_IMAGE_URL,
) -> MatchResult:
    return match_products([product], groups, default_image_url)[0]
