"""
Image filename parsing: ``MODELREF-COLOR-rest.ext`` -> model ref, colour, primary flag.
"""
from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple, Union

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "webp", "gif"})
PRIMARY_MARKERS = ("_F", "-F")

# Column widths of the image index table
MODEL_REF_MAX_LENGTH = 50
COLOR_MAX_LENGTH = 50
FILENAME_MAX_LENGTH = 255


class ImageFilenameError(ValueError):
    """Filename does not follow the ``MODELREF-COLOR-...`` convention."""


@dataclass(frozen=True)
class ParsedImage:
    """
    One image from a storage listing or the index table.

    Attributes:
        filename: Basename as listed.
        model_ref: Upper-cased model reference (first hyphen segment).
        color: Raw colour segment, not normalised.
        url: Public URL of the file.
        is_primary: True when the stem ends in ``_F`` / ``-F``.
    """

    filename: str
    model_ref: str
    color: str
    url: str = ""
    is_primary: bool = False


@dataclass
class ListingParseResult:
    entries: List[ParsedImage] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def _split_extension(filename: str) -> Tuple[str, str]:
    stem, dot, ext = filename.rpartition(".")
    if not dot:
        return filename, ""
    return stem, ext.lower()


def has_primary_marker(filename: str) -> bool:
    """True when the stem (name minus extension) ends in ``_F`` or ``-F``."""
    stem, _ = _split_extension(posixpath.basename(filename or ""))
    return stem.upper().endswith(PRIMARY_MARKERS)


def parse_image_filename(filename: str, url: str = "") -> ParsedImage:
    """
    Parse an image filename.

    Directory prefixes (``products/...``) are ignored. Raises
    ``ImageFilenameError`` when the extension is not an image extension,
    when the stem has fewer than two non-empty hyphen-separated segments,
    or when a segment does not fit its index column.

    Only the hyphen splits segments: in ``PD1-OFF_F.jpg`` the colour is
    ``OFF_F`` (normalised ``OFFF``), not ``OFF``.
    """
    if not filename:
        raise ImageFilenameError("Empty filename")
    basename = posixpath.basename(filename.replace("\\", "/"))
    stem, ext = _split_extension(basename)
    if ext not in IMAGE_EXTENSIONS:
        raise ImageFilenameError(f"Unsupported image extension: {filename!r}")

    parts = stem.split("-")
    if len(parts) < 2:
        raise ImageFilenameError(f"Missing colour segment: {filename!r}")
    model_ref = parts[0].strip().upper()
    color = parts[1].strip().upper()
    if not model_ref or not color:
        raise ImageFilenameError(f"Empty model ref or colour segment: {filename!r}")
    if (
        len(model_ref) > MODEL_REF_MAX_LENGTH
        or len(color) > COLOR_MAX_LENGTH
        or len(basename) > FILENAME_MAX_LENGTH
    ):
        raise ImageFilenameError(f"Filename segment too long for the index: {filename!r}")

    return ParsedImage(
        filename=basename,
        model_ref=model_ref,
        color=color,
        url=url,
        is_primary=stem.upper().endswith(PRIMARY_MARKERS),
    )


def parse_image_listing(
    listing: Iterable[Union[str, Tuple[str, str]]],
) -> ListingParseResult:
    """
    Parse a whole listing, skipping names that do not follow the convention.

    Items are either bare filenames or ``(filename, url)`` pairs. Listing
    order is preserved in ``entries``.
    """
    result = ListingParseResult()
    for item in listing:
        if isinstance(item, tuple):
            filename, url = item
        else:
            filename, url = item, ""
        try:
            result.entries.append(parse_image_filename(filename, url))
        except ImageFilenameError as exc:
            logger.debug("Skipping image %s: %s", filename, exc)
            result.skipped.append(filename)

    if result.skipped:
        logger.info(
            "Parsed %d images, skipped %d unparsable filenames",
            len(result.entries),
            len(result.skipped),
        )
    return result
