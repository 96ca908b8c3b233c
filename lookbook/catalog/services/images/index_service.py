"""
Image index table: rebuilt from a storage listing, read back as image groups.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List

from django.db import transaction

from productimages.models import ImageIndexEntry

from .filename_service import ParsedImage, has_primary_marker, parse_image_listing
from .media_service import GroupKey, ImageGroup, group_images

logger = logging.getLogger(__name__)

INSERT_BATCH_SIZE = 500


@dataclass
class IndexBuildStats:
    listed: int = 0
    indexed: int = 0
    skipped: int = 0
    duplicates: int = 0


def _dedupe_by_filename(entries: Iterable[ParsedImage]) -> List[ParsedImage]:
    """filename is unique in the table; the first listed copy wins."""
    seen = set()
    unique: List[ParsedImage] = []
    for entry in entries:
        if entry.filename in seen:
            continue
        seen.add(entry.filename)
        unique.append(entry)
    return unique


def rebuild_image_index(listing: Iterable, *, dry_run: bool = False) -> IndexBuildStats:
    """
    Replace the image index with the parsed contents of ``listing``.

    ``listing`` yields ``(filename, url)`` pairs. Unparsable filenames are
    skipped and counted, as are repeated filenames (the first copy is
    kept). The table is swapped inside one transaction.
    """
    items = list(listing)
    parsed = parse_image_listing(items)
    entries = _dedupe_by_filename(parsed.entries)
    stats = IndexBuildStats(
        listed=len(items),
        indexed=len(entries),
        skipped=len(parsed.skipped),
        duplicates=len(parsed.entries) - len(entries),
    )
    if stats.duplicates:
        logger.warning("Dropped %d images with an already listed filename", stats.duplicates)

    if dry_run:
        logger.info("Dry run: %d images would be indexed (%d skipped)", stats.indexed, stats.skipped)
        return stats

    with transaction.atomic():
        ImageIndexEntry.objects.all().delete()
        ImageIndexEntry.objects.bulk_create(
            [
                ImageIndexEntry(
                    model_ref=entry.model_ref,
                    color=entry.color,
                    filename=entry.filename,
                    url=entry.url,
                )
                for entry in entries
            ],
            batch_size=INSERT_BATCH_SIZE,
        )

    logger.info("Image index rebuilt: %d indexed, %d skipped of %d listed", stats.indexed, stats.skipped, stats.listed)
    return stats


def load_indexed_images() -> List[ParsedImage]:
    """Index rows as ``ParsedImage`` entries, in filename order."""
    rows = ImageIndexEntry.objects.order_by('filename', 'id').values_list('filename', 'model_ref', 'color', 'url')
    return [
        ParsedImage(
            filename=filename,
            model_ref=model_ref,
            color=color,
            url=url,
            is_primary=has_primary_marker(filename),
        )
        for filename, model_ref, color, url in rows
    ]


def load_image_groups() -> Dict[GroupKey, ImageGroup]:
    return group_images(load_indexed_images())
