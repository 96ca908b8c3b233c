"""
Product image sync: match catalog rows against image groups and persist the result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from django.conf import settings
from django.db import transaction

from catalog.models import Product

from .index_service import load_image_groups
from .match_service import MATCH_EQUIVALENT, MATCH_EXACT, MatchResult, match_products
from .media_service import GroupKey, ImageGroup

logger = logging.getLogger(__name__)

UPDATE_BATCH_SIZE = 500


@dataclass
class ImageSyncStats:
    products: int = 0
    matched_exact: int = 0
    matched_equivalent: int = 0
    unmatched: int = 0
    updated: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            'products': self.products,
            'matched_exact': self.matched_exact,
            'matched_equivalent': self.matched_equivalent,
            'unmatched': self.unmatched,
            'updated': self.updated,
        }


def default_image_url() -> str:
    return getattr(settings, 'CATALOG_DEFAULT_IMAGE_URL', '/images/default.png')


def products_missing_images(queryset=None):
    """Products still showing the default image (or none at all)."""
    queryset = queryset if queryset is not None else Product.objects.all()
    return [product for product in queryset.order_by('model_ref', 'color', 'id') if not product.has_image]


def _apply_result(result: MatchResult) -> bool:
    """Copy images onto the product; returns True when something changed."""
    product = result.product
    if product.image_url == result.image_url and list(product.gallery or []) == result.gallery:
        return False
    product.image_url = result.image_url
    product.gallery = result.gallery
    return True


def sync_product_images(
    *,
    groups: Optional[Mapping[GroupKey, ImageGroup]] = None,
    only_missing: bool = False,
    dry_run: bool = False,
) -> ImageSyncStats:
    """
    Match products against image groups and store ``image_url`` / ``gallery``.

    Args:
        groups: Pre-built groups; loaded from the image index when omitted.
        only_missing: Restrict to products without a real image. Products
            that already have one are never reset to the default.
        dry_run: Compute and count without writing.
    """
    if groups is None:
        groups = load_image_groups()

    if only_missing:
        products = products_missing_images()
    else:
        products = list(Product.objects.order_by('model_ref', 'color', 'id'))

    results = match_products(products, groups, default_image_url=default_image_url())

    stats = ImageSyncStats(products=len(results))
    changed: List[Product] = []
    for result in results:
        if result.match_kind == MATCH_EXACT:
            stats.matched_exact += 1
        elif result.match_kind == MATCH_EQUIVALENT:
            stats.matched_equivalent += 1
        else:
            stats.unmatched += 1
            if only_missing:
                continue
        if _apply_result(result):
            changed.append(result.product)

    stats.updated = len(changed)
    logger.info(
        "Image sync: %d products, %d exact, %d via colour aliases, %d without images, %d to update",
        stats.products, stats.matched_exact, stats.matched_equivalent, stats.unmatched, stats.updated,
    )

    if dry_run or not changed:
        return stats

    with transaction.atomic():
        Product.objects.bulk_update(changed, ['image_url', 'gallery'], batch_size=UPDATE_BATCH_SIZE)
    return stats
