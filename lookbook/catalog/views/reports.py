"""
Звіти по зображеннях каталогу (JSON для адмінки).
"""
import logging

from django.contrib.admin.views.decorators import staff_member_required
from django.db import DatabaseError
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from productimages.models import ImageIndexEntry

from ..models import Product
from ..services.images.sync_service import products_missing_images

logger = logging.getLogger(__name__)


def _percentage(part, total):
    if not total:
        return 0
    return round(part * 100 / total, 1)


@staff_member_required
@require_GET
def products_without_images(request):
    """
    Товари, яким не знайшлося жодного зображення.

    summary - загальні лічильники, products - список, відсортований за model_ref.
    """
    try:
        total = Product.objects.count()
        missing = products_missing_images()
    except DatabaseError as exc:
        logger.error("products_without_images failed: %s", exc, exc_info=True)
        return JsonResponse({'success': False, 'error': str(exc)}, status=500)

    with_images = total - len(missing)
    return JsonResponse({
        'success': True,
        'summary': {
            'totalProducts': total,
            'productsWithImages': with_images,
            'productsWithoutImages': len(missing),
            'percentage': _percentage(with_images, total),
        },
        'products': [
            {
                'modelRef': product.model_ref,
                'color': product.color,
                'subcategory': product.subcategory,
                'brand': product.brand,
            }
            for product in missing
        ],
    })


@staff_member_required
@require_GET
def image_stats(request):
    """Розмір індексу зображень і покриття товарів."""
    try:
        index = ImageIndexEntry.objects.order_by()
        total_products = Product.objects.count()
        without_images = len(products_missing_images())
        stats = {
            'total_in_index': index.count(),
            'unique_model_refs': index.values('model_ref').distinct().count(),
            'unique_colors': index.values('color').distinct().count(),
            'total_products': total_products,
            'products_with_images': total_products - without_images,
            'products_without_images': without_images,
        }
    except DatabaseError as exc:
        logger.error("image_stats failed: %s", exc, exc_info=True)
        return JsonResponse({'success': False, 'error': str(exc)}, status=500)

    return JsonResponse({'success': True, 'stats': stats})
