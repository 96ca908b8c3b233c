"""
Debug views - діагностика зіставлення кольорів товарів і зображень.

Показує, як нормалізуються дві назви кольору і чи вважаються вони
однаковим кольором за таблицею еквівалентів.
"""

from django.contrib.admin.views.decorators import staff_member_required
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

from ..services.images.color_service import (
    COLOR_TABLE_VERSION,
    color_aliases,
    colors_match,
    normalize_color_token,
)

DEFAULT_IMAGE_COLOR = 'OFFWHITE'
DEFAULT_PRODUCT_COLOR = 'COG'

# Фіксовані пари, які завжди повертаються разом з відповіддю
COLOR_TEST_CASES = (
    ('OFFWHITE', 'OFF'),
    ('OFFWHITE', 'COG'),
    ('OFFWHITE', 'COGNAC'),
    ('OFFWHITE', 'BLA'),
    ('OFFWHITE', 'BLACK'),
)


@staff_member_required
@require_GET
def debug_color_match(request):
    """
    GET ?imgColor=...&prodColor=...

    Без параметрів перевіряє пару OFFWHITE / COG.
    """
    image_color = request.GET.get('imgColor') or DEFAULT_IMAGE_COLOR
    product_color = request.GET.get('prodColor') or DEFAULT_PRODUCT_COLOR
    image_token = normalize_color_token(image_color)
    product_token = normalize_color_token(product_color)

    return JsonResponse({
        'imageColor': image_color,
        'productColor': product_color,
        'imageToken': image_token,
        'productToken': product_token,
        'imageAliases': sorted(color_aliases(image_token)),
        'productAliases': sorted(color_aliases(product_token)),
        'matches': colors_match(image_color, product_color),
        'tableVersion': COLOR_TABLE_VERSION,
        'timestamp': timezone.now().isoformat(),
        'testCases': [
            {'img': img, 'prod': prod, 'match': colors_match(img, prod)}
            for img, prod in COLOR_TEST_CASES
        ],
    })
