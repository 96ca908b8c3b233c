"""
Catalog views package.

Структура:
- debug.py - діагностика зіставлення кольорів
- reports.py - JSON звіти по зображеннях товарів
"""

from .debug import debug_color_match
from .reports import image_stats, products_without_images

__all__ = [
    'debug_color_match',
    'image_stats',
    'products_without_images',
]
