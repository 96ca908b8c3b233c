from django.apps import AppConfig


class ProductImagesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'productimages'
