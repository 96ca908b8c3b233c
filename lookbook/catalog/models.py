from django.db import models


DEFAULT_IMAGE_URL = '/images/default.png'


class Product(models.Model):
    """
    Catalog row imported from the products spreadsheet.

    One row per (model_ref, color); sizes and prices come straight from the
    sheet. image_url / gallery are filled by the image sync.
    """
    model_ref = models.CharField(max_length=50, verbose_name='Код моделі')
    color = models.CharField(max_length=100, blank=True, default='', verbose_name='Колір')
    item_code = models.CharField(max_length=100, blank=True, default='')
    collection = models.CharField(max_length=100, blank=True, default='')
    category = models.CharField(max_length=50, blank=True, default='')
    subcategory = models.CharField(max_length=100, blank=True, default='')
    brand = models.CharField(max_length=100, blank=True, default='')
    gender = models.CharField(max_length=50, blank=True, default='')
    supplier = models.CharField(max_length=100, blank=True, default='')
    product_name = models.CharField(max_length=255, blank=True, default='')
    size = models.CharField(max_length=100, blank=True, default='')
    price_retail = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    price_wholesale = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    stock_quantity = models.IntegerField(default=0, verbose_name='Залишок')
    image_url = models.CharField(max_length=500, default=DEFAULT_IMAGE_URL)
    gallery = models.JSONField(blank=True, default=list)
    last_synced_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['model_ref', 'color']
        verbose_name = 'Товар'
        verbose_name_plural = 'Товари'
        constraints = [
            models.UniqueConstraint(fields=['model_ref', 'color'], name='uniq_product_model_color'),
        ]
        indexes = [
            models.Index(fields=['model_ref'], name='idx_product_model_ref'),
            models.Index(fields=['brand'], name='idx_product_brand'),
        ]

    def __str__(self):
        return f'{self.model_ref} [{self.color}]'

    @property
    def has_image(self) -> bool:
        return bool(self.image_url) and 'default' not in self.image_url
