from django.contrib import admin

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('model_ref', 'color', 'brand', 'subcategory', 'stock_quantity', 'price_retail', 'has_image')
    list_filter = ('category', 'brand', 'gender')
    search_fields = ('model_ref', 'color', 'item_code', 'product_name')
    readonly_fields = ('last_synced_at', 'created_at', 'updated_at')

    @admin.display(boolean=True, description='Є фото')
    def has_image(self, obj):
        return obj.has_image
