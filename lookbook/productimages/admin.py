from django.contrib import admin

from .models import ImageIndexEntry


@admin.register(ImageIndexEntry)
class ImageIndexEntryAdmin(admin.ModelAdmin):
    list_display = ('filename', 'model_ref', 'color', 'created_at')
    search_fields = ('filename', 'model_ref', 'color')
    list_filter = ('color',)
