from django.db import models

from catalog.services.images.filename_service import (
    COLOR_MAX_LENGTH,
    FILENAME_MAX_LENGTH,
    MODEL_REF_MAX_LENGTH,
)


class ImageIndexEntry(models.Model):
    """
    One image file from the product image bucket, parsed from its filename.

    The table is rebuilt from the storage listing and read back by the
    image sync instead of listing the bucket again.
    """
    model_ref = models.CharField(max_length=MODEL_REF_MAX_LENGTH)
    color = models.CharField(max_length=COLOR_MAX_LENGTH, help_text='Сегмент кольору з імені файлу (без нормалізації)')
    filename = models.CharField(max_length=FILENAME_MAX_LENGTH, unique=True)
    url = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['filename']
        verbose_name = 'Зображення в індексі'
        verbose_name_plural = 'Індекс зображень'
        indexes = [
            models.Index(fields=['model_ref'], name='idx_image_index_model_ref'),
            models.Index(fields=['model_ref', 'color'], name='idx_image_index_model_color'),
        ]

    def __str__(self):
        return self.filename
