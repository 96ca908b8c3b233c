import logging

from celery import shared_task
from django.core.management import call_command

logger = logging.getLogger(__name__)


@shared_task
def sync_product_images_task(only_missing=False):
    """
    Celery task: re-match products against the current image index.
    """
    try:
        logger.info("Starting product image sync task (only_missing=%s)...", only_missing)
        call_command('sync_product_images', only_missing=only_missing, verbosity=0)
        logger.info("Product image sync task finished")
    except Exception as e:
        logger.error(f"Error syncing product images: {e}", exc_info=True)


@shared_task(bind=True, autoretry_for=(Exception,), retry_backoff=True, retry_kwargs={"max_retries": 3})
def refresh_catalog_images_task(self, source='storage'):
    """
    Rebuild the image index from storage, then re-match every product.
    """
    logger.info("Refreshing image index from %s", source)
    call_command('build_image_index', source=source, verbosity=0)
    call_command('sync_product_images', verbosity=0)
