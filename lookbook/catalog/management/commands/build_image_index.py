from django.core.management.base import BaseCommand, CommandError

from catalog.services.images.index_service import rebuild_image_index
from catalog.services.images.storage_service import StorageListingError, get_listing


class Command(BaseCommand):
    help = 'Rebuilds the image index table from the image storage listing'

    def add_arguments(self, parser):
        parser.add_argument(
            '--source',
            choices=['storage', 'local'],
            default='storage',
            help='Where to list images from: Supabase storage bucket or a local directory.'
        )
        parser.add_argument(
            '--root',
            type=str,
            default=None,
            help='Local image directory for --source=local (defaults to settings.CATALOG_LOCAL_IMAGES_ROOT).'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Parse the listing and report counts without touching the index.'
        )

    def handle(self, *args, **options):
        self.stdout.write(f"Listing images from {options['source']}...")
        try:
            listing = get_listing(options['source'], root=options['root'])
            stats = rebuild_image_index(listing, dry_run=options['dry_run'])
        except StorageListingError as exc:
            raise CommandError(str(exc))

        if stats.skipped:
            self.stdout.write(self.style.WARNING(f'Skipped {stats.skipped} files with unparsable names'))
        if stats.duplicates:
            self.stdout.write(self.style.WARNING(f'Dropped {stats.duplicates} files with a repeated filename'))
        prefix = '[dry run] ' if options['dry_run'] else ''
        self.stdout.write(self.style.SUCCESS(
            f'{prefix}Listed: {stats.listed}, indexed: {stats.indexed}'
        ))
