from django.core.management.base import BaseCommand

from catalog.services.images.sync_service import sync_product_images


class Command(BaseCommand):
    help = 'Assigns indexed images to catalog products (exact colour first, then colour aliases)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--only-missing',
            action='store_true',
            help='Only process products that still show the default image.'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Match and report without saving.'
        )

    def handle(self, *args, **options):
        stats = sync_product_images(
            only_missing=options['only_missing'],
            dry_run=options['dry_run'],
        )

        prefix = '[dry run] ' if options['dry_run'] else ''
        self.stdout.write(
            f'{prefix}Products: {stats.products}, exact: {stats.matched_exact}, '
            f'via aliases: {stats.matched_equivalent}'
        )
        if stats.unmatched:
            self.stdout.write(self.style.WARNING(f'{prefix}Without images: {stats.unmatched}'))
        self.stdout.write(self.style.SUCCESS(f'{prefix}Updated: {stats.updated}'))
