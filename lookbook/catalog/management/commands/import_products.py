from django.core.management.base import BaseCommand, CommandError

from catalog.services.sheets.sheet_service import (
    SheetFetchError,
    fetch_sheet_rows,
    read_workbook_rows,
    records_from_rows,
    sync_products_from_records,
)


class Command(BaseCommand):
    help = 'Imports products from the Google Sheet (or an .xlsx export) into the catalog'

    def add_arguments(self, parser):
        parser.add_argument(
            '--xlsx',
            type=str,
            default=None,
            help='Path to an .xlsx file to read instead of fetching the Google Sheet.'
        )
        parser.add_argument(
            '--sheet-id',
            type=str,
            default=None,
            help='Google Sheet id (defaults to settings.GOOGLE_SHEET_ID).'
        )
        parser.add_argument(
            '--sheet-name',
            type=str,
            default=None,
            help='Worksheet name, or a comma-separated list of Google Sheet tabs (defaults to settings.GOOGLE_SHEET_NAME; active sheet for --xlsx).'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report what would change without writing to the database.'
        )

    def handle(self, *args, **options):
        try:
            if options['xlsx']:
                self.stdout.write(f"Reading workbook {options['xlsx']}...")
                rows = read_workbook_rows(options['xlsx'], sheet_name=options['sheet_name'])
            else:
                self.stdout.write('Fetching Google Sheet...')
                rows = fetch_sheet_rows(options['sheet_id'], options['sheet_name'])
        except SheetFetchError as exc:
            raise CommandError(str(exc))

        records, skipped = records_from_rows(rows)
        if skipped:
            self.stdout.write(self.style.WARNING(f'Skipped {skipped} rows without a model code'))

        stats = sync_products_from_records(records, skipped=skipped, dry_run=options['dry_run'])

        prefix = '[dry run] ' if options['dry_run'] else ''
        self.stdout.write(self.style.SUCCESS(
            f'{prefix}Sheet products: {stats.sheet_products}, created: {stats.created}, '
            f'updated: {stats.updated}, stock zeroed: {stats.zeroed}'
        ))
