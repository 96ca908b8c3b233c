import os

from django.core.management.base import BaseCommand, CommandError
from openpyxl import Workbook
from openpyxl.styles import Font

from catalog.services.images.sync_service import products_missing_images

HEADERS = ('Model ref', 'Color', 'Subcategory', 'Brand', 'Stock')


class Command(BaseCommand):
    help = 'Exports products without images to an .xlsx file'

    def add_arguments(self, parser):
        parser.add_argument(
            '--output',
            type=str,
            default='products-without-images.xlsx',
            help='Path of the workbook to write.'
        )

    def handle(self, *args, **options):
        output_path = options['output']
        products = products_missing_images()

        wb = Workbook()
        ws = wb.active
        ws.title = 'Without images'
        ws.append(HEADERS)
        for cell in ws[1]:
            cell.font = Font(bold=True)
        for product in products:
            ws.append([product.model_ref, product.color, product.subcategory, product.brand, product.stock_quantity])

        directory = os.path.dirname(output_path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            wb.save(output_path)
        except OSError as exc:
            raise CommandError(f'Could not write {output_path}: {exc}')

        self.stdout.write(self.style.SUCCESS(f'Exported {len(products)} products to {output_path}'))
