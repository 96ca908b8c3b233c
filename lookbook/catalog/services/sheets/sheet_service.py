"""
Сервіс імпорту товарів з таблиці постачальника.

Джерело - Google Sheets (CSV-експорт gviz) або завантажений .xlsx файл.
Заголовки колонок у таблиці івритом, англійські назви підтримуються як
запасний варіант. Основні функції:
- fetch_sheet_rows(sheet_id, sheet_name) - завантажити рядки з аркушів Google Sheets
- read_workbook_rows(path_or_file) - прочитати рядки з .xlsx
- map_row_to_record(row) - перетворити рядок у ProductRecord
- sync_products_from_records(records) - створити/оновити товари в БД
"""
from __future__ import annotations

import csv
import io
import logging
import time
import zipfile
from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
from urllib.parse import quote

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException
import requests
from django.conf import settings
from django.db import transaction
from django.utils import timezone

from catalog.models import Product

logger = logging.getLogger(__name__)

GVIZ_CSV_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/gviz/tq?tqx=out:csv&sheet={sheet_name}"

MAX_RETRIES = 3
RETRY_DELAY = 1  # секунди
HEADER_SEARCH_ROWS = 20
WRITE_BATCH_SIZE = 500

# Поле ProductRecord -> можливі заголовки колонки (іврит першим)
HEADER_ALIASES: Dict[str, Tuple[str, ...]] = {
    'model_ref': ('קוד גם', 'מגז-קוד גם', 'קוד דגם', 'מק״ט', 'modelRef'),
    'item_code': ('קוד פריט', 'itemCode'),
    'color': ('צבע', 'color'),
    'collection': ('קולקציה', 'collection'),
    'subcategory': ('תת משפחה', 'תת קטגוריה', 'subcategory'),
    'brand': ('מותג', 'brand'),
    'gender': ('מגדר', 'gender'),
    'supplier': ('ספק', 'supplier'),
    'price_retail': ('מחיר כולל מע"מ בסיס', 'מחיר קמעונאי', 'קמעונאי', 'priceRetail'),
    'price_wholesale': ('סיטונאי', 'מחיר סיטונאי', 'priceWholesale'),
    'stock_quantity': ('כמות מלאי נוכחי', 'מלאי', 'כמות', 'stockQuantity'),
    'product_name': ('שם מוצר', 'שם', 'productName'),
    'size': ('מידה', 'size'),
}

CATEGORY_BAGS = 'תיק'
CATEGORY_SHOES = 'נעל'
CATEGORY_CLOTHES = 'ביגוד'

BAG_SUBCATEGORIES = (
    'ארנקים', 'ארנק', 'תיק צד', 'תיק נשיאה', 'מזוודות', 'תיק גב', 'תיק נסיעות',
    'תיק ערב', 'מחזיק מפתחות', 'תיק יד', 'תיק כתף', 'תיק עסקים',
)
SHOE_SUBCATEGORIES = ('כפכפים', 'סניקרס', 'נעליים שטוחו', 'נעלי עקב', 'מגפיים')


class SheetFetchError(RuntimeError):
    """Таблицю не вдалося завантажити або прочитати"""
    pass


@dataclass
class ProductRecord:
    """Один рядок таблиці у вигляді полів моделі Product."""

    model_ref: str
    color: str = ''
    item_code: str = ''
    collection: str = ''
    category: str = CATEGORY_CLOTHES
    subcategory: str = ''
    brand: str = ''
    gender: str = ''
    supplier: str = ''
    product_name: str = ''
    size: str = ''
    price_retail: Decimal = Decimal('0')
    price_wholesale: Decimal = Decimal('0')
    stock_quantity: int = 0

    @property
    def key(self) -> Tuple[str, str]:
        return (self.model_ref, self.color)

    def as_fields(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


RECORD_FIELDS = [f.name for f in fields(ProductRecord)]


@dataclass
class ProductSyncStats:
    sheet_products: int = 0
    created: int = 0
    updated: int = 0
    zeroed: int = 0
    skipped: int = 0


def _normalize_header(value: Any) -> str:
    text = str(value or '').strip().lower()
    for ch in ('\n', '\r', '\t'):
        text = text.replace(ch, ' ')
    return ' '.join(text.split())


_HEADER_LOOKUP: Dict[str, str] = {
    _normalize_header(alias): field_name
    for field_name, aliases in HEADER_ALIASES.items()
    for alias in aliases
}


def _cell_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def parse_number(value: Any) -> Decimal:
    """
    "₪ 1 149,90" -> Decimal("1149.90"). Порожнє або некоректне значення -> 0.
    """
    if value is None or value == '':
        return Decimal('0')
    if isinstance(value, (int, float, Decimal)):
        cleaned = str(value)
    else:
        cleaned = ''.join(str(value).replace('₪', '').split()).replace(',', '.')
    try:
        number = Decimal(cleaned)
    except InvalidOperation:
        return Decimal('0')
    return number if number.is_finite() else Decimal('0')


def category_for_subcategory(subcategory: str) -> str:
    """Основна категорія (תיק / נעל / ביגוד) за підкатегорією."""
    subcategory = subcategory or ''
    if any(name in subcategory for name in BAG_SUBCATEGORIES):
        return CATEGORY_BAGS
    if any(name in subcategory for name in SHOE_SUBCATEGORIES):
        return CATEGORY_SHOES
    return CATEGORY_CLOTHES


def _find_header_row(table: Sequence[Sequence[Any]]) -> int:
    """Перший рядок, де є хоча б один відомий заголовок."""
    for idx, row in enumerate(table[:HEADER_SEARCH_ROWS]):
        if any(_normalize_header(cell) in _HEADER_LOOKUP for cell in row):
            return idx
    raise SheetFetchError("Header row not found: no known column names in the first rows")


def rows_from_table(table: Sequence[Sequence[Any]]) -> List[Dict[str, str]]:
    """
    Таблиця (список рядків) -> список словників {поле: текст}.

    Невідомі колонки ігноруються, повністю порожні рядки пропускаються.
    Якщо дві колонки відповідають одному полю, перша непорожня виграє.
    """
    if not table:
        return []
    header_idx = _find_header_row(table)
    columns = [_HEADER_LOOKUP.get(_normalize_header(cell)) for cell in table[header_idx]]

    rows: List[Dict[str, str]] = []
    for raw in table[header_idx + 1:]:
        row: Dict[str, str] = {}
        for field_name, value in zip(columns, raw):
            if not field_name:
                continue
            text = _cell_text(value)
            if text and not row.get(field_name):
                row[field_name] = text
        if any(row.values()):
            rows.append(row)
    return rows


def map_row_to_record(row: Dict[str, Any]) -> Optional[ProductRecord]:
    """Рядок -> ProductRecord; None, якщо немає коду моделі."""
    model_ref = _cell_text(row.get('model_ref'))
    if not model_ref:
        return None
    subcategory = _cell_text(row.get('subcategory'))
    item_code = _cell_text(row.get('item_code'))
    return ProductRecord(
        model_ref=model_ref,
        color=_cell_text(row.get('color')),
        item_code=item_code,
        collection=_cell_text(row.get('collection')),
        category=category_for_subcategory(subcategory),
        subcategory=subcategory,
        brand=_cell_text(row.get('brand')),
        gender=_cell_text(row.get('gender')),
        supplier=_cell_text(row.get('supplier')),
        product_name=_cell_text(row.get('product_name')) or item_code or model_ref,
        size=_cell_text(row.get('size')),
        price_retail=parse_number(row.get('price_retail')),
        price_wholesale=parse_number(row.get('price_wholesale')),
        stock_quantity=int(parse_number(row.get('stock_quantity'))),
    )


def sheet_csv_url(sheet_id: str, sheet_name: str) -> str:
    return GVIZ_CSV_URL.format(sheet_id=quote(sheet_id, safe=''), sheet_name=quote(sheet_name, safe=''))


def sheet_names_from_setting(value: str) -> List[str]:
    """
    "ביגוד, תיקים,ביגוד" -> ["ביגוד", "תיקים"].

    Порожні назви відкидаються, повтори теж (порядок зберігається).
    """
    names: List[str] = []
    for name in (value or '').split(','):
        name = name.strip()
        if name and name not in names:
            names.append(name)
    return names


def _fetch_sheet_table(sheet_id: str, sheet_name: str) -> List[List[str]]:
    url = sheet_csv_url(sheet_id, sheet_name)
    timeout = getattr(settings, 'CATALOG_HTTP_TIMEOUT', 30)
    last_error = None
    for attempt in range(MAX_RETRIES):
        try:
            logger.debug("Fetching sheet %s (attempt %s/%s)", sheet_name, attempt + 1, MAX_RETRIES)
            response = requests.get(url, timeout=timeout)
            response.raise_for_status()
            break
        except requests.RequestException as exc:
            last_error = exc
            logger.warning("Sheet fetch failed (attempt %s): %s", attempt + 1, exc)
            if attempt < MAX_RETRIES - 1:
                time.sleep(RETRY_DELAY)
    else:
        raise SheetFetchError(f"Could not fetch sheet {sheet_name!r}: {last_error}")

    response.encoding = 'utf-8'
    text = response.text
    # приватна таблиця віддає HTML сторінку входу замість CSV
    if text.lstrip().lower().startswith(('<!doctype', '<html')):
        raise SheetFetchError(f"Sheet {sheet_name!r} is not publicly readable")
    return list(csv.reader(io.StringIO(text)))


def fetch_sheet_rows(sheet_id: Optional[str] = None, sheet_name: Optional[str] = None) -> List[Dict[str, str]]:
    """
    Завантажити аркуші Google Sheets як CSV і об'єднати їхні рядки.

    sheet_name (або settings.GOOGLE_SHEET_NAME) - одна назва або список
    через кому, наприклад "ביגוד,תיקים,נעליים". Кожен аркуш читається
    з MAX_RETRIES спробами. Аркуш, який не вдалося прочитати, пропускається
    з попередженням; SheetFetchError - тільки якщо не прочитано жодного.
    """
    sheet_id = sheet_id or getattr(settings, 'GOOGLE_SHEET_ID', '')
    sheet_names = sheet_names_from_setting(sheet_name or getattr(settings, 'GOOGLE_SHEET_NAME', ''))
    if not sheet_id or not sheet_names:
        raise SheetFetchError("GOOGLE_SHEET_ID and GOOGLE_SHEET_NAME must be configured")

    rows: List[Dict[str, str]] = []
    errors: List[str] = []
    for name in sheet_names:
        try:
            sheet_rows = rows_from_table(_fetch_sheet_table(sheet_id, name))
        except SheetFetchError as exc:
            logger.warning("Skipping sheet %s: %s", name, exc)
            errors.append(str(exc))
            continue
        logger.info("Fetched %d rows from sheet %s", len(sheet_rows), name)
        rows.extend(sheet_rows)

    if len(errors) == len(sheet_names):
        raise SheetFetchError("; ".join(errors))
    return rows


def read_workbook_rows(source, sheet_name: Optional[str] = None) -> List[Dict[str, str]]:
    """Прочитати рядки з .xlsx (шлях або файловий об'єкт)."""
    try:
        wb = openpyxl.load_workbook(source, read_only=True, data_only=True)
    except (OSError, KeyError, ValueError, InvalidFileException, zipfile.BadZipFile) as exc:
        raise SheetFetchError(f"Could not open workbook: {exc}") from exc
    try:
        if sheet_name:
            if sheet_name not in wb.sheetnames:
                raise SheetFetchError(f"Worksheet {sheet_name!r} not found")
            ws = wb[sheet_name]
        else:
            ws = wb.active
        table = [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()
    rows = rows_from_table(table)
    logger.info("Read %d rows from workbook", len(rows))
    return rows


def records_from_rows(rows: Iterable[Dict[str, Any]]) -> Tuple[List[ProductRecord], int]:
    """(записи, кількість пропущених рядків без коду моделі)"""
    records: List[ProductRecord] = []
    skipped = 0
    for row in rows:
        record = map_row_to_record(row)
        if record is None:
            skipped += 1
            continue
        records.append(record)
    return records, skipped


def sync_products_from_records(
    records: Iterable[ProductRecord],
    *,
    skipped: int = 0,
    dry_run: bool = False,
) -> ProductSyncStats:
    """
    Синхронізувати таблицю товарів з записами таблиці.

    - новий (model_ref, color) -> створюється
    - існуючий -> оновлюються всі поля з таблиці
    - товар, якого немає в таблиці, не видаляється: залишок обнуляється

    Повторний рядок з тим самим (model_ref, color) перезаписує попередній.
    """
    unique: Dict[Tuple[str, str], ProductRecord] = {}
    for record in records:
        unique[record.key] = record

    stats = ProductSyncStats(sheet_products=len(unique), skipped=skipped)
    synced_at = timezone.now()
    existing = {(p.model_ref, p.color): p for p in Product.objects.all()}

    to_create: List[Product] = []
    to_update: List[Product] = []
    for key, record in unique.items():
        product = existing.get(key)
        if product is None:
            to_create.append(Product(**record.as_fields(), last_synced_at=synced_at))
            continue
        for name, value in record.as_fields().items():
            setattr(product, name, value)
        product.last_synced_at = synced_at
        product.updated_at = synced_at
        to_update.append(product)

    to_zero: List[Product] = []
    for key, product in existing.items():
        if key in unique or product.stock_quantity == 0:
            continue
        product.stock_quantity = 0
        product.updated_at = synced_at
        to_zero.append(product)

    stats.created = len(to_create)
    stats.updated = len(to_update)
    stats.zeroed = len(to_zero)
    logger.info(
        "Product sync: %d in sheet, %d created, %d updated, %d zeroed, %d skipped",
        stats.sheet_products, stats.created, stats.updated, stats.zeroed, stats.skipped,
    )

    if dry_run:
        return stats

    with transaction.atomic():
        Product.objects.bulk_create(to_create, batch_size=WRITE_BATCH_SIZE)
        if to_update:
            Product.objects.bulk_update(
                to_update,
                RECORD_FIELDS + ['last_synced_at', 'updated_at'],
                batch_size=WRITE_BATCH_SIZE,
            )
        if to_zero:
            Product.objects.bulk_update(to_zero, ['stock_quantity', 'updated_at'], batch_size=WRITE_BATCH_SIZE)
    return stats
