"""
CSV Codec

Bidirectional mapping between a CSVSchema and the record types.

Import is best-effort for every optional field (malformed values fall back to
the normalizer defaults) but all-or-nothing for required columns: the first
data row missing a required value raises ImportRequiredFieldMissing and no
record from the batch is returned.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Mapping
from datetime import date, datetime
from typing import Iterable

from teamstock.buisness.csv_transfer.csv_schema import CSVSchema, get_schema
from teamstock.buisness.errors import CSVImportError, ImportRequiredFieldMissing
from teamstock.buisness.validation.normalizers import coerce_date, validate_team
from teamstock.config import SystemConfig
from teamstock.data.records.inventory_item import InventoryItem
from teamstock.logger import get_logger
from teamstock.utils.timestamps import utcnow

logger = get_logger("teamstock.buisness.csv_transfer")

CSV_IMPORT_ACTOR = 'CSV Import'
DATE_FORMAT = '%Y-%m-%d'


def format_value(value) -> str:
    """Render one cell: None is empty, dates are YYYY-MM-DD, integral numbers have no decimal point"""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (datetime, date)):
        return value.strftime(DATE_FORMAT)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return str(value)


def _cell(record, field):
    if isinstance(record, Mapping):
        return record.get(field)
    return getattr(record, field)


def _header(column, config: SystemConfig | None) -> str:
    if '{currency}' not in column.header:
        return column.header
    currency = config.default_settings.currency if config else SystemConfig().default_settings.currency
    return column.header.format(currency=currency)


def to_csv(records: Iterable, schema: CSVSchema, config: SystemConfig | None = None) -> str:
    """
    Serialize records in schema column order.

    Args:
        records: Record objects, or dictionaries keyed by column field
        schema: Column schema
        config: Used for currency placeholders in report headers

    Returns:
        CSV text with a header row and one row per record
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow([_header(column, config) for column in schema.columns])
    count = 0
    for record in records:
        writer.writerow([format_value(_cell(record, column.field)) for column in schema.columns])
        count += 1
    logger.debug(f"Serialized {count} '{schema.kind}' row(s) to CSV")
    return buffer.getvalue()


def from_csv(text: str, schema: CSVSchema, config: SystemConfig) -> list:
    """
    Parse CSV text into new records.

    Every returned record has a fresh identity. Nothing is persisted here; the
    caller adds the batch to a repository.

    Raises:
        CSVImportError: export-only schema or missing header row
        ImportRequiredFieldMissing: a data row lacks a required value
    """
    if not schema.importable:
        raise CSVImportError(f"'{schema.kind}' CSV files are export-only")

    reader = csv.DictReader(io.StringIO((text or '').lstrip('\ufeff')))
    if not reader.fieldnames:
        raise CSVImportError("CSV file has no header row")
    reader.fieldnames = [name.strip() for name in reader.fieldnames]

    records = []
    row_number = 0
    for raw in reader:
        values = {key: (value or '').strip() for key, value in raw.items() if isinstance(key, str)}
        if not any(values.values()):
            continue
        row_number += 1

        for column in schema.required_columns:
            if not values.get(column.header):
                logger.warning(f"CSV import of '{schema.kind}' aborted: row {row_number} missing {column.header}")
                raise ImportRequiredFieldMissing(row_number, column.header)

        records.append(_build_record(schema, values, config))

    logger.info(f"Parsed {len(records)} '{schema.kind}' record(s) from CSV")
    return records


def _build_record(schema: CSVSchema, values: dict, config: SystemConfig):
    data = {}
    for column in schema.columns:
        if column.readonly:
            continue
        raw = values.get(column.header, '')
        if column.kind == 'date':
            raw = coerce_date(raw)
        elif column.kind == 'team':
            raw = validate_team(raw, config.teams, config.default_settings.default_team)
        data[column.field] = raw

    record = schema.record_cls.from_dict(data)
    record.assign_identity()
    if isinstance(record, InventoryItem):
        record.last_updated = utcnow()
        record.updated_by = CSV_IMPORT_ACTOR
    return record


def _template_row(kind: str, config: SystemConfig, today: date) -> dict:
    defaults = config.default_settings
    if kind == 'inventory':
        return {
            'name': 'Example Component',
            'category': config.categories[0] if config.categories else defaults.default_category,
            'vendor': 'Example Vendor',
            'unit_price': 25.5,
            'current_stock': 100,
            'quantity': 100,
            'reorder_point': 20,
            'location': defaults.default_location,
            'part_number': 'EXM-001',
            'min_stock': 10,
            'description': 'Example component description',
            'priority': 'normal',
            'eisenhower_quadrant': 'important-not-urgent',
            'last_updated': today,
            'updated_by': 'System',
        }
    if kind == 'purchase-requests':
        return {
            'item_name': 'Example Item',
            'title': 'Purchase Request Title',
            'description': 'Item description',
            'type': 'Component',
            'unit_price': 15.75,
            'quantity': 5,
            'urgency': 'medium',
            'vendor': 'Example Vendor',
            'requested_by': 'John Doe',
            'requested_date': today,
            'status': 'pending',
            'approved_by': None,
            'approved_date': None,
            'notes': 'Additional notes',
            'team': defaults.default_team,
            'eisenhower_quadrant': 'important-not-urgent',
        }
    raise CSVImportError(f"No import template for '{kind}'")


def template(kind: str, config: SystemConfig, today: date | None = None) -> str:
    """Header plus one example row that ``from_csv`` accepts"""
    schema = get_schema(kind)
    row = _template_row(schema.kind, config, today or utcnow().date())
    return to_csv([row], schema, config)


def export_filename(kind: str, today: date | None = None) -> str:
    schema = get_schema(kind)
    today = today or utcnow().date()
    return f"{schema.kind}-{today.strftime(DATE_FORMAT)}.csv"
