"""
CSV import into the collections

The whole file is parsed before anything is written; a file that fails to
parse leaves the store untouched. A parsed batch is appended in a single
collection write.
"""

from __future__ import annotations

from teamstock.buisness.csv_transfer import csv_codec
from teamstock.buisness.csv_transfer.csv_schema import get_schema
from teamstock.config import SystemConfig
from teamstock.data.repositories import Repositories
from teamstock.logger import get_logger

logger = get_logger("teamstock.buisness.csv_import")


def import_csv(text: str, kind: str, repositories: Repositories, config: SystemConfig) -> list:
    """
    Parse ``text`` as a ``kind`` CSV file and append the records.

    Raises:
        CSVImportError: unknown or export-only kind, or no header row
        ImportRequiredFieldMissing: a row lacks a required value
    """
    schema = get_schema(kind)
    records = csv_codec.from_csv(text, schema, config)
    if not records:
        logger.info(f"CSV import of '{kind}' contained no data rows")
        return []

    added = repositories.by_key(schema.kind).add_many(records, csv_codec.CSV_IMPORT_ACTOR)
    logger.info(f"Imported {len(added)} '{kind}' record(s) from CSV")
    return added
