from teamstock.buisness.csv_transfer.csv_codec import (
    CSV_IMPORT_ACTOR,
    export_filename,
    format_value,
    from_csv,
    template,
    to_csv,
)
from teamstock.buisness.csv_transfer.csv_importer import import_csv
from teamstock.buisness.csv_transfer.csv_schema import SCHEMAS, CSVColumn, CSVSchema, get_schema

__all__ = [
    'CSV_IMPORT_ACTOR',
    'CSVColumn',
    'CSVSchema',
    'SCHEMAS',
    'export_filename',
    'format_value',
    'from_csv',
    'get_schema',
    'import_csv',
    'template',
    'to_csv',
]
