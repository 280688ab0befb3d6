"""
Domain exceptions.

Validation defaults are never raised; they are absorbed by the normalizers.
Everything here propagates to the caller and is mapped to an HTTP status by
the API error handlers.
"""

from __future__ import annotations


class TeamstockError(Exception):
    """Base class for all domain errors"""


class RecordNotFound(TeamstockError, LookupError):
    """A referenced record is absent from its collection"""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} record {record_id} not found")


class CSVImportError(TeamstockError, ValueError):
    """A CSV batch cannot be imported; nothing from the batch is kept"""


class ImportRequiredFieldMissing(CSVImportError):
    """A data row lacks a required column value"""

    def __init__(self, row: int, field: str):
        self.row = row
        self.field = field
        super().__init__(f"Row {row}: Missing required field ({field})")


class InvalidTransition(TeamstockError, ValueError):
    """A status change not allowed by the lifecycle rules"""


class ConcurrentModificationError(TeamstockError):
    """A collection changed between read and write"""

    def __init__(self, key: str, expected_version: int, actual_version: int):
        self.key = key
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Collection '{key}' was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})"
        )


class TransportFailure(TeamstockError):
    """The backing store could not be reached or refused the operation"""
