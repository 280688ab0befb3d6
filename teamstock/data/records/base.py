"""Shared behaviour for records persisted as JSON collections"""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:12]}"


class StoredRecord:
    """
    Mixin for dataclass records kept in a collection blob.

    Subclasses set ID_PREFIX and override the stamp hooks for their own audit
    fields. ``STAMP_FIELD`` names the attribute re-stamped on every update.
    """

    ID_PREFIX = "rec"
    STAMP_FIELD: str | None = None
    AUDIT_FIELDS: tuple = ()

    def assign_identity(self) -> None:
        self.id = new_id(self.ID_PREFIX)

    def stamp_created(self, now: datetime, actor: str | None) -> None:
        pass

    def stamp_updated(self, now: datetime, actor: str | None) -> None:
        if self.STAMP_FIELD:
            setattr(self, self.STAMP_FIELD, now)

    @property
    def last_stamp(self) -> datetime | None:
        return getattr(self, self.STAMP_FIELD) if self.STAMP_FIELD else None

    def business_fields(self) -> dict:
        """Serialized form without identity and audit stamps"""
        data = self.to_dict()
        data.pop('id', None)
        for name in self.AUDIT_FIELDS:
            data.pop(name, None)
        return data

    def to_dict(self) -> dict:  # pragma: no cover - implemented by every record
        raise NotImplementedError


def json_object(value, field: str) -> dict:
    """A nested JSON object; missing becomes empty, anything else is rejected"""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field} must be an object")
    return value


def nested_records(value, record_cls, field: str) -> list:
    """Hydrate a JSON array of objects with ``record_cls.from_dict``"""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field} must be a list")
    return [record_cls.from_dict(json_object(entry, field)) for entry in value]
