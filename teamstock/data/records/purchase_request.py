from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from teamstock.buisness.validation.normalizers import (
    clean_optional_str,
    clean_str,
    coerce_int,
    coerce_number,
    coerce_optional_date,
    validate_quadrant,
    validate_status,
    validate_urgency,
)
from teamstock.config import DEFAULT_TEAMS
from teamstock.data.records.base import StoredRecord
from teamstock.utils.timestamps import from_iso, to_iso


@dataclass
class PurchaseRequest(StoredRecord):
    """A team's request to buy an item"""

    ID_PREFIX = "pr"
    STAMP_FIELD = "updated_at"
    AUDIT_FIELDS = ("updated_at",)

    item_name: str
    vendor: str
    requested_by: str
    unit_price: float = 0.0
    quantity: int = 1
    urgency: str = 'medium'
    status: str = 'pending'
    team: str = DEFAULT_TEAMS[0]
    title: str | None = None
    description: str | None = None
    type: str | None = None
    requested_date: datetime | None = None
    approved_by: str | None = None
    approved_date: datetime | None = None
    notes: str | None = None
    eisenhower_quadrant: str | None = None
    moved_to_pending: bool = False
    updated_at: datetime | None = None
    id: str | None = None

    def __repr__(self):
        return f'<PurchaseRequest {self.id}: {self.item_name} x{self.quantity} [{self.status}]>'

    @property
    def total_cost(self) -> float:
        return self.unit_price * self.quantity

    @property
    def is_pending(self):
        return self.status == 'pending'

    @property
    def is_approved(self):
        return self.status == 'approved'

    def stamp_created(self, now, actor):
        if self.requested_date is None:
            self.requested_date = now
        self.updated_at = now

    def append_note(self, note: str) -> None:
        self.notes = f"{self.notes}\n{note}" if self.notes else note

    def to_dict(self):
        return {
            'id': self.id,
            'item_name': self.item_name,
            'title': self.title,
            'description': self.description,
            'type': self.type,
            'unit_price': self.unit_price,
            'quantity': self.quantity,
            'urgency': self.urgency,
            'vendor': self.vendor,
            'requested_by': self.requested_by,
            'requested_date': to_iso(self.requested_date),
            'status': self.status,
            'approved_by': self.approved_by,
            'approved_date': to_iso(self.approved_date),
            'notes': self.notes,
            'team': self.team,
            'eisenhower_quadrant': self.eisenhower_quadrant,
            'moved_to_pending': self.moved_to_pending,
            'updated_at': to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data.get('id'),
            item_name=clean_str(data.get('item_name')),
            title=clean_optional_str(data.get('title')),
            description=clean_optional_str(data.get('description')),
            type=clean_optional_str(data.get('type')),
            unit_price=coerce_number(data.get('unit_price')),
            quantity=coerce_int(data.get('quantity', 1), floor=1),
            urgency=validate_urgency(data.get('urgency')),
            vendor=clean_str(data.get('vendor')),
            requested_by=clean_str(data.get('requested_by')),
            requested_date=coerce_optional_date(data.get('requested_date')),
            status=validate_status(data.get('status')),
            approved_by=clean_optional_str(data.get('approved_by')),
            approved_date=coerce_optional_date(data.get('approved_date')),
            notes=clean_optional_str(data.get('notes')),
            team=data.get('team') or DEFAULT_TEAMS[0],
            eisenhower_quadrant=validate_quadrant(data.get('eisenhower_quadrant')),
            moved_to_pending=bool(data.get('moved_to_pending', False)),
            updated_at=from_iso(data.get('updated_at')),
        )
