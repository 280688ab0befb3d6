"""
Bill of materials records.

Line totals, shortfalls and the BOM total cost are derived on every read and
never stored, so they cannot drift from the quantities they are computed from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from teamstock.buisness.validation.normalizers import (
    clean_optional_str,
    clean_str,
    coerce_int,
    coerce_number,
    validate_enum,
)
from teamstock.config import DEFAULT_TEAMS
from teamstock.data.records.base import StoredRecord, nested_records, new_id
from teamstock.utils.timestamps import from_iso, to_iso


BOM_STATUSES = ('draft', 'active', 'completed', 'archived')


@dataclass
class BOMItem:
    item_name: str
    vendor: str = ''
    required_quantity: int = 0
    quantity: int = 0
    unit_price: float = 0.0
    description: str | None = None
    part_number: str | None = None
    category: str | None = None
    team: str | None = None
    inventory_item_id: str | None = None
    available_stock: int = 0
    notes: str | None = None
    id: str | None = None

    def __post_init__(self):
        if self.id is None:
            self.id = new_id("bomitem")

    @property
    def total_price(self) -> float:
        return self.unit_price * self.quantity

    @property
    def shortfall(self) -> int:
        return max(0, self.required_quantity - self.available_stock)

    def to_dict(self):
        return {
            'id': self.id,
            'item_name': self.item_name,
            'description': self.description,
            'part_number': self.part_number,
            'category': self.category,
            'required_quantity': self.required_quantity,
            'quantity': self.quantity,
            'unit_price': self.unit_price,
            'total_price': self.total_price,
            'vendor': self.vendor,
            'team': self.team,
            'inventory_item_id': self.inventory_item_id,
            'available_stock': self.available_stock,
            'shortfall': self.shortfall,
            'notes': self.notes,
        }

    @classmethod
    def from_dict(cls, data):
        # total_price and shortfall are derived; any stored values are ignored
        return cls(
            id=data.get('id'),
            item_name=clean_str(data.get('item_name')),
            description=clean_optional_str(data.get('description')),
            part_number=clean_optional_str(data.get('part_number')),
            category=clean_optional_str(data.get('category')),
            required_quantity=coerce_int(data.get('required_quantity', data.get('quantity'))),
            quantity=coerce_int(data.get('quantity')),
            unit_price=coerce_number(data.get('unit_price')),
            vendor=clean_str(data.get('vendor')),
            team=clean_optional_str(data.get('team')),
            inventory_item_id=clean_optional_str(data.get('inventory_item_id')),
            available_stock=coerce_int(data.get('available_stock')),
            notes=clean_optional_str(data.get('notes')),
        )


@dataclass
class BillOfMaterials(StoredRecord):
    """Named list of parts required to build an assembly"""

    ID_PREFIX = "bom"
    STAMP_FIELD = "last_updated"
    AUDIT_FIELDS = ("created_date", "last_updated", "created_by")

    name: str
    team: str = DEFAULT_TEAMS[0]
    items: list = field(default_factory=list)
    status: str = 'draft'
    created_by: str | None = None
    created_date: datetime | None = None
    last_updated: datetime | None = None
    id: str | None = None

    def __repr__(self):
        return f'<BillOfMaterials {self.id}: {self.name} ({len(self.items)} items)>'

    @property
    def total_cost(self) -> float:
        return sum(item.unit_price * item.quantity for item in self.items)

    @property
    def total_shortfall(self) -> int:
        return sum(item.shortfall for item in self.items)

    @property
    def is_active(self):
        return self.status == 'active'

    def stamp_created(self, now, actor):
        self.created_date = now
        self.last_updated = now
        if actor and not self.created_by:
            self.created_by = actor

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'team': self.team,
            'items': [item.to_dict() for item in self.items],
            'total_cost': self.total_cost,
            'status': self.status,
            'created_by': self.created_by,
            'created_date': to_iso(self.created_date),
            'last_updated': to_iso(self.last_updated),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data.get('id'),
            name=clean_str(data.get('name')),
            team=data.get('team') or DEFAULT_TEAMS[0],
            items=nested_records(data.get('items'), BOMItem, 'items'),
            status=validate_enum(data.get('status'), BOM_STATUSES, 'draft'),
            created_by=data.get('created_by'),
            created_date=from_iso(data.get('created_date')),
            last_updated=from_iso(data.get('last_updated')),
        )
