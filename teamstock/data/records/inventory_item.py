from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from teamstock.buisness.validation.normalizers import (
    clean_optional_str,
    clean_str,
    coerce_int,
    coerce_number,
    coerce_optional_int,
    validate_priority,
    validate_quadrant,
)
from teamstock.data.records.base import StoredRecord
from teamstock.utils.timestamps import from_iso, to_iso


@dataclass
class InventoryItem(StoredRecord):
    """Confirmed stock on hand"""

    ID_PREFIX = "inv"
    STAMP_FIELD = "last_updated"
    AUDIT_FIELDS = ("last_updated", "updated_by")

    name: str
    category: str
    vendor: str
    unit_price: float = 0.0
    current_stock: int = 0
    quantity: int = 0
    reorder_point: int = 0
    min_stock: int | None = None
    description: str | None = None
    location: str | None = None
    part_number: str | None = None
    priority: str = 'normal'
    eisenhower_quadrant: str | None = None
    last_updated: datetime | None = None
    updated_by: str | None = None
    id: str | None = None

    def __post_init__(self):
        if self.unit_price < 0:
            raise ValueError("unit_price cannot be negative")
        if self.current_stock < 0:
            raise ValueError("current_stock cannot be negative")
        if self.quantity < 0 or self.reorder_point < 0:
            raise ValueError("quantity and reorder_point cannot be negative")

    def __repr__(self):
        return f'<{type(self).__name__} {self.id}: {self.name} ({self.current_stock})>'

    @property
    def total_value(self) -> float:
        return self.unit_price * self.current_stock

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= max(self.min_stock or 0, self.reorder_point)

    def stamp_created(self, now, actor):
        self.last_updated = now
        if actor:
            self.updated_by = actor

    def stamp_updated(self, now, actor):
        self.stamp_created(now, actor)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'vendor': self.vendor,
            'unit_price': self.unit_price,
            'current_stock': self.current_stock,
            'quantity': self.quantity,
            'reorder_point': self.reorder_point,
            'min_stock': self.min_stock,
            'description': self.description,
            'location': self.location,
            'part_number': self.part_number,
            'priority': self.priority,
            'eisenhower_quadrant': self.eisenhower_quadrant,
            'last_updated': to_iso(self.last_updated),
            'updated_by': self.updated_by,
        }

    @classmethod
    def _common_kwargs(cls, data):
        return dict(
            id=data.get('id'),
            name=clean_str(data.get('name')),
            category=clean_str(data.get('category')),
            vendor=clean_str(data.get('vendor')),
            unit_price=coerce_number(data.get('unit_price')),
            current_stock=coerce_int(data.get('current_stock')),
            quantity=coerce_int(data.get('quantity')),
            reorder_point=coerce_int(data.get('reorder_point')),
            min_stock=coerce_optional_int(data.get('min_stock')),
            description=clean_optional_str(data.get('description')),
            location=clean_optional_str(data.get('location')),
            part_number=clean_optional_str(data.get('part_number')),
            priority=validate_priority(data.get('priority')),
            eisenhower_quadrant=validate_quadrant(data.get('eisenhower_quadrant')),
            last_updated=from_iso(data.get('last_updated')),
            updated_by=data.get('updated_by'),
        )

    @classmethod
    def from_dict(cls, data):
        """Create from a stored or submitted dictionary, normalizing every field"""
        return cls(**cls._common_kwargs(data))


@dataclass
class PendingInventoryItem(InventoryItem):
    """
    Goods ordered but not yet received.

    ``quantity`` holds the expected quantity; ``current_stock`` stays 0 until
    the item is reconciled into an InventoryItem.
    """

    ID_PREFIX = "pending"

    source_request_id: str | None = None
    inventory_item_id: str | None = None

    @property
    def expected_quantity(self) -> int:
        return self.quantity

    def to_dict(self):
        data = super().to_dict()
        data['source_request_id'] = self.source_request_id
        data['inventory_item_id'] = self.inventory_item_id
        return data

    @classmethod
    def from_dict(cls, data):
        kwargs = cls._common_kwargs(data)
        kwargs['source_request_id'] = data.get('source_request_id')
        kwargs['inventory_item_id'] = data.get('inventory_item_id')
        return cls(**kwargs)
