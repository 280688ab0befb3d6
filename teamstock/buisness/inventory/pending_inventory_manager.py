"""
PendingInventoryManager - Receiving workflow for ordered goods

Lifecycle of a pending item:

    purchase request --move_to_pending--> pending receipt --confirm_receipt--> stock
                                            |      ^
                                            +------+ edit_pending

Responsibilities:
- Turn a purchase request into a pending inventory item and mark the request ordered
- Edit the mutable fields of a pending item while it awaits receipt
- Reconcile a pending item into stock using the actually received quantity
"""

from __future__ import annotations

import math

from teamstock.buisness.validation.normalizers import (
    clean_optional_str,
    coerce_int,
    coerce_number,
)
from teamstock.buisness.errors import TeamstockError
from teamstock.config import SystemConfig
from teamstock.data.records.inventory_item import InventoryItem, PendingInventoryItem
from teamstock.data.records.purchase_request import PurchaseRequest
from teamstock.data.repositories import Repositories
from teamstock.logger import get_logger

logger = get_logger("teamstock.buisness.pending_inventory")


MOVED_NOTE = '[Moved to pending inventory]'
MOVE_ACTOR = 'System - From Purchase Request'
RECEIPT_ACTOR = 'System - From Pending Inventory'

RECEIPT_CONDITIONS = ('good', 'damaged', 'partial')
EDITABLE_FIELDS = ('name', 'description', 'unit_price', 'quantity')

URGENCY_TO_PRIORITY = {
    'critical': 'urgent',
    'high': 'important',
    'medium': 'normal',
    'low': 'low',
}

# Checked in order; the first category whose keywords appear in the item name wins
CATEGORY_KEYWORDS = (
    ('Electronics', ('resistor', 'capacitor', 'sensor', 'circuit')),
    ('Fasteners', ('screw', 'bolt', 'nut', 'washer')),
    ('Materials', ('fiber', 'composite', 'material', 'sheet')),
    ('Recovery', ('parachute', 'cord', 'recovery')),
)


def category_for_item_name(item_name: str, config: SystemConfig) -> str:
    """Keyword-based category guess, limited to the configured categories"""
    name = (item_name or '').lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if category in config.categories and any(keyword in name for keyword in keywords):
            return category
    return config.default_settings.default_category


class PendingInventoryManager:
    """Moves goods from purchase requests through pending receipt into stock"""

    def __init__(self, repositories: Repositories, config: SystemConfig):
        self.repositories = repositories
        self.config = config

    def list_pending(self) -> list[PendingInventoryItem]:
        return self.repositories.pending_inventory.list()

    # ------------------------------------------------------------ move to pending

    def build_pending_item(self, request: PurchaseRequest, actor: str | None = None) -> PendingInventoryItem:
        """Derive the pending item for a purchase request without saving anything"""
        settings = self.config.default_settings
        quantity = request.quantity
        return PendingInventoryItem(
            name=request.item_name,
            description=request.description,
            category=category_for_item_name(request.item_name, self.config),
            vendor=request.vendor,
            unit_price=request.unit_price,
            current_stock=0,
            quantity=quantity,
            reorder_point=math.ceil(quantity * settings.reorder_point_multiplier),
            min_stock=math.ceil(quantity * settings.min_stock_multiplier),
            location=settings.default_location,
            priority=URGENCY_TO_PRIORITY.get(request.urgency, 'normal'),
            eisenhower_quadrant=request.eisenhower_quadrant,
            updated_by=actor or MOVE_ACTOR,
            source_request_id=request.id,
        )

    def move_to_pending(self, request_id: str, actor: str | None = None) -> PendingInventoryItem:
        """
        Create a pending inventory item from a purchase request.

        The pending item is added first; then the request is marked ordered,
        flagged as moved and gets a note appended. If marking the request fails
        the pending item is removed again, so the move can be retried.

        Args:
            request_id: Purchase request id
            actor: Acting user

        Returns:
            The new PendingInventoryItem

        Raises:
            RecordNotFound: unknown request
            ValueError: malformed request, or already moved
        """
        request = self.repositories.purchase_requests.get(request_id)
        self._check_well_formed(request)
        if request.moved_to_pending or self.repositories.pending_inventory.find_by_request(request_id):
            raise ValueError(f"Purchase request {request_id} was already moved to pending inventory")

        def mark_ordered(req):
            if req.moved_to_pending:
                raise ValueError(f"Purchase request {req.id} was already moved to pending inventory")
            req.status = 'ordered'
            req.moved_to_pending = True
            req.append_note(MOVED_NOTE)

        pending = self.repositories.pending_inventory.add(self.build_pending_item(request, actor), actor or MOVE_ACTOR)
        try:
            self.repositories.purchase_requests.modify(request_id, mark_ordered, actor)
        except (TeamstockError, ValueError):
            self.repositories.pending_inventory.delete(pending.id)
            logger.warning(f"Could not mark purchase request {request_id} ordered; removed pending item {pending.id}")
            raise

        logger.info(
            f"Moved purchase request {request_id} to pending inventory as {pending.id} "
            f"({pending.quantity} x {pending.name})"
        )
        return pending

    @staticmethod
    def _check_well_formed(request: PurchaseRequest) -> None:
        if not request.item_name:
            raise ValueError(f"Purchase request {request.id} has no item name")
        if not request.vendor:
            raise ValueError(f"Purchase request {request.id} has no vendor")
        if request.quantity < 0:
            raise ValueError(f"Purchase request {request.id} has a negative quantity")

    # ------------------------------------------------------------------- edit

    def edit_pending(self, pending_id: str, patch: dict, actor: str | None = None) -> PendingInventoryItem:
        """
        Replace name, description, unit price or expected quantity of a pending item.

        Raises:
            RecordNotFound: unknown pending id
            ValueError: a key outside the editable fields, or a blank name
        """
        unknown = sorted(set(patch) - set(EDITABLE_FIELDS))
        if unknown:
            raise ValueError(f"Cannot edit {', '.join(unknown)} on a pending item")

        if 'name' in patch and not clean_optional_str(patch['name']):
            raise ValueError("Pending item name cannot be blank")

        def apply(item):
            if 'name' in patch:
                item.name = clean_optional_str(patch['name'])
            if 'description' in patch:
                item.description = clean_optional_str(patch['description'])
            if 'unit_price' in patch:
                item.unit_price = coerce_number(patch['unit_price'])
            if 'quantity' in patch:
                item.quantity = coerce_int(patch['quantity'])

        item = self.repositories.pending_inventory.modify(pending_id, apply, actor)
        logger.info(f"Edited pending item {pending_id}: {sorted(patch)}")
        return item

    # ---------------------------------------------------------------- receive

    def confirm_receipt(self, pending_id: str, actual_quantity: int | None = None,
                        quality_notes: str | None = None, condition: str = 'good',
                        actor: str | None = None) -> InventoryItem:
        """
        Reconcile a pending item into stock.

        The received quantity is recorded as-is; it is not clamped to the
        expected quantity. The matching stock record (by carried inventory id,
        else by name + vendor, ignoring case) is incremented, or a new stock
        record is created; only then is the pending record removed. A failed
        stock write leaves the pending record in place.

        Args:
            pending_id: Pending inventory id
            actual_quantity: Received quantity (defaults to the expected quantity)
            quality_notes: Free-text receiving notes (logged only)
            condition: One of good, damaged, partial (logged only)
            actor: Acting user

        Returns:
            The created or updated InventoryItem

        Raises:
            RecordNotFound: unknown pending id
            ValueError: negative or non-integer quantity, unknown condition
        """
        if condition not in RECEIPT_CONDITIONS:
            raise ValueError(f"Unknown receipt condition '{condition}'. Expected one of: {', '.join(RECEIPT_CONDITIONS)}")

        pending = self.repositories.pending_inventory.get(pending_id)
        quantity = self._received_quantity(pending, actual_quantity)
        actor = actor or RECEIPT_ACTOR

        inventory = self.repositories.inventory
        existing = inventory.find(pending.inventory_item_id) if pending.inventory_item_id else None
        if existing is None:
            existing = inventory.find_by_name_and_vendor(pending.name, pending.vendor)

        if existing is not None:
            def increment(item):
                item.current_stock += quantity
                item.quantity += quantity
                item.unit_price = pending.unit_price

            item = inventory.modify(existing.id, increment, actor)
        else:
            item = inventory.add(self._new_stock_item(pending, quantity), actor)

        self.repositories.pending_inventory.delete(pending_id)

        logger.info(
            f"Received {quantity} of {pending.quantity} expected x {pending.name} into {item.id} "
            f"(condition={condition}, quality_notes={quality_notes!r}, by {actor})"
        )
        if quantity != pending.quantity:
            logger.warning(f"Received quantity {quantity} differs from expected {pending.quantity} for {pending.name}")
        return item

    @staticmethod
    def _received_quantity(pending: PendingInventoryItem, actual_quantity) -> int:
        if actual_quantity is None:
            return pending.expected_quantity
        if isinstance(actual_quantity, bool) or not isinstance(actual_quantity, (int, float)):
            raise ValueError(f"Received quantity must be a number, got {actual_quantity!r}")
        if actual_quantity < 0:
            raise ValueError("Received quantity cannot be negative")
        if isinstance(actual_quantity, float) and not actual_quantity.is_integer():
            raise ValueError("Received quantity must be a whole number")
        return int(actual_quantity)

    @staticmethod
    def _new_stock_item(pending: PendingInventoryItem, quantity: int) -> InventoryItem:
        return InventoryItem(
            name=pending.name,
            category=pending.category,
            vendor=pending.vendor,
            unit_price=pending.unit_price,
            current_stock=quantity,
            quantity=quantity,
            reorder_point=pending.reorder_point,
            min_stock=pending.min_stock,
            description=pending.description,
            location=pending.location,
            part_number=pending.part_number,
            priority=pending.priority,
            eisenhower_quadrant=pending.eisenhower_quadrant,
        )
