"""
CSV column schemas

Each schema is an ordered tuple of columns. The header text is the exact
column name in the file; ``field`` is the record attribute (or row key for
report rows) the column reads from and writes to.

Column kinds:
- text / optional_text: plain strings
- number / int / optional_int: numeric fields (see normalizers)
- date / optional_date: rendered as YYYY-MM-DD
- priority / urgency / status / team / quadrant: enumerations

``readonly`` columns are exported but ignored on import.
"""

from __future__ import annotations

from dataclasses import dataclass

from teamstock.buisness.errors import CSVImportError
from teamstock.data.records.inventory_item import InventoryItem
from teamstock.data.records.purchase_request import PurchaseRequest


@dataclass(frozen=True)
class CSVColumn:
    header: str
    field: str
    kind: str = 'text'
    required: bool = False
    readonly: bool = False


@dataclass(frozen=True)
class CSVSchema:
    kind: str
    columns: tuple
    record_cls: type | None = None

    @property
    def importable(self) -> bool:
        return self.record_cls is not None

    @property
    def headers(self) -> list[str]:
        return [column.header for column in self.columns]

    @property
    def required_columns(self) -> list[CSVColumn]:
        return [column for column in self.columns if column.required]


INVENTORY = CSVSchema(
    kind='inventory',
    record_cls=InventoryItem,
    columns=(
        CSVColumn('Item Name', 'name', required=True),
        CSVColumn('Category', 'category', required=True),
        CSVColumn('Vendor', 'vendor', required=True),
        CSVColumn('Unit Price', 'unit_price', 'number'),
        CSVColumn('Current Stock', 'current_stock', 'int'),
        CSVColumn('Quantity', 'quantity', 'int'),
        CSVColumn('Reorder Point', 'reorder_point', 'int'),
        CSVColumn('Location', 'location', 'optional_text'),
        CSVColumn('Part Number', 'part_number', 'optional_text'),
        CSVColumn('Min Stock', 'min_stock', 'optional_int'),
        CSVColumn('Description', 'description', 'optional_text'),
        CSVColumn('Priority', 'priority', 'priority'),
        CSVColumn('Eisenhower Quadrant', 'eisenhower_quadrant', 'quadrant'),
        CSVColumn('Last Updated', 'last_updated', 'date', readonly=True),
        CSVColumn('Updated By', 'updated_by', 'optional_text', readonly=True),
    ),
)

PURCHASE_REQUESTS = CSVSchema(
    kind='purchase-requests',
    record_cls=PurchaseRequest,
    columns=(
        CSVColumn('Item Name', 'item_name', required=True),
        CSVColumn('Title', 'title', 'optional_text'),
        CSVColumn('Description', 'description', 'optional_text'),
        CSVColumn('Type', 'type', 'optional_text'),
        CSVColumn('Unit Price', 'unit_price', 'number'),
        CSVColumn('Quantity', 'quantity', 'int'),
        CSVColumn('Urgency', 'urgency', 'urgency'),
        CSVColumn('Vendor', 'vendor', required=True),
        CSVColumn('Requested By', 'requested_by', required=True),
        CSVColumn('Requested Date', 'requested_date', 'date'),
        CSVColumn('Status', 'status', 'status'),
        CSVColumn('Approved By', 'approved_by', 'optional_text'),
        CSVColumn('Approved Date', 'approved_date', 'optional_date'),
        CSVColumn('Notes', 'notes', 'optional_text'),
        CSVColumn('Team', 'team', 'team'),
        CSVColumn('Eisenhower Quadrant', 'eisenhower_quadrant', 'quadrant'),
    ),
)

BOM = CSVSchema(
    kind='bom',
    columns=(
        CSVColumn('Item Name', 'item_name'),
        CSVColumn('Description', 'description', 'optional_text'),
        CSVColumn('Part Number', 'part_number', 'optional_text'),
        CSVColumn('Category', 'category', 'optional_text'),
        CSVColumn('Required Quantity', 'required_quantity', 'int'),
        CSVColumn('Quantity', 'quantity', 'int'),
        CSVColumn('Unit Price', 'unit_price', 'number'),
        CSVColumn('Total Price', 'total_price', 'number'),
        CSVColumn('Vendor', 'vendor'),
        CSVColumn('Team', 'team', 'optional_text'),
        CSVColumn('Inventory Item ID', 'inventory_item_id', 'optional_text'),
        CSVColumn('Available Stock', 'available_stock', 'int'),
        CSVColumn('Shortfall', 'shortfall', 'int'),
        CSVColumn('Notes', 'notes', 'optional_text'),
    ),
)

# Report exports; rows are dictionaries built by the report service.
# "{currency}" in a header is replaced with the configured currency.

PENDING_INVENTORY = CSVSchema(
    kind='pending-inventory',
    columns=(
        CSVColumn('Item Name', 'name'),
        CSVColumn('Category', 'category'),
        CSVColumn('Vendor', 'vendor'),
        CSVColumn('Unit Price ({currency})', 'unit_price', 'number'),
        CSVColumn('Quantity Ordered', 'quantity', 'int'),
        CSVColumn('Total Cost ({currency})', 'total_cost', 'number'),
        CSVColumn('Order Date', 'order_date', 'optional_date'),
    ),
)

REPLACEMENT_ITEMS = CSVSchema(
    kind='replacement-items',
    columns=(
        CSVColumn('Item Name', 'name'),
        CSVColumn('Category', 'category'),
        CSVColumn('Current Stock', 'current_stock', 'int'),
        CSVColumn('Min Stock', 'min_stock', 'int'),
        CSVColumn('Reorder Point', 'reorder_point', 'int'),
        CSVColumn('Recommended Order Qty', 'recommended_quantity', 'int'),
        CSVColumn('Unit Price ({currency})', 'unit_price', 'number'),
        CSVColumn('Total Cost ({currency})', 'total_cost', 'number'),
        CSVColumn('Vendor', 'vendor'),
        CSVColumn('Priority', 'priority', 'priority'),
    ),
)

BOM_REQUIREMENTS = CSVSchema(
    kind='bom-requirements',
    columns=(
        CSVColumn('Team', 'team'),
        CSVColumn('Item Name', 'item_name'),
        CSVColumn('Part Number', 'part_number', 'optional_text'),
        CSVColumn('Category', 'category', 'optional_text'),
        CSVColumn('Required Quantity', 'required_quantity', 'int'),
        CSVColumn('Available Stock', 'available_stock', 'int'),
        CSVColumn('Shortfall', 'shortfall', 'int'),
        CSVColumn('Unit Price ({currency})', 'unit_price', 'number'),
        CSVColumn('Total Cost ({currency})', 'total_cost', 'number'),
        CSVColumn('Vendor', 'vendor'),
    ),
)

SCHEMAS = {
    schema.kind: schema
    for schema in (INVENTORY, PURCHASE_REQUESTS, BOM, PENDING_INVENTORY, REPLACEMENT_ITEMS, BOM_REQUIREMENTS)
}


def get_schema(kind: str) -> CSVSchema:
    schema = SCHEMAS.get(kind)
    if schema is None:
        raise CSVImportError(f"Unknown CSV kind '{kind}'. Expected one of: {', '.join(SCHEMAS)}")
    return schema
