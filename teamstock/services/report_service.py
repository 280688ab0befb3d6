"""
Report Service
Presentation service building the rows of the export-only CSV reports.
"""

from typing import Any, Dict, List, Optional

from teamstock.buisness.csv_transfer import csv_codec
from teamstock.buisness.csv_transfer.csv_schema import get_schema
from teamstock.config import SystemConfig
from teamstock.data.repositories import Repositories
from teamstock.logger import get_logger

logger = get_logger("teamstock.services.reports")


def recommended_order_quantity(item) -> int:
    """Twice the reorder point or three times the minimum stock, less what is on hand"""
    return max(item.reorder_point * 2, (item.min_stock or 0) * 3) - item.current_stock


class ReportService:
    """
    Read-only report rows and CSV exports.

    Provides:
    - Newly purchased (pending inventory) rows
    - Replacement item rows with a recommended order quantity
    - BOM requirement rows across BOMs
    - A single ``export`` entry point for every CSV kind
    """

    def __init__(self, repositories: Repositories, config: SystemConfig):
        self.repositories = repositories
        self.config = config

    def pending_inventory_rows(self) -> List[Dict[str, Any]]:
        return [
            {
                'name': item.name,
                'category': item.category,
                'vendor': item.vendor,
                'unit_price': item.unit_price,
                'quantity': item.quantity,
                'total_cost': item.unit_price * item.quantity,
                'order_date': item.last_updated,
            }
            for item in self.repositories.pending_inventory.list()
        ]

    def replacement_item_rows(self) -> List[Dict[str, Any]]:
        """
        Items at or below their minimum stock or reorder point.

        Returns:
            One row per item with ``recommended_quantity`` and its ``total_cost``
        """
        rows = []
        for item in self.repositories.inventory.list():
            if item.current_stock > (item.min_stock or 0) and item.current_stock > item.reorder_point:
                continue
            recommended = recommended_order_quantity(item)
            rows.append({
                'name': item.name,
                'category': item.category,
                'current_stock': item.current_stock,
                'min_stock': item.min_stock or 0,
                'reorder_point': item.reorder_point,
                'recommended_quantity': recommended,
                'unit_price': item.unit_price,
                'total_cost': item.unit_price * recommended,
                'vendor': item.vendor,
                'priority': item.priority,
            })
        return rows

    def bom_requirement_rows(self, team: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Every BOM item across all BOMs, optionally for one team.

        Args:
            team: Only BOMs owned by this team

        Returns:
            Rows costed at unit price times required quantity
        """
        rows = []
        for bom in self.repositories.bom.list():
            if team and bom.team != team:
                continue
            for item in bom.items:
                rows.append({
                    'team': bom.team,
                    'item_name': item.item_name,
                    'part_number': item.part_number,
                    'category': item.category,
                    'required_quantity': item.required_quantity,
                    'available_stock': item.available_stock,
                    'shortfall': item.shortfall,
                    'unit_price': item.unit_price,
                    'total_cost': item.unit_price * item.required_quantity,
                    'vendor': item.vendor,
                })
        return rows

    def export(self, kind: str, bom_id: Optional[str] = None, team: Optional[str] = None) -> str:
        """
        CSV text for any export kind.

        Args:
            kind: Schema kind
            bom_id: Required for ``bom``; the BOM whose items are exported
            team: Optional team filter for ``bom-requirements``

        Returns:
            CSV text
        """
        schema = get_schema(kind)
        if kind == 'inventory':
            rows = self.repositories.inventory.list()
        elif kind == 'purchase-requests':
            rows = self.repositories.purchase_requests.list()
        elif kind == 'bom':
            if not bom_id:
                raise ValueError("A bom_id is required to export BOM items")
            rows = self.repositories.bom.get(bom_id).items
        elif kind == 'pending-inventory':
            rows = self.pending_inventory_rows()
        elif kind == 'replacement-items':
            rows = self.replacement_item_rows()
        else:
            rows = self.bom_requirement_rows(team)

        logger.info(f"Exporting '{kind}' CSV with {len(rows)} row(s)")
        return csv_codec.to_csv(rows, schema, self.config)
