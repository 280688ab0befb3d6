"""
BomManager - Bills of materials and their stock coverage

Responsibilities:
- Create BOMs and add or remove their items
- Link BOM items to stock records and refresh available stock and shortfall
- Summarize a BOM's cost and coverage
"""

from __future__ import annotations

from teamstock.buisness.errors import RecordNotFound
from teamstock.buisness.validation.normalizers import clean_optional_str, validate_enum, validate_team
from teamstock.config import SystemConfig
from teamstock.data.records.bom import BOM_STATUSES, BillOfMaterials, BOMItem
from teamstock.data.repositories import Repositories
from teamstock.logger import get_logger

logger = get_logger("teamstock.buisness.bom")


def _match_stock(bom_item: BOMItem, stock: list):
    name = bom_item.item_name.strip().lower()
    part_number = (bom_item.part_number or '').strip().lower()
    for item in stock:
        if item.name.strip().lower() == name:
            return item
        if part_number and (item.part_number or '').strip().lower() == part_number:
            return item
    return None


class BomManager:

    def __init__(self, repositories: Repositories, config: SystemConfig):
        self.repositories = repositories
        self.config = config

    def create_bom(self, data: dict, actor: str | None = None) -> BillOfMaterials:
        name = clean_optional_str(data.get('name'))
        if not name:
            raise ValueError("BOM name is required")

        bom = BillOfMaterials.from_dict({
            'name': name,
            'team': validate_team(data.get('team'), self.config.teams, self.config.default_settings.default_team),
            'status': data.get('status'),
            'items': data.get('items') or [],
        })
        for item in bom.items:
            self._check_item(item)

        bom = self.repositories.bom.add(bom, actor)
        logger.info(f"Created BOM {bom.id} '{bom.name}' for {bom.team} with {len(bom.items)} item(s)")
        return bom

    def set_status(self, bom_id: str, status: str, actor: str | None = None) -> BillOfMaterials:
        canonical = validate_enum(status, BOM_STATUSES)
        if canonical is None:
            raise ValueError(f"Unknown BOM status '{status}'. Expected one of: {', '.join(BOM_STATUSES)}")

        def apply(bom):
            bom.status = canonical

        return self.repositories.bom.modify(bom_id, apply, actor)

    def add_item(self, bom_id: str, item_data: dict, actor: str | None = None) -> BOMItem:
        item = BOMItem.from_dict(dict(item_data, id=None))
        self._check_item(item)

        def apply(bom):
            bom.items.append(item)

        self.repositories.bom.modify(bom_id, apply, actor)
        logger.info(f"Added {item.required_quantity} x {item.item_name} to BOM {bom_id}")
        return item

    def remove_item(self, bom_id: str, item_id: str, actor: str | None = None) -> BillOfMaterials:
        def apply(bom):
            remaining = [item for item in bom.items if item.id != item_id]
            if len(remaining) == len(bom.items):
                raise RecordNotFound('bom items', item_id)
            bom.items = remaining

        return self.repositories.bom.modify(bom_id, apply, actor)

    def sync_with_inventory(self, bom_id: str, actor: str | None = None) -> BillOfMaterials:
        """
        Link each BOM item to stock and refresh its available stock.

        Items are matched by case-insensitive name, or by part number when
        both sides have one. Unmatched items are unlinked with no stock.
        """
        stock = self.repositories.inventory.list()

        def apply(bom):
            for bom_item in bom.items:
                match = _match_stock(bom_item, stock)
                bom_item.inventory_item_id = match.id if match else None
                bom_item.available_stock = match.current_stock if match else 0

        bom = self.repositories.bom.modify(bom_id, apply, actor)
        logger.info(f"Synced BOM {bom_id} with inventory: shortfall {bom.total_shortfall} across {len(bom.items)} item(s)")
        return bom

    @staticmethod
    def summarize(bom: BillOfMaterials) -> dict:
        short_items = [item for item in bom.items if item.shortfall > 0]
        return {
            'id': bom.id,
            'name': bom.name,
            'team': bom.team,
            'status': bom.status,
            'item_count': len(bom.items),
            'total_cost': bom.total_cost,
            'total_shortfall': bom.total_shortfall,
            'items_short': len(short_items),
            'fully_stocked': not short_items,
        }

    @staticmethod
    def _check_item(item: BOMItem) -> None:
        if not item.item_name:
            raise ValueError("BOM item name is required")
