from teamstock.data.records.inventory_item import InventoryItem, PendingInventoryItem
from teamstock.data.repositories.base import CollectionRepository


class InventoryRepository(CollectionRepository):
    key = 'inventory'
    record_cls = InventoryItem

    def find_by_name_and_vendor(self, name: str, vendor: str):
        """Case-insensitive match on the logical item identity (name + vendor)"""
        name = (name or '').strip().lower()
        vendor = (vendor or '').strip().lower()
        for item in self.list():
            if item.name.strip().lower() == name and item.vendor.strip().lower() == vendor:
                return item
        return None

    def low_stock(self):
        return [item for item in self.list() if item.is_low_stock]


class PendingInventoryRepository(CollectionRepository):
    key = 'pending-inventory'
    record_cls = PendingInventoryItem

    def find_by_request(self, request_id: str):
        for item in self.list():
            if item.source_request_id == request_id:
                return item
        return None
