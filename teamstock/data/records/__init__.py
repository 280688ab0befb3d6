"""
Record types persisted as JSON collections
"""

from teamstock.data.records.base import StoredRecord, new_id
from teamstock.data.records.inventory_item import InventoryItem, PendingInventoryItem
from teamstock.data.records.purchase_request import PurchaseRequest
from teamstock.data.records.vendor import Coordinates, PaymentMethod, Vendor, VendorLocation
from teamstock.data.records.bom import BillOfMaterials, BOMItem
from teamstock.data.records.notification import Notification
from teamstock.data.records.task import Task, TeamMember

__all__ = [
    'StoredRecord',
    'new_id',
    'InventoryItem',
    'PendingInventoryItem',
    'PurchaseRequest',
    'Coordinates',
    'PaymentMethod',
    'Vendor',
    'VendorLocation',
    'BillOfMaterials',
    'BOMItem',
    'Notification',
    'Task',
    'TeamMember',
]
