"""
Repositories over the persisted collections
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from teamstock.data.repositories.base import CollectionRepository
from teamstock.data.repositories.bom_repository import BomRepository
from teamstock.data.repositories.inventory_repository import InventoryRepository, PendingInventoryRepository
from teamstock.data.repositories.notification_repository import NotificationRepository
from teamstock.data.repositories.purchase_request_repository import PurchaseRequestRepository
from teamstock.data.repositories.vendor_repository import VendorRepository
from teamstock.data.store.blob_store import BlobStore
from teamstock.data.store.change_feed import ChangeFeed
from teamstock.utils.timestamps import utcnow


@dataclass
class Repositories:
    inventory: InventoryRepository
    pending_inventory: PendingInventoryRepository
    purchase_requests: PurchaseRequestRepository
    vendors: VendorRepository
    bom: BomRepository
    notifications: NotificationRepository
    feed: ChangeFeed

    def all(self) -> list[CollectionRepository]:
        return [
            self.inventory,
            self.pending_inventory,
            self.purchase_requests,
            self.vendors,
            self.bom,
            self.notifications,
        ]

    def by_key(self, key: str) -> CollectionRepository:
        for repository in self.all():
            if repository.key == key:
                return repository
        raise ValueError(f"Unknown collection '{key}'")


def build_repositories(store: BlobStore, feed: ChangeFeed | None = None,
                       clock: Callable[[], datetime] = utcnow) -> Repositories:
    """Create one repository per collection key, all sharing a store, feed and clock"""
    feed = feed or ChangeFeed()
    return Repositories(
        inventory=InventoryRepository(store, feed, clock),
        pending_inventory=PendingInventoryRepository(store, feed, clock),
        purchase_requests=PurchaseRequestRepository(store, feed, clock),
        vendors=VendorRepository(store, feed, clock),
        bom=BomRepository(store, feed, clock),
        notifications=NotificationRepository(store, feed, clock),
        feed=feed,
    )


__all__ = [
    'CollectionRepository',
    'InventoryRepository',
    'PendingInventoryRepository',
    'PurchaseRequestRepository',
    'VendorRepository',
    'BomRepository',
    'NotificationRepository',
    'Repositories',
    'build_repositories',
]
