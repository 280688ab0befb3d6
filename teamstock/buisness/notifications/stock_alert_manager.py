"""
StockAlertManager - Raises notifications for items running out of stock

Thresholds come from the system configuration:
- at or below ``critical_stock_threshold``: error / critical
- at or below ``low_stock_threshold``: warning / high

An item that already has an unread stock alert is skipped, so repeated scans
do not pile up duplicate notifications.
"""

from __future__ import annotations

from teamstock.config import SystemConfig
from teamstock.data.records.inventory_item import InventoryItem
from teamstock.data.records.notification import Notification
from teamstock.data.repositories import Repositories
from teamstock.logger import get_logger

logger = get_logger("teamstock.buisness.stock_alerts")


class StockAlertManager:

    def __init__(self, repositories: Repositories, config: SystemConfig):
        self.repositories = repositories
        self.config = config

    def alert_for(self, item: InventoryItem) -> Notification | None:
        """The notification an item warrants right now, or None"""
        settings = self.config.default_settings
        if item.current_stock <= settings.critical_stock_threshold:
            return Notification(
                title='Critical Item Shortage',
                message=f"{item.name} is out of stock ({item.current_stock} units remaining)",
                type='error',
                priority='critical',
                related_item_id=item.id,
                related_item_type='inventory',
                action_url='/inventory',
            )
        if item.current_stock <= settings.low_stock_threshold:
            return Notification(
                title='Low Stock Alert',
                message=f"{item.name} is running low ({item.current_stock} units remaining)",
                type='warning',
                priority='high',
                related_item_id=item.id,
                related_item_type='inventory',
                action_url='/inventory',
            )
        return None

    def scan(self, actor: str | None = None) -> list[Notification]:
        """Create alerts for every item under a threshold; returns the new notifications"""
        notifications = self.repositories.notifications
        already_alerted = {
            n.related_item_id for n in notifications.unread()
            if n.related_item_type == 'inventory' and n.type in ('warning', 'error')
        }

        alerts = []
        for item in self.repositories.inventory.list():
            if item.id in already_alerted:
                continue
            alert = self.alert_for(item)
            if alert is not None:
                alerts.append(alert)

        if alerts:
            notifications.add_many(alerts, actor)
        logger.info(f"Stock scan raised {len(alerts)} alert(s)")
        return alerts
