"""
Dashboard Service
Presentation service for the headline figures shown on the dashboard.
"""

from collections import defaultdict
from typing import Any, Dict

from teamstock.config import SystemConfig
from teamstock.data.repositories import Repositories


class DashboardService:
    """
    Service for dashboard statistics.

    Provides read-only methods for:
    - Inventory value and stock levels per category
    - Open work counts (pending requests, pending deliveries, active BOMs)
    - Recent unread notifications
    """

    def __init__(self, repositories: Repositories, config: SystemConfig):
        self.repositories = repositories
        self.config = config

    def stock_levels_by_category(self) -> Dict[str, Dict[str, Any]]:
        """
        Units on hand and their value, grouped by category.

        Returns:
            Mapping of category to ``{'items', 'units', 'value'}``
        """
        levels = defaultdict(lambda: {'items': 0, 'units': 0, 'value': 0.0})
        for item in self.repositories.inventory.list():
            level = levels[item.category or self.config.default_settings.default_category]
            level['items'] += 1
            level['units'] += item.current_stock
            level['value'] += item.total_value
        return dict(levels)

    def summary(self) -> Dict[str, Any]:
        """
        Dashboard summary.

        Returns:
            Dictionary of totals, counts and the most recent unread notifications
        """
        settings = self.config.default_settings
        inventory = self.repositories.inventory.list()
        notifications = self.repositories.notifications

        return {
            'currency': settings.currency,
            'total_inventory_value': sum(item.total_value for item in inventory),
            'inventory_item_count': len(inventory),
            'low_stock_count': sum(1 for item in inventory if item.current_stock <= settings.low_stock_threshold),
            'pending_request_count': len(self.repositories.purchase_requests.list_by_status('pending')),
            'pending_inventory_count': self.repositories.pending_inventory.count(),
            'active_bom_count': sum(1 for bom in self.repositories.bom.list() if bom.is_active),
            'stock_levels': self.stock_levels_by_category(),
            'unread_notification_count': notifications.unread_count(),
            'recent_notifications': [
                n.to_dict() for n in notifications.unread()[:settings.max_notifications_display]
            ],
        }
