from datetime import datetime

from teamstock.buisness.errors import RecordNotFound
from teamstock.data.records.notification import Notification
from teamstock.data.repositories.base import CollectionRepository


class NotificationRepository(CollectionRepository):
    key = 'notifications'
    record_cls = Notification

    def list(self):
        """Newest first"""
        records = super().list()
        records.sort(key=lambda n: n.created_at or datetime.min, reverse=True)
        return records

    def unread(self):
        return [n for n in self.list() if not n.read]

    def unread_count(self) -> int:
        return len(self.unread())

    def mark_read(self, notification_id: str) -> Notification:
        def apply(snapshot):
            notification = snapshot.get(notification_id)
            if notification is None:
                raise RecordNotFound(self.key, notification_id)
            notification.read = True
            return notification

        return self._mutate(apply)

    def mark_all_read(self) -> int:
        """Mark every notification read; returns how many changed"""

        def apply(snapshot):
            changed = 0
            for notification in snapshot.values():
                if not notification.read:
                    notification.read = True
                    changed += 1
            return changed

        return self._mutate(apply)

    def has_unread_for(self, related_item_id: str, notification_type: str | None = None) -> bool:
        return any(
            n.related_item_id == related_item_id and (notification_type is None or n.type == notification_type)
            for n in self.unread()
        )
