from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from teamstock.buisness.validation.normalizers import clean_optional_str, clean_str, validate_enum
from teamstock.data.records.base import StoredRecord
from teamstock.utils.timestamps import from_iso, to_iso


NOTIFICATION_TYPES = ('info', 'warning', 'error', 'success')
NOTIFICATION_PRIORITIES = ('low', 'medium', 'high', 'critical')


@dataclass
class Notification(StoredRecord):
    ID_PREFIX = "notif"
    AUDIT_FIELDS = ("created_at",)

    title: str
    message: str
    type: str = 'info'
    priority: str = 'medium'
    read: bool = False
    created_at: datetime | None = None
    related_item_id: str | None = None
    related_item_type: str | None = None
    action_url: str | None = None
    id: str | None = None

    def __repr__(self):
        return f'<Notification {self.id}: {self.title}>'

    def stamp_created(self, now, actor):
        if self.created_at is None:
            self.created_at = now

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'message': self.message,
            'type': self.type,
            'priority': self.priority,
            'read': self.read,
            'created_at': to_iso(self.created_at),
            'related_item_id': self.related_item_id,
            'related_item_type': self.related_item_type,
            'action_url': self.action_url,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data.get('id'),
            title=clean_str(data.get('title')),
            message=clean_str(data.get('message')),
            type=validate_enum(data.get('type'), NOTIFICATION_TYPES, 'info'),
            priority=validate_enum(data.get('priority'), NOTIFICATION_PRIORITIES, 'medium'),
            read=bool(data.get('read', False)),
            created_at=from_iso(data.get('created_at')),
            related_item_id=clean_optional_str(data.get('related_item_id')),
            related_item_type=clean_optional_str(data.get('related_item_type')),
            action_url=clean_optional_str(data.get('action_url')),
        )
