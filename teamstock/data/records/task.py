from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from teamstock.buisness.validation.normalizers import (
    clean_optional_str,
    clean_str,
    clean_str_list,
    coerce_date,
    coerce_number,
    validate_enum,
)
from teamstock.data.records.base import StoredRecord
from teamstock.utils.timestamps import to_iso


TASK_STATUSES = ('not-started', 'in-progress', 'review', 'completed')
TASK_PRIORITIES = ('low', 'medium', 'high', 'urgent')


@dataclass
class TeamMember(StoredRecord):
    ID_PREFIX = "tm"

    name: str
    role: str = ''
    team: str = ''
    skills: list = field(default_factory=list)
    id: str | None = None

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'role': self.role,
            'team': self.team,
            'skills': list(self.skills),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data.get('id'),
            name=clean_str(data.get('name')),
            role=clean_str(data.get('role')),
            team=clean_str(data.get('team')),
            skills=clean_str_list(data.get('skills')),
        )


@dataclass
class Task(StoredRecord):
    """
    A unit of team work scheduled over [start_date, end_date].

    ``notes`` is an append-only list of timestamped status notes.
    """

    ID_PREFIX = "task"

    title: str
    start_date: datetime
    end_date: datetime
    description: str = ''
    assignee_id: str | None = None
    status: str = 'not-started'
    priority: str = 'medium'
    estimated_hours: float = 0.0
    actual_hours: float | None = None
    notes: list = field(default_factory=list)
    dependencies: list = field(default_factory=list)
    category: str = ''
    quadrant: str = ''
    id: str | None = None

    def __post_init__(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        if self.status not in TASK_STATUSES:
            raise ValueError(f"Unknown task status '{self.status}'")

    def __repr__(self):
        return f'<Task {self.id}: {self.title} [{self.status}]>'

    @property
    def is_completed(self):
        return self.status == 'completed'

    def overlaps(self, start: datetime, end: datetime) -> bool:
        """True when the task's date range intersects [start, end], bounds inclusive"""
        return self.start_date <= end and self.end_date >= start

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'assignee_id': self.assignee_id,
            'status': self.status,
            'priority': self.priority,
            'estimated_hours': self.estimated_hours,
            'actual_hours': self.actual_hours,
            'start_date': to_iso(self.start_date),
            'end_date': to_iso(self.end_date),
            'notes': list(self.notes),
            'dependencies': list(self.dependencies),
            'category': self.category,
            'quadrant': self.quadrant,
        }

    @classmethod
    def from_dict(cls, data):
        start = coerce_date(data.get('start_date'))
        actual = data.get('actual_hours')
        return cls(
            id=data.get('id'),
            title=clean_str(data.get('title')),
            description=clean_str(data.get('description')),
            assignee_id=clean_optional_str(data.get('assignee_id')),
            status=validate_enum(data.get('status'), TASK_STATUSES, 'not-started'),
            priority=validate_enum(data.get('priority'), TASK_PRIORITIES, 'medium'),
            estimated_hours=coerce_number(data.get('estimated_hours')),
            actual_hours=coerce_number(actual) if actual is not None else None,
            start_date=start,
            end_date=coerce_date(data.get('end_date'), default=start),
            notes=clean_str_list(data.get('notes')),
            dependencies=clean_str_list(data.get('dependencies')),
            category=clean_str(data.get('category')),
            quadrant=clean_str(data.get('quadrant')),
        )
