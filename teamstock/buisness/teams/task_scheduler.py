"""
TeamScheduler - In-memory team roster and task board

Tasks and members live for the lifetime of the process only. Any status can
move to any other status; the scheduler keeps no transition rules.

Weeks start on Sunday. A task belongs to a week when its [start_date,
end_date] range intersects the week's [start, end] range, bounds inclusive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable

from teamstock.buisness.errors import RecordNotFound
from teamstock.config import SystemConfig
from teamstock.data.records.task import TASK_STATUSES, Task, TeamMember
from teamstock.logger import get_logger
from teamstock.utils.timestamps import to_iso, utcnow

logger = get_logger("teamstock.buisness.task_scheduler")

NOTE_TIMESTAMP_FORMAT = '%b %d, %H:%M'


@dataclass
class WeeklySchedule:
    week_start: datetime
    week_end: datetime
    tasks: list = field(default_factory=list)
    team_allocations: dict = field(default_factory=dict)

    def to_dict(self):
        return {
            'week_start': to_iso(self.week_start),
            'week_end': to_iso(self.week_end),
            'tasks': [task.to_dict() for task in self.tasks],
            'team_allocations': {
                member_id: [task.id for task in tasks]
                for member_id, tasks in self.team_allocations.items()
            },
        }


def week_bounds(day: datetime) -> tuple[datetime, datetime]:
    """Sunday 00:00 through Saturday 23:59:59.999999 of the week containing ``day``"""
    midnight = datetime(day.year, day.month, day.day)
    week_start = midnight - timedelta(days=(midnight.weekday() + 1) % 7)
    week_end = week_start + timedelta(days=7) - timedelta(microseconds=1)
    return week_start, week_end


class TeamScheduler:

    def __init__(self, config: SystemConfig, clock: Callable[[], datetime] = utcnow,
                 members: list | None = None, tasks: list | None = None):
        self.config = config
        self.clock = clock
        self._members: dict[str, TeamMember] = {}
        self._tasks: dict[str, Task] = {}
        for member in members or []:
            self.add_member(member)
        for task in tasks or []:
            self.add_task(task)

    # ---------------------------------------------------------------- roster

    def members(self) -> list[TeamMember]:
        return list(self._members.values())

    def get_member(self, member_id: str) -> TeamMember:
        member = self._members.get(member_id)
        if member is None:
            raise RecordNotFound('team-members', member_id)
        return member

    def add_member(self, member) -> TeamMember:
        if isinstance(member, dict):
            member = TeamMember.from_dict(member)
        if not member.name:
            raise ValueError("Team member name is required")
        if member.team and member.team not in self.config.teams:
            raise ValueError(f"Unknown team '{member.team}'")
        if member.id is None:
            member.assign_identity()
        self._members[member.id] = member
        logger.debug(f"Added team member {member.id} ({member.name})")
        return member

    # ----------------------------------------------------------------- tasks

    def tasks(self) -> list[Task]:
        return list(self._tasks.values())

    def get_task(self, task_id: str) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise RecordNotFound('tasks', task_id)
        return task

    def add_task(self, task) -> Task:
        """Add a task; new tasks start with no notes"""
        if isinstance(task, dict):
            task = Task.from_dict(dict(task, notes=[]))
        if not task.title:
            raise ValueError("Task title is required")
        if task.assignee_id is not None:
            self.get_member(task.assignee_id)
        if task.id is None:
            task.assign_identity()
        self._tasks[task.id] = task
        logger.info(f"Added task {task.id} '{task.title}'")
        return task

    def assign_task(self, task_id: str, member_id: str) -> Task:
        task = self.get_task(task_id)
        self.get_member(member_id)
        task.assignee_id = member_id
        logger.info(f"Assigned task {task_id} to {member_id}")
        return task

    def update_task_status(self, task_id: str, status: str, note: str | None = None) -> Task:
        """Set any status; a note is appended as "<Mon DD, HH:MM>: <note>" """
        if status not in TASK_STATUSES:
            raise ValueError(f"Unknown task status '{status}'. Expected one of: {', '.join(TASK_STATUSES)}")
        task = self.get_task(task_id)
        task.status = status
        if note:
            task.notes.append(f"{self.clock().strftime(NOTE_TIMESTAMP_FORMAT)}: {note}")
        logger.info(f"Task {task_id} moved to {status}")
        return task

    def get_tasks_by_quadrant(self, quadrant: str) -> list[Task]:
        return [task for task in self._tasks.values() if task.quadrant == quadrant]

    # ------------------------------------------------------------- schedules

    def get_weekly_schedule(self, day: datetime) -> WeeklySchedule:
        week_start, week_end = week_bounds(day)
        week_tasks = [task for task in self._tasks.values() if task.overlaps(week_start, week_end)]
        allocations = {
            member_id: [task for task in week_tasks if task.assignee_id == member_id]
            for member_id in self._members
        }
        return WeeklySchedule(week_start, week_end, week_tasks, allocations)

    def get_member_workload(self, member_id: str) -> float:
        """Open estimated hours as a percentage of the work week, clamped to [0, 100]"""
        self.get_member(member_id)
        hours = sum(
            task.estimated_hours for task in self._tasks.values()
            if task.assignee_id == member_id and not task.is_completed
        )
        week_hours = self.config.default_settings.work_week_hours
        return max(0.0, min(hours / week_hours * 100, 100.0))

    def workloads(self) -> dict[str, float]:
        return {member_id: self.get_member_workload(member_id) for member_id in self._members}
