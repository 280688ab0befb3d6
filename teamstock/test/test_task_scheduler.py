from datetime import datetime

import pytest

from teamstock.buisness.errors import RecordNotFound
from teamstock.buisness.teams.task_scheduler import TeamScheduler, week_bounds


@pytest.fixture
def scheduler(config, clock):
    scheduler = TeamScheduler(config, clock=clock)
    scheduler.add_member({'id': 'tm-1', 'name': 'Amina', 'role': 'Lead', 'team': 'Avionics'})
    scheduler.add_member({'id': 'tm-2', 'name': 'Brian', 'team': 'Telemetry'})
    return scheduler


def _task(scheduler, **overrides):
    data = dict(
        title='Wire flight computer',
        start_date='2026-10-19',
        end_date='2026-10-21',
        estimated_hours=8,
        assignee_id='tm-1',
        quadrant='important-urgent',
    )
    data.update(overrides)
    return scheduler.add_task(data)


def test_week_starts_on_sunday():
    start, end = week_bounds(datetime(2026, 10, 21, 15, 0))
    assert start == datetime(2026, 10, 18)
    assert end == datetime(2026, 10, 24, 23, 59, 59, 999999)
    assert week_bounds(datetime(2026, 10, 18))[0] == datetime(2026, 10, 18)


def test_add_member_validation(scheduler):
    with pytest.raises(ValueError):
        scheduler.add_member({'name': ''})
    with pytest.raises(ValueError):
        scheduler.add_member({'name': 'Zed', 'team': 'Marketing'})
    assert scheduler.add_member({'name': 'Zed'}).id.startswith('tm-')


def test_add_task_starts_without_notes(scheduler):
    task = _task(scheduler, notes=['carried over'])
    assert task.notes == []
    assert task.status == 'not-started'
    assert scheduler.get_task(task.id) is task


def test_add_task_for_unknown_member(scheduler):
    with pytest.raises(RecordNotFound):
        _task(scheduler, assignee_id='tm-404')


def test_end_before_start_is_rejected(scheduler):
    with pytest.raises(ValueError):
        _task(scheduler, start_date='2026-10-21', end_date='2026-10-19')


def test_status_update_appends_timestamped_note(scheduler, clock):
    task = _task(scheduler)
    scheduler.update_task_status(task.id, 'in-progress', 'Harness started')
    clock.advance(hours=2)
    scheduler.update_task_status(task.id, 'not-started')
    scheduler.update_task_status(task.id, 'review', 'Ready')

    assert task.status == 'review'
    assert task.notes == ['Oct 19, 09:30: Harness started', 'Oct 19, 11:30: Ready']


def test_status_update_errors(scheduler):
    task = _task(scheduler)
    with pytest.raises(ValueError):
        scheduler.update_task_status(task.id, 'blocked')
    with pytest.raises(RecordNotFound):
        scheduler.update_task_status('task-404', 'review')


def test_assign_task(scheduler):
    task = _task(scheduler)
    scheduler.assign_task(task.id, 'tm-2')
    assert task.assignee_id == 'tm-2'
    with pytest.raises(RecordNotFound):
        scheduler.assign_task(task.id, 'tm-404')


def test_tasks_by_quadrant(scheduler):
    urgent = _task(scheduler)
    _task(scheduler, title='Write docs', quadrant='not-important-not-urgent')
    assert scheduler.get_tasks_by_quadrant('important-urgent') == [urgent]
    assert scheduler.get_tasks_by_quadrant('important-not-urgent') == []


def test_workload_is_clamped_at_one_hundred(scheduler):
    _task(scheduler, estimated_hours=30)
    _task(scheduler, estimated_hours=25)
    assert scheduler.get_member_workload('tm-1') == 100.0


def test_workload_ignores_completed_tasks(scheduler):
    _task(scheduler, estimated_hours=10)
    done = _task(scheduler, estimated_hours=30)
    scheduler.update_task_status(done.id, 'completed')

    assert scheduler.get_member_workload('tm-1') == 25.0
    assert scheduler.workloads() == {'tm-1': 25.0, 'tm-2': 0.0}


def test_workload_for_unknown_member(scheduler):
    with pytest.raises(RecordNotFound):
        scheduler.get_member_workload('tm-404')


def test_weekly_schedule_includes_tasks_touching_the_bounds(scheduler):
    inside = _task(scheduler)
    ends_on_sunday = _task(scheduler, title='Before', start_date='2026-10-10', end_date='2026-10-18')
    starts_saturday = _task(scheduler, title='After', start_date='2026-10-24T23:00:00',
                            end_date='2026-10-30', assignee_id='tm-2')
    _task(scheduler, title='Last week', start_date='2026-10-10', end_date='2026-10-17T23:59:59')
    _task(scheduler, title='Next week', start_date='2026-10-25', end_date='2026-10-26')

    schedule = scheduler.get_weekly_schedule(datetime(2026, 10, 20))

    assert [task.id for task in schedule.tasks] == [inside.id, ends_on_sunday.id, starts_saturday.id]
    assert schedule.team_allocations['tm-2'] == [starts_saturday]
    assert schedule.to_dict()['team_allocations']['tm-1'] == [inside.id, ends_on_sunday.id]
    assert schedule.to_dict()['week_start'].startswith('2026-10-18')
