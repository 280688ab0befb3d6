import pytest

from teamstock.build import current_context
from teamstock.debug.demo_data_manager import insert_demo_data


def test_insert_demo_data(app_context):
    context = current_context()

    summary = insert_demo_data(context)

    assert summary['inventory'] == {'status': 'inserted', 'count': 3}
    assert summary['vendors'] == {'status': 'inserted', 'count': 2}
    assert summary['purchase-requests'] == {'status': 'inserted', 'count': 2}
    assert summary['bom'] == {'status': 'inserted', 'count': 1}
    assert summary['team'] == {'status': 'inserted', 'count': 7}
    assert context.repositories.inventory.get('inv-demo-001').updated_by == 'System'
    assert context.scheduler.get_task('task-demo-001').assignee_id == 'tm-demo-002'


def test_second_run_skips_populated_collections(app_context):
    context = current_context()
    insert_demo_data(context)

    summary = insert_demo_data(context)

    assert summary['inventory']['status'] == 'skipped'
    assert summary['team']['status'] == 'skipped'
    assert context.repositories.inventory.count() == 3


def test_disabled(app_context):
    assert insert_demo_data(current_context(), enabled=False) == {}
    assert current_context().repositories.inventory.count() == 0


def test_missing_file(app_context, tmp_path):
    with pytest.raises(FileNotFoundError):
        insert_demo_data(current_context(), path=tmp_path / 'missing.json')
