import pytest

from teamstock.buisness.errors import InvalidTransition, RecordNotFound
from teamstock.buisness.inventory.pending_inventory_manager import PendingInventoryManager
from teamstock.buisness.purchasing.purchase_request_manager import PurchaseRequestManager
from teamstock.buisness.purchasing.status_validator import PurchaseRequestStatusValidator


@pytest.fixture
def manager(repositories, config):
    return PurchaseRequestManager(repositories, config)


def _submit(manager, **overrides):
    data = {
        'item_name': 'GPS module',
        'vendor': 'Flight Electronics Inc.',
        'unit_price': 3500,
        'quantity': 2,
        'urgency': 'high',
        'team': 'Telemetry',
    }
    data.update(overrides)
    return manager.submit(data, actor='Sam')


@pytest.mark.parametrize('current, new, allowed', [
    ('pending', 'approved', True),
    ('pending', 'rejected', True),
    ('approved', 'ordered', True),
    ('approved', 'rejected', True),
    ('pending', 'ordered', False),
    ('rejected', 'approved', False),
    ('ordered', 'rejected', False),
    ('unknown', 'approved', False),
])
def test_can_transition(current, new, allowed):
    assert PurchaseRequestStatusValidator.can_transition(current, new) is allowed


def test_require_transition_rejects_unknown_status():
    with pytest.raises(InvalidTransition):
        PurchaseRequestStatusValidator.require_transition('pending', 'shipped')


def test_submit_defaults(manager, clock):
    request = _submit(manager, status='approved', approved_by='Mallory')

    assert request.id.startswith('pr-')
    assert request.status == 'pending'
    assert request.approved_by is None
    assert request.requested_by == 'Sam'
    assert request.requested_date == clock.now
    assert request.total_cost == 7000


def test_submit_unknown_team_uses_default(manager, config):
    assert _submit(manager, team='Marketing').team == config.default_settings.default_team


@pytest.mark.parametrize('missing', ['item_name', 'vendor'])
def test_submit_requires_fields(manager, missing):
    with pytest.raises(ValueError):
        _submit(manager, **{missing: ''})


def test_approve(manager, repositories, clock):
    request = _submit(manager)
    clock.advance(hours=1)

    approved = manager.approve(request.id, 'Lead', notes='Budget ok')

    assert approved.status == 'approved'
    assert approved.approved_by == 'Lead'
    assert approved.approved_date == clock.now
    assert approved.notes == 'Budget ok'
    assert repositories.purchase_requests.get(request.id).status == 'approved'


def test_approve_requires_approver(manager):
    request = _submit(manager)
    with pytest.raises(ValueError):
        manager.approve(request.id, '  ')


def test_reject_appends_reason(manager):
    request = _submit(manager, notes='Needed for launch')
    rejected = manager.reject(request.id, 'Over budget', actor='Lead')
    assert rejected.status == 'rejected'
    assert rejected.notes == 'Needed for launch\nRejected by Lead: Over budget'


def test_rejected_request_cannot_be_approved(manager, repositories):
    request = _submit(manager)
    manager.reject(request.id)
    with pytest.raises(InvalidTransition):
        manager.approve(request.id, 'Lead')
    assert repositories.purchase_requests.get(request.id).status == 'rejected'


def test_ordered_request_is_final(manager, repositories, config):
    request = _submit(manager)
    manager.approve(request.id, 'Lead')
    PendingInventoryManager(repositories, config).move_to_pending(request.id)

    with pytest.raises(InvalidTransition):
        manager.reject(request.id)


def test_delete(manager, repositories):
    request = _submit(manager)
    manager.delete(request.id)
    assert repositories.purchase_requests.count() == 0
    with pytest.raises(RecordNotFound):
        manager.delete(request.id)
