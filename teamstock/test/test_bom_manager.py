import pytest

from teamstock.buisness.errors import RecordNotFound
from teamstock.buisness.inventory.bom_manager import BomManager
from teamstock.data.records import InventoryItem


@pytest.fixture
def manager(repositories, config):
    return BomManager(repositories, config)


@pytest.fixture
def bom(manager):
    return manager.create_bom({
        'name': 'Flight computer',
        'team': 'Avionics',
        'items': [
            {'item_name': 'Barometer', 'required_quantity': 2, 'quantity': 2, 'unit_price': 900},
            {'item_name': 'Header pins', 'part_number': 'HP-40', 'required_quantity': 10, 'quantity': 10,
             'unit_price': 5.5},
        ],
    }, actor='Amina')


def test_create_bom(bom, clock):
    assert bom.id.startswith('bom-')
    assert bom.status == 'draft'
    assert bom.created_by == 'Amina'
    assert bom.created_date == clock.now
    assert bom.total_cost == 1855
    assert all(item.id.startswith('bomitem-') for item in bom.items)


def test_create_bom_validation(manager, config):
    with pytest.raises(ValueError):
        manager.create_bom({'name': '  '})
    with pytest.raises(ValueError):
        manager.create_bom({'name': 'Empty item', 'items': [{'item_name': ''}]})
    assert manager.create_bom({'name': 'Other', 'team': 'Marketing'}).team == config.default_settings.default_team


def test_set_status(manager, bom):
    assert manager.set_status(bom.id, 'ACTIVE').status == 'active'
    with pytest.raises(ValueError):
        manager.set_status(bom.id, 'launched')


def test_add_and_remove_items(manager, repositories, bom):
    item = manager.add_item(bom.id, {'item_name': 'Antenna', 'quantity': 1, 'unit_price': 45, 'id': 'forced'})
    assert item.id != 'forced'

    stored = repositories.bom.get(bom.id)
    assert [i.item_name for i in stored.items][-1] == 'Antenna'
    assert stored.total_cost == 1900

    updated = manager.remove_item(bom.id, item.id)
    assert len(updated.items) == 2
    with pytest.raises(RecordNotFound):
        manager.remove_item(bom.id, item.id)


def test_sync_with_inventory(manager, repositories, bom):
    barometer = repositories.inventory.add(
        InventoryItem(name='BAROMETER', category='Electronics', vendor='Acme', current_stock=1, quantity=1)
    )
    pins = repositories.inventory.add(
        InventoryItem(name='Pin header 2.54mm', category='Electronics', vendor='Acme', part_number='hp-40',
                      current_stock=25, quantity=25)
    )

    synced = manager.sync_with_inventory(bom.id)

    first, second = synced.items
    assert first.inventory_item_id == barometer.id
    assert first.available_stock == 1
    assert first.shortfall == 1
    assert second.inventory_item_id == pins.id
    assert second.shortfall == 0
    assert synced.total_shortfall == 1


def test_summary(manager, repositories, bom):
    summary = manager.summarize(repositories.bom.get(bom.id))
    assert summary['item_count'] == 2
    assert summary['total_cost'] == 1855
    assert summary['total_shortfall'] == 12
    assert summary['items_short'] == 2
    assert summary['fully_stocked'] is False


def test_unknown_bom(manager):
    with pytest.raises(RecordNotFound):
        manager.sync_with_inventory('bom-missing')
