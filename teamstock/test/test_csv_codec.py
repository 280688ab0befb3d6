from datetime import date, datetime

import pytest

from teamstock.buisness.csv_transfer import (
    CSV_IMPORT_ACTOR,
    export_filename,
    format_value,
    from_csv,
    import_csv,
    template,
    to_csv,
)
from teamstock.buisness.csv_transfer.csv_schema import BOM, INVENTORY, PURCHASE_REQUESTS, get_schema
from teamstock.buisness.errors import CSVImportError, ImportRequiredFieldMissing
from teamstock.data.records import InventoryItem, PurchaseRequest

INVENTORY_HEADER = ','.join(INVENTORY.headers)


def _inventory_item(**overrides):
    data = dict(
        id='inv-1',
        name='Carbon Fiber Sheets, 2mm',
        category='Materials',
        vendor='Aerospace Supplies Co.',
        unit_price=150.25,
        current_stock=5,
        quantity=12,
        reorder_point=8,
        min_stock=10,
        description='Body tube "outer" layer',
        location='Store A',
        part_number='CF-200',
        priority='urgent',
        eisenhower_quadrant='important-urgent',
        last_updated=datetime(2026, 10, 1, 8, 0),
        updated_by='Jane',
    )
    data.update(overrides)
    return InventoryItem(**data)


def test_format_value():
    assert format_value(None) == ''
    assert format_value(3.0) == '3'
    assert format_value(0.1) == '0.1'
    assert format_value(7) == '7'
    assert format_value(datetime(2026, 2, 3, 4, 5)) == '2026-02-03'
    assert format_value(date(2026, 2, 3)) == '2026-02-03'


def test_to_csv_writes_header_and_rows_in_schema_order(config):
    text = to_csv([_inventory_item()], INVENTORY, config)
    lines = text.splitlines()
    assert lines[0] == INVENTORY_HEADER
    assert lines[1].startswith('"Carbon Fiber Sheets, 2mm",Materials,Aerospace Supplies Co.,150.25,5,12,8,')
    assert lines[1].endswith(',urgent,important-urgent,2026-10-01,Jane')


def test_inventory_round_trip_keeps_business_fields(config):
    originals = [
        _inventory_item(),
        _inventory_item(id='inv-2', name='Bolt', min_stock=None, description=None, location=None,
                        part_number=None, eisenhower_quadrant=None, priority='low', unit_price=0.5),
    ]
    parsed = from_csv(to_csv(originals, INVENTORY, config), INVENTORY, config)

    assert len(parsed) == 2
    for original, record in zip(originals, parsed):
        assert record.business_fields() == original.business_fields()
        assert record.id != original.id
        assert record.updated_by == CSV_IMPORT_ACTOR


def test_purchase_request_round_trip_keeps_business_fields(config):
    originals = [
        PurchaseRequest(
            id='pr-1', item_name='Shock cord, 5m', vendor='Parachute Systems LLC', requested_by='Sam',
            unit_price=120.5, quantity=10, urgency='high', status='approved', team='Recovery',
            title='Recovery harness', description='Kevlar "tubular" cord', type='Material',
            requested_date=datetime(2026, 10, 1), approved_by='Lead', approved_date=datetime(2026, 10, 2),
            notes='Needed for launch\nRejected once: over budget', eisenhower_quadrant='important-urgent',
            updated_at=datetime(2026, 10, 2, 14, 5),
        ),
        PurchaseRequest(
            id='pr-2', item_name='Fins', vendor='Acme', requested_by='Jo',
            requested_date=datetime(2026, 10, 3),
        ),
    ]
    parsed = from_csv(to_csv(originals, PURCHASE_REQUESTS, config), PURCHASE_REQUESTS, config)

    assert len(parsed) == 2
    for original, record in zip(originals, parsed):
        assert record.business_fields() == original.business_fields()
        assert record.id != original.id


def test_round_trip_is_idempotent(config):
    once = from_csv(to_csv([_inventory_item()], INVENTORY, config), INVENTORY, config)
    twice = from_csv(to_csv(once, INVENTORY, config), INVENTORY, config)
    assert [r.business_fields() for r in twice] == [r.business_fields() for r in once]


def test_malformed_optional_values_fall_back_to_defaults(config):
    text = (
        INVENTORY_HEADER + '\n'
        'Widget,Tools,Acme,abc,abc,-4,,,,,,bogus,sideways,,\n'
    )
    [item] = from_csv(text, INVENTORY, config)
    assert item.priority == 'normal'
    assert item.current_stock == 0
    assert item.unit_price == 0
    assert item.quantity == 0
    assert item.eisenhower_quadrant is None
    assert item.min_stock is None


def test_missing_required_field_raises_with_row_and_header(config):
    text = (
        INVENTORY_HEADER + '\n'
        'Widget,Tools,Acme,1,1,1,1,,,,,,,,\n'
        'Gadget,Tools,,1,1,1,1,,,,,,,,\n'
    )
    with pytest.raises(ImportRequiredFieldMissing) as excinfo:
        from_csv(text, INVENTORY, config)
    assert excinfo.value.row == 2
    assert excinfo.value.field == 'Vendor'
    assert 'Row 2' in str(excinfo.value)


def test_missing_vendor_leaves_store_untouched(repositories, config):
    repositories.inventory.add(_inventory_item(id=None))
    text = INVENTORY_HEADER + '\nGadget,Tools,,1,1,1,1,,,,,,,,\n'

    with pytest.raises(ImportRequiredFieldMissing):
        import_csv(text, 'inventory', repositories, config)

    assert repositories.inventory.count() == 1


def test_blank_lines_are_skipped_and_row_numbers_count_data_rows(config):
    text = (
        INVENTORY_HEADER + '\n'
        '\n'
        'Widget,Tools,Acme,1,1,1,1,,,,,,,,\n'
        ',,,,,,,,,,,,,,\n'
        ',Tools,Acme,1,1,1,1,,,,,,,,\n'
    )
    with pytest.raises(ImportRequiredFieldMissing) as excinfo:
        from_csv(text, INVENTORY, config)
    assert excinfo.value.row == 2
    assert excinfo.value.field == 'Item Name'


def test_purchase_request_import_defaults(config):
    header = ','.join(PURCHASE_REQUESTS.headers)
    text = header + '\nSensor,,,,12.5,0,urgentish,Acme,Sam,,,,,,Marketing,\n'
    [request] = from_csv(text, PURCHASE_REQUESTS, config)
    assert isinstance(request, PurchaseRequest)
    assert request.quantity == 1
    assert request.urgency == 'medium'
    assert request.status == 'pending'
    assert request.team == config.default_settings.default_team
    assert isinstance(request.requested_date, datetime)


def test_export_only_schema_cannot_be_imported(config):
    with pytest.raises(CSVImportError):
        from_csv(','.join(BOM.headers) + '\n', BOM, config)


def test_missing_header_row_is_an_error(config):
    with pytest.raises(CSVImportError):
        from_csv('', INVENTORY, config)


def test_byte_order_mark_is_ignored(config):
    text = '\ufeff' + INVENTORY_HEADER + '\nWidget,Tools,Acme,1,1,1,1,,,,,,,,\n'
    [item] = from_csv(text, INVENTORY, config)
    assert item.name == 'Widget'


@pytest.mark.parametrize('kind', ['inventory', 'purchase-requests'])
def test_template_parses(kind, config):
    text = template(kind, config, today=date(2026, 10, 19))
    records = from_csv(text, get_schema(kind), config)
    assert len(records) == 1


def test_template_for_export_only_kind_is_rejected(config):
    with pytest.raises(CSVImportError):
        template('bom', config)


def test_unknown_kind():
    with pytest.raises(CSVImportError):
        get_schema('spaceships')


def test_export_filename():
    assert export_filename('inventory', date(2026, 10, 19)) == 'inventory-2026-10-19.csv'
    assert export_filename('replacement-items', date(2026, 1, 2)) == 'replacement-items-2026-01-02.csv'


def test_report_headers_use_configured_currency(config):
    text = to_csv([], get_schema('pending-inventory'), config)
    assert 'Unit Price (KSh)' in text.splitlines()[0]
