"""
HTTP tests for the JSON API
"""
import io

import pytest

from teamstock.buisness.csv_transfer.csv_schema import INVENTORY

INVENTORY_HEADER = ','.join(INVENTORY.headers)


def _create_item(client, auth_headers, **overrides):
    data = {'name': 'Barometer', 'category': 'Electronics', 'vendor': 'Acme', 'unit_price': 900,
            'current_stock': 4, 'quantity': 4, 'reorder_point': 2}
    data.update(overrides)
    response = client.post('/api/inventory', json=data, headers=auth_headers)
    assert response.status_code == 201
    return response.get_json()


class TestAuth:

    @pytest.mark.parametrize('url', ['/api/inventory', '/api/dashboard', '/api/tasks'])
    def test_api_requires_token(self, client, url):
        response = client.get(url)
        assert response.status_code == 401
        assert response.get_json() == {'error': 'Authentication required'}

    def test_bad_token_is_rejected(self, client):
        response = client.get('/api/inventory', headers={'Authorization': 'Bearer not-a-token'})
        assert response.status_code == 401

    def test_login_me_logout(self, client, auth_headers):
        response = client.post('/api/auth/login', json={'username': 'tester', 'password': 'correct-horse-battery'})
        assert response.status_code == 200
        headers = {'Authorization': f"Bearer {response.get_json()['token']}"}

        me = client.get('/api/auth/me', headers=headers)
        assert me.get_json()['user']['username'] == 'tester'

        assert client.post('/api/auth/logout', headers=headers).status_code == 200
        assert client.get('/api/inventory', headers=headers).status_code == 401

    def test_login_failures(self, client, auth_headers):
        assert client.post('/api/auth/login', json={'username': 'tester'}).status_code == 400
        assert client.post('/api/auth/login', json={'username': 'tester', 'password': 'wrong-password'}).status_code == 401

    def test_register_validation(self, client, auth_headers):
        assert client.post('/api/auth/register', json={'username': 'x', 'password': 'short'}).status_code == 400
        duplicate = client.post('/api/auth/register', json={'username': 'tester', 'password': 'long enough'})
        assert duplicate.status_code == 409

    def test_security_headers(self, client):
        response = client.get('/api/inventory')
        assert response.headers['X-Frame-Options'] == 'DENY'
        assert response.headers['X-Content-Type-Options'] == 'nosniff'


class TestInventory:

    def test_crud(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        assert item['updated_by'] == 'tester'

        listed = client.get('/api/inventory', headers=auth_headers).get_json()
        assert [i['id'] for i in listed] == [item['id']]

        updated = client.patch(f"/api/inventory/{item['id']}", json={'current_stock': 1, 'id': 'other'},
                               headers=auth_headers).get_json()
        assert updated['id'] == item['id']
        assert updated['current_stock'] == 1
        assert updated['name'] == 'Barometer'
        assert updated['last_updated'] > item['last_updated']

        low = client.get('/api/inventory?low_stock=true', headers=auth_headers).get_json()
        assert [i['id'] for i in low] == [item['id']]

        assert client.delete(f"/api/inventory/{item['id']}", headers=auth_headers).status_code == 200
        missing = client.get(f"/api/inventory/{item['id']}", headers=auth_headers)
        assert missing.status_code == 404
        assert 'not found' in missing.get_json()['error']

    def test_create_requires_vendor(self, client, auth_headers):
        response = client.post('/api/inventory', json={'name': 'Widget', 'category': 'Tools'}, headers=auth_headers)
        assert response.status_code == 400

    def test_body_must_be_an_object(self, client, auth_headers):
        response = client.post('/api/inventory', json=['not', 'an', 'object'], headers=auth_headers)
        assert response.status_code == 400

    def test_non_string_text_fields_are_stringified(self, client, auth_headers):
        item = _create_item(client, auth_headers, name=123, vendor=456)
        assert item['name'] == '123'

        updated = client.patch(f"/api/inventory/{item['id']}", json={'category': 7}, headers=auth_headers)
        assert updated.status_code == 200
        assert updated.get_json()['category'] == '7'

    @pytest.mark.parametrize('body', [
        {'name': 'Acme', 'payment_methods': 'cash'},
        {'name': 'Acme', 'payment_methods': ['cash']},
        {'name': 'Acme', 'location': 'Nairobi'},
        {'name': 'Acme', 'location': {'coordinates': {'latitude': 'north'}}},
    ])
    def test_malformed_nested_values_are_bad_requests(self, client, auth_headers, body):
        response = client.post('/api/vendors', json=body, headers=auth_headers)
        assert response.status_code == 400
        assert 'error' in response.get_json()


class TestProcurementFlow:

    def test_request_to_stock(self, client, auth_headers):
        request = client.post('/api/purchase-requests', json={
            'item_name': 'Shock cord', 'vendor': 'Parachute Systems LLC', 'unit_price': 120,
            'quantity': 10, 'urgency': 'high', 'team': 'Recovery',
        }, headers=auth_headers).get_json()
        assert request['status'] == 'pending'
        assert request['requested_by'] == 'tester'

        approved = client.post(f"/api/purchase-requests/{request['id']}/approve", json={}, headers=auth_headers)
        assert approved.get_json()['approved_by'] == 'tester'

        moved = client.post(f"/api/purchase-requests/{request['id']}/move-to-pending", headers=auth_headers)
        assert moved.status_code == 201
        pending = moved.get_json()
        assert pending['category'] == 'Recovery'
        assert pending['priority'] == 'important'

        again = client.post(f"/api/purchase-requests/{request['id']}/move-to-pending", headers=auth_headers)
        assert again.status_code == 400

        confirmed = client.post(f"/api/pending-inventory/{pending['id']}/confirm",
                                json={'actual_quantity': 8, 'condition': 'partial'}, headers=auth_headers)
        assert confirmed.status_code == 200
        assert confirmed.get_json()['current_stock'] == 8

        assert client.get('/api/pending-inventory', headers=auth_headers).get_json() == []
        stored = client.get(f"/api/purchase-requests/{request['id']}", headers=auth_headers).get_json()
        assert stored['status'] == 'ordered'

    def test_invalid_transition_is_a_bad_request(self, client, auth_headers):
        request = client.post('/api/purchase-requests', json={'item_name': 'Fins', 'vendor': 'Acme'},
                              headers=auth_headers).get_json()
        client.post(f"/api/purchase-requests/{request['id']}/reject", json={'reason': 'No'}, headers=auth_headers)

        response = client.post(f"/api/purchase-requests/{request['id']}/approve", json={}, headers=auth_headers)
        assert response.status_code == 400

    def test_update_cannot_change_status(self, client, auth_headers):
        request = client.post('/api/purchase-requests', json={'item_name': 'Fins', 'vendor': 'Acme'},
                              headers=auth_headers).get_json()
        updated = client.put(f"/api/purchase-requests/{request['id']}",
                             json={'status': 'approved', 'quantity': 4}, headers=auth_headers).get_json()
        assert updated['status'] == 'pending'
        assert updated['quantity'] == 4


class TestCsv:

    def test_export_sets_attachment_filename(self, client, auth_headers):
        _create_item(client, auth_headers)
        response = client.get('/api/csv/inventory/export', headers=auth_headers)
        assert response.status_code == 200
        assert response.mimetype == 'text/csv'
        assert response.headers['Content-Disposition'].startswith('attachment; filename="inventory-')
        assert response.get_data(as_text=True).splitlines()[0] == INVENTORY_HEADER

    def test_import_upload(self, client, auth_headers):
        text = INVENTORY_HEADER + '\nWidget,Tools,Acme,2.5,3,3,1,,,,,,,,\n'
        response = client.post(
            '/api/csv/inventory/import',
            data={'file': (io.BytesIO(text.encode('utf-8')), 'inventory.csv')},
            content_type='multipart/form-data',
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.get_json()['imported'] == 1
        assert len(client.get('/api/inventory', headers=auth_headers).get_json()) == 1

    def test_import_missing_field_reports_row_and_column(self, client, auth_headers):
        text = INVENTORY_HEADER + '\nWidget,Tools,Acme,1,1,1,1,,,,,,,,\nGadget,Tools,,1,1,1,1,,,,,,,,\n'
        response = client.post('/api/csv/inventory/import', data=text.encode('utf-8'),
                               content_type='text/csv', headers=auth_headers)
        assert response.status_code == 400
        body = response.get_json()
        assert body['row'] == 2
        assert body['field'] == 'Vendor'
        assert client.get('/api/inventory', headers=auth_headers).get_json() == []

    def test_empty_upload(self, client, auth_headers):
        response = client.post('/api/csv/inventory/import', data=b'', headers=auth_headers)
        assert response.status_code == 400

    def test_unknown_kind(self, client, auth_headers):
        assert client.get('/api/csv/rockets/export', headers=auth_headers).status_code == 400

    def test_template(self, client, auth_headers):
        response = client.get('/api/csv/purchase-requests/template', headers=auth_headers)
        assert response.headers['Content-Disposition'] == 'attachment; filename="purchase-requests-template.csv"'


class TestBomAndNotifications:

    def test_bom_lifecycle(self, client, auth_headers):
        _create_item(client, auth_headers, name='Antenna', current_stock=1)
        bom = client.post('/api/bom', json={'name': 'Radio', 'team': 'Telemetry'}, headers=auth_headers).get_json()

        item = client.post(f"/api/bom/{bom['id']}/items", json={'item_name': 'antenna', 'required_quantity': 3},
                           headers=auth_headers)
        assert item.status_code == 201

        synced = client.post(f"/api/bom/{bom['id']}/sync", headers=auth_headers).get_json()
        assert synced['items'][0]['shortfall'] == 2

        updated = client.patch(f"/api/bom/{bom['id']}", json={'status': 'active', 'name': 'Radio v2'},
                               headers=auth_headers).get_json()
        assert updated['status'] == 'active'
        assert updated['name'] == 'Radio v2'

        summary = client.get(f"/api/bom/{bom['id']}/summary", headers=auth_headers).get_json()
        assert summary['total_shortfall'] == 2

    def test_stock_alerts_and_read_state(self, client, auth_headers):
        _create_item(client, auth_headers, current_stock=0)
        alerts = client.post('/api/notifications/stock-alerts', headers=auth_headers)
        assert alerts.status_code == 201
        assert len(alerts.get_json()) == 1

        listing = client.get('/api/notifications', headers=auth_headers).get_json()
        assert listing['unread_count'] == 1

        marked = client.post('/api/notifications/read-all', headers=auth_headers).get_json()
        assert marked == {'marked_read': 1}
        assert client.get('/api/notifications?unread=true', headers=auth_headers).get_json()['notifications'] == []


class TestTeamsAndSettings:

    def test_schedule_and_workload(self, client, auth_headers):
        member = client.post('/api/team-members', json={'name': 'Amina', 'team': 'Avionics'},
                             headers=auth_headers).get_json()
        task = client.post('/api/tasks', json={
            'title': 'Bench test', 'start_date': '2026-10-19', 'end_date': '2026-10-20',
            'estimated_hours': 50, 'assignee_id': member['id'],
        }, headers=auth_headers).get_json()

        workload = client.get(f"/api/team-members/{member['id']}/workload", headers=auth_headers).get_json()
        assert workload['workload'] == 100.0

        schedule = client.get('/api/schedule?date=2026-10-22', headers=auth_headers).get_json()
        assert schedule['team_allocations'][member['id']] == [task['id']]

        response = client.post(f"/api/tasks/{task['id']}/status", json={'status': 'done'}, headers=auth_headers)
        assert response.status_code == 400
        assert client.get('/api/tasks/task-missing', headers=auth_headers).status_code == 404

    def test_settings(self, client, auth_headers):
        response = client.post('/api/settings/locations', json={'value': 'Hangar'}, headers=auth_headers)
        assert 'Hangar' in response.get_json()['locations']

        response = client.delete('/api/settings/locations/Hangar', headers=auth_headers)
        assert 'Hangar' not in response.get_json()['locations']

        assert client.post('/api/settings/colours', json={'value': 'red'}, headers=auth_headers).status_code == 400

    def test_dashboard(self, client, auth_headers):
        _create_item(client, auth_headers)
        summary = client.get('/api/dashboard', headers=auth_headers).get_json()
        assert summary['inventory_item_count'] == 1
        assert summary['total_inventory_value'] == 3600
