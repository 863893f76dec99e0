from chalicelib.constants.status_codes import http200, http201, http404


def create_test_inventory_item(api, **fields):
    item_to_create = {
        'type': 'chicken',
        'quantity': 50,
        'rate': 120,
        **fields
    }
    return api.create('/inventory', item_to_create)


def test_create_inventory_item(api):
    response = api.post('/inventory', {'type': 'goat', 'quantity': 12.5, 'rate': 650})

    assert response.status_code == http201, f"status code not as expected"
    assert response.json_body['type'] == 'goat'
    assert response.json_body['quantity'] == 12.5
    assert response.json_body['rate'] == 650
    assert response.json_body['updatedAt']


def test_create_inventory_item_defaults(api):
    response = api.post('/inventory', {})

    assert response.json_body['type'] == 'unknown'
    assert response.json_body['quantity'] == 0
    assert response.json_body['rate'] == 0


def test_get_inventory(api):
    item = create_test_inventory_item(api)

    response = api.get('/inventory')

    assert response.status_code == http200, f"status code not as expected"
    assert response.json_body == [item]


def test_update_inventory_item_refreshes_updated_at(api, memory_store):
    item = create_test_inventory_item(api)
    memory_store.update_record('inventory', item['id'], {'updated_at': '2020-01-01T00:00:00+00:00'})

    response = api.put(f"/inventory/{item['id']}", {'quantity': 0})

    assert response.status_code == http200, f"status code not as expected"
    assert response.json_body['quantity'] == 0
    assert response.json_body['rate'] == 120
    assert response.json_body['updatedAt'] != '2020-01-01T00:00:00+00:00'


def test_delete_inventory_item(api):
    item = create_test_inventory_item(api)

    assert api.delete(f"/inventory/{item['id']}").status_code == http200
    assert api.get(f"/inventory/{item['id']}").status_code == http404


def test_not_a_number_quantity_falls_back_to_zero(api):
    response = api.post('/inventory', {'type': 'goat', 'quantity': float('nan'), 'rate': float('inf')})

    assert response.status_code == http201, f"status code not as expected"
    assert response.json_body['quantity'] == 0
    assert response.json_body['rate'] == 0
    report = api.get('/reports')
    assert report.status_code == http200, f"status code not as expected"
    assert [item['id'] for item in report.json_body['lowStockItems']] == [response.json_body['id']]


def test_create_inventory_item_with_store_field(api):
    response = api.post('/inventory', {'type': 'goat', 'store': 'cold room'})

    assert response.status_code == http201, f"status code not as expected"
    assert response.json_body['type'] == 'goat'
