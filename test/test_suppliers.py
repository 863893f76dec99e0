from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200, http201, http400, http404


def create_test_supplier(api, **fields):
    supplier_to_create = {
        'name': 'Fresh Farm Foods',
        'debt': 1200,
        'contact': '555-123-4567',
        **fields
    }
    return api.create('/suppliers', supplier_to_create)


def test_create_supplier(api, memory_store):
    response = api.post('/suppliers', {'name': 'Quality Meats', 'debt': 2500, 'contact': '555-987-1234'})

    assert response.status_code == http201, f"status code not as expected"
    assert response.json_body['name'] == 'Quality Meats'
    assert response.json_body['debt'] == 2500
    assert response.json_body['contact'] == '555-987-1234'
    assert memory_store.get_record(keys_structure.suppliers_pk, response.json_body['id'])['name'] == 'Quality Meats'


def test_create_supplier_defaults(api):
    response = api.post('/suppliers')

    assert response.status_code == http201, f"status code not as expected"
    assert response.json_body['name'] == 'New Supplier'
    assert response.json_body['debt'] == 0
    assert response.json_body['contact'] is None
    assert response.json_body['createdAt']


def test_post_then_get_contains_new_supplier(api):
    first = create_test_supplier(api)
    second = create_test_supplier(api, name='Quality Meats')

    response = api.get('/suppliers')

    assert response.status_code == http200, f"status code not as expected"
    assert [supplier['id'] for supplier in response.json_body] == [first['id'], second['id']]
    assert first['id'] != second['id']


def test_get_supplier_by_id(api):
    supplier = create_test_supplier(api)

    response = api.get(f"/suppliers/{supplier['id']}")

    assert response.status_code == http200, f"status code not as expected"
    assert response.json_body['id'] == supplier['id']


def test_get_supplier_not_found(api):
    response = api.get('/suppliers/missing-id')

    assert response.status_code == http404, f"status code not as expected"


def test_update_supplier(api, memory_store):
    supplier = create_test_supplier(api)

    response = api.put(f"/suppliers/{supplier['id']}", {'debt': 300, 'name': 'Fresh Farm Foods Ltd'})

    assert response.status_code == http200, f"status code not as expected"
    assert response.json_body['debt'] == 300
    assert response.json_body['name'] == 'Fresh Farm Foods Ltd'
    assert response.json_body['contact'] == supplier['contact']
    db_record = memory_store.get_record(keys_structure.suppliers_pk, supplier['id'])
    assert db_record['name'] == 'Fresh Farm Foods Ltd'


def test_update_supplier_zero_debt_is_applied(api):
    supplier = create_test_supplier(api, debt=750)

    response = api.put(f"/suppliers/{supplier['id']}", {'debt': 0})

    assert response.json_body['debt'] == 0


def test_update_supplier_with_query_id(api):
    supplier = create_test_supplier(api)

    response = api.put('/suppliers', {'contact': '555-000-0000'}, query=f"id={supplier['id']}")

    assert response.status_code == http200, f"status code not as expected"
    assert response.json_body['contact'] == '555-000-0000'


def test_update_supplier_missing_id(api):
    response = api.put('/suppliers', {'debt': 10})

    assert response.status_code == http400, f"status code not as expected"
    assert response.json_body['error'] == 'Bad Request'


def test_update_missing_supplier_leaves_collection_unchanged(api):
    supplier = create_test_supplier(api)
    before = api.get('/suppliers').json_body

    response = api.put('/suppliers/missing-id', {'debt': 10})

    assert response.status_code == http404, f"status code not as expected"
    assert api.get('/suppliers').json_body == before
    assert before[0]['id'] == supplier['id']


def test_delete_supplier_twice(api):
    supplier = create_test_supplier(api)
    create_test_supplier(api, name='Quality Meats')

    response = api.delete(f"/suppliers/{supplier['id']}")

    assert response.status_code == http200, f"status code not as expected"
    assert response.json_body == {'message': 'Supplier successfully deleted', 'id': supplier['id']}
    remaining = api.get('/suppliers').json_body
    assert len(remaining) == 1
    assert remaining[0]['name'] == 'Quality Meats'

    response_again = api.delete(f"/suppliers/{supplier['id']}")
    assert response_again.status_code == http404, f"status code not as expected"
    assert len(api.get('/suppliers').json_body) == 1


def test_delete_supplier_with_query_id(api):
    supplier = create_test_supplier(api)

    response = api.delete('/suppliers', query=f"id={supplier['id']}")

    assert response.status_code == http200, f"status code not as expected"
    assert api.get('/suppliers').json_body == []


def test_delete_supplier_missing_id(api):
    response = api.delete('/suppliers')

    assert response.status_code == http400, f"status code not as expected"


def test_supplier_payment(api):
    supplier = create_test_supplier(api, debt=1200)

    response = api.post(f"/suppliers/{supplier['id']}/payment", {'amount': 200.25})

    assert response.status_code == http201, f"status code not as expected"
    assert response.json_body['type'] == 'expense'
    assert response.json_body['entityType'] == 'supplier'
    assert response.json_body['description'] == 'Payment to supplier: Fresh Farm Foods'
    assert api.get(f"/suppliers/{supplier['id']}").json_body['debt'] == 999.75


def test_supplier_payment_floors_debt(api):
    supplier = create_test_supplier(api, debt=50)

    api.post(f"/suppliers/{supplier['id']}/payment", {'amount': 80})

    assert api.get(f"/suppliers/{supplier['id']}").json_body['debt'] == 0


def test_malformed_body_is_bad_request(api):
    response = api.client.http.request('POST', '/suppliers', headers={'Content-Type': 'application/json'},
                                       body=b'{not json')

    assert response.status_code == http400, f"status code not as expected"
