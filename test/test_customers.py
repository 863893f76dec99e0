from decimal import Decimal

from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200, http201, http400, http404


def create_test_customer(api, **fields):
    customer_to_create = {
        'name': 'Hotel Paradise',
        'type': 'hotel',
        'contact': '555-123-7890',
        'pendingAmount': 1200,
        **fields
    }
    return api.create('/customers', customer_to_create)


def test_create_customer(api, memory_store):
    response = api.post('/customers', {'name': 'Hotel Paradise', 'type': 'hotel', 'contact': '555-123-7890',
                                       'pendingAmount': 1200.5})
    response_body = response.json_body

    assert response.status_code == http201, f"status code not as expected"
    assert response_body['name'] == 'Hotel Paradise'
    assert response_body['type'] == 'hotel'
    assert response_body['contact'] == '555-123-7890'
    assert response_body['pendingAmount'] == 1200.5
    assert response_body['id']
    assert response_body['createdAt']

    db_record = memory_store.get_record(keys_structure.customers_pk, response_body['id'])
    assert db_record['pending_amount'] == Decimal('1200.50')
    assert db_record['type_'] == 'hotel'


def test_create_customer_defaults(api):
    response = api.post('/customers', {})

    assert response.status_code == http201, f"status code not as expected"
    assert response.json_body['name'] == 'New Customer'
    assert response.json_body['type'] == 'hotel'
    assert response.json_body['contact'] is None
    assert response.json_body['pendingAmount'] == 0


def test_create_customer_null_fields_get_defaults(api):
    response = api.post('/customers', {'name': None, 'pendingAmount': None, 'contact': None})

    assert response.json_body['name'] == 'New Customer'
    assert response.json_body['pendingAmount'] == 0
    assert response.json_body['contact'] is None


def test_create_customer_ignores_client_id_and_timestamp(api):
    response = api.post('/customers', {'id': 'my-own-id', 'createdAt': '2001-01-01T00:00:00'})

    assert response.json_body['id'] != 'my-own-id'
    assert not response.json_body['createdAt'].startswith('2001')


def test_get_customers_keeps_insertion_order(api):
    ids = [create_test_customer(api, name=f'customer {i}')['id'] for i in range(3)]

    response = api.get('/customers')

    assert response.status_code == http200, f"status code not as expected"
    assert [customer['id'] for customer in response.json_body] == ids
    assert len(set(ids)) == 3


def test_get_customer_by_id(api):
    customer = create_test_customer(api)

    response = api.get(f"/customers/{customer['id']}")

    assert response.status_code == http200, f"status code not as expected"
    assert response.json_body == customer


def test_get_customer_not_found(api):
    response = api.get('/customers/missing-id')

    assert response.status_code == http404, f"status code not as expected"
    assert response.json_body['error'] == 'Not Found'


def test_update_customer_applies_explicit_zero(api, memory_store):
    customer = create_test_customer(api, pendingAmount=500)

    response = api.put(f"/customers/{customer['id']}", {'pendingAmount': 0, 'contact': ''})

    assert response.status_code == http200, f"status code not as expected"
    assert response.json_body['pendingAmount'] == 0
    assert response.json_body['contact'] == ''
    assert response.json_body['name'] == customer['name']
    db_record = memory_store.get_record(keys_structure.customers_pk, customer['id'])
    assert db_record['pending_amount'] == Decimal('0.00')


def test_update_customer_keeps_created_at(api):
    customer = create_test_customer(api)

    response = api.put(f"/customers/{customer['id']}", {'createdAt': '2001-01-01T00:00:00+00:00', 'name': 'Renamed'})

    assert response.json_body['createdAt'] == customer['createdAt']
    assert response.json_body['name'] == 'Renamed'


def test_delete_customer(api):
    customer = create_test_customer(api)

    response = api.delete(f"/customers/{customer['id']}")

    assert response.status_code == http200, f"status code not as expected"
    assert api.get('/customers').json_body == []


def test_customer_payment(api):
    customer = create_test_customer(api, pendingAmount=1000)

    response = api.post(f"/customers/{customer['id']}/payment", {'amount': 400})

    assert response.status_code == http201, f"status code not as expected"
    assert response.json_body['type'] == 'income'
    assert response.json_body['amount'] == 400
    assert response.json_body['entityId'] == customer['id']
    assert response.json_body['entityType'] == 'customer'
    assert response.json_body['description'] == 'Payment from customer: Hotel Paradise'
    assert api.get(f"/customers/{customer['id']}").json_body['pendingAmount'] == 600
    assert len(api.get('/transactions').json_body) == 1


def test_customer_payment_floors_pending_amount(api):
    customer = create_test_customer(api, pendingAmount=100)

    api.post(f"/customers/{customer['id']}/payment", {'amount': 250, 'description': 'cash'})

    assert api.get(f"/customers/{customer['id']}").json_body['pendingAmount'] == 0
    assert api.get('/transactions').json_body[0]['description'] == 'cash'


def test_customer_payment_invalid_amount(api):
    customer = create_test_customer(api)

    for amount in (0, -5, 'abc', None):
        response = api.post(f"/customers/{customer['id']}/payment", {'amount': amount})
        assert response.status_code == http400, f"status code not as expected for {amount=}"
    assert api.get('/transactions').json_body == []


def test_customer_payment_unknown_customer(api):
    response = api.post('/customers/missing-id/payment', {'amount': 10})

    assert response.status_code == http404, f"status code not as expected"
    assert api.get('/transactions').json_body == []


def test_create_customer_ignores_undeclared_fields(api):
    response = api.post('/customers', {'name': 'Hotel Paradise', 'store': 'main branch', 'colour': 'blue'})

    assert response.status_code == http201, f"status code not as expected"
    assert response.json_body['name'] == 'Hotel Paradise'
    assert 'store' not in response.json_body
    assert 'colour' not in response.json_body
