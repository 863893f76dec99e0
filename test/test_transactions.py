from chalicelib.constants.status_codes import http200, http201


def test_create_transaction(api):
    response = api.post('/transactions', {
        'type': 'income',
        'amount': 1200,
        'entityId': 'customer-1',
        'entityType': 'customer',
        'description': 'Payment received'
    })

    assert response.status_code == http201, f"status code not as expected"
    assert response.json_body['type'] == 'income'
    assert response.json_body['amount'] == 1200
    assert response.json_body['entityId'] == 'customer-1'
    assert response.json_body['entityType'] == 'customer'
    assert response.json_body['description'] == 'Payment received'
    assert response.json_body['date']


def test_create_transaction_defaults(api):
    response = api.post('/transactions', {})

    assert response.json_body['type'] == 'expense'
    assert response.json_body['amount'] == 0
    assert response.json_body['entityId'] == ''
    assert response.json_body['entityType'] == 'customer'
    assert response.json_body['description'] is None


def test_get_transactions(api):
    ids = [api.create('/transactions', {'amount': amount})['id'] for amount in (1, 2, 3)]

    response = api.get('/transactions')

    assert response.status_code == http200, f"status code not as expected"
    assert [transaction['id'] for transaction in response.json_body] == ids


def test_non_numeric_amount_falls_back_to_zero(api):
    response = api.post('/transactions', {'amount': 'a lot'})

    assert response.status_code == http201, f"status code not as expected"
    assert response.json_body['amount'] == 0
