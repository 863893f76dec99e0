import os
from datetime import datetime, timezone

from chalice import Chalice

from chalicelib import customers, suppliers, inventory, orders, transactions, reports, seed
from chalicelib.constants.constants import cors_config
from chalicelib.utils import store as utils_store
from chalicelib.utils.logger import log_request, set_request_id

app = Chalice(app_name='food-supply-manager')

app.debug = os.environ.get('STAGE', 'dev') != 'prod'


def current_store():
    return utils_store.get_store(initializer=seed.seed_sample_data)


@app.middleware('http')
def request_logging(event, get_response):
    set_request_id(event)
    log_request(event)
    return get_response(event)


# HEALTH CHECK
@app.route('/hello', methods=['GET'], cors=cors_config)
def hello():
    return {
        'message': 'Hello from the food supply manager API!',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'environment': os.environ.get('STAGE', 'development')
    }


# CUSTOMERS
@app.route('/customers', methods=['GET'], cors=cors_config)
def get_customers():
    return customers.Customer.endpoint_get_all(current_store())


@app.route('/customers', methods=['POST'], cors=cors_config)
def create_customer():
    return customers.Customer.endpoint_create(app.current_request, current_store())


@app.route('/customers', methods=['PUT'], cors=cors_config)
def update_customer_by_query():
    """
    id is taken from the query string (?id=)
    """
    return customers.Customer.endpoint_update(app.current_request, current_store())


@app.route('/customers', methods=['DELETE'], cors=cors_config)
def delete_customer_by_query():
    return customers.Customer.endpoint_delete(app.current_request, current_store())


@app.route('/customers/{customer_id}', methods=['GET'], cors=cors_config)
def get_customer_by_id(customer_id):
    return customers.Customer.endpoint_get_by_id(current_store(), customer_id)


@app.route('/customers/{customer_id}', methods=['PUT'], cors=cors_config)
def update_customer(customer_id):
    return customers.Customer.endpoint_update(app.current_request, current_store(), customer_id)


@app.route('/customers/{customer_id}', methods=['DELETE'], cors=cors_config)
def delete_customer(customer_id):
    return customers.Customer.endpoint_delete(app.current_request, current_store(), customer_id)


@app.route('/customers/{customer_id}/payment', methods=['POST'], cors=cors_config)
def record_customer_payment(customer_id):
    """
    payment received from a customer, lowers the pending amount
    """
    return customers.Customer.endpoint_record_payment(app.current_request, current_store(), customer_id)


# SUPPLIERS
@app.route('/suppliers', methods=['GET'], cors=cors_config)
def get_suppliers():
    return suppliers.Supplier.endpoint_get_all(current_store())


@app.route('/suppliers', methods=['POST'], cors=cors_config)
def create_supplier():
    return suppliers.Supplier.endpoint_create(app.current_request, current_store())


@app.route('/suppliers', methods=['PUT'], cors=cors_config)
def update_supplier_by_query():
    """
    id is taken from the query string (?id=)
    """
    return suppliers.Supplier.endpoint_update(app.current_request, current_store())


@app.route('/suppliers', methods=['DELETE'], cors=cors_config)
def delete_supplier_by_query():
    return suppliers.Supplier.endpoint_delete(app.current_request, current_store())


@app.route('/suppliers/{supplier_id}', methods=['GET'], cors=cors_config)
def get_supplier_by_id(supplier_id):
    return suppliers.Supplier.endpoint_get_by_id(current_store(), supplier_id)


@app.route('/suppliers/{supplier_id}', methods=['PUT'], cors=cors_config)
def update_supplier(supplier_id):
    return suppliers.Supplier.endpoint_update(app.current_request, current_store(), supplier_id)


@app.route('/suppliers/{supplier_id}', methods=['DELETE'], cors=cors_config)
def delete_supplier(supplier_id):
    return suppliers.Supplier.endpoint_delete(app.current_request, current_store(), supplier_id)


@app.route('/suppliers/{supplier_id}/payment', methods=['POST'], cors=cors_config)
def record_supplier_payment(supplier_id):
    """
    payment made to a supplier, lowers the debt
    """
    return suppliers.Supplier.endpoint_record_payment(app.current_request, current_store(), supplier_id)


# INVENTORY
@app.route('/inventory', methods=['GET'], cors=cors_config)
def get_inventory():
    return inventory.InventoryItem.endpoint_get_all(current_store())


@app.route('/inventory', methods=['POST'], cors=cors_config)
def create_inventory_item():
    return inventory.InventoryItem.endpoint_create(app.current_request, current_store())


@app.route('/inventory', methods=['PUT'], cors=cors_config)
def update_inventory_item_by_query():
    return inventory.InventoryItem.endpoint_update(app.current_request, current_store())


@app.route('/inventory', methods=['DELETE'], cors=cors_config)
def delete_inventory_item_by_query():
    return inventory.InventoryItem.endpoint_delete(app.current_request, current_store())


@app.route('/inventory/{item_id}', methods=['GET'], cors=cors_config)
def get_inventory_item_by_id(item_id):
    return inventory.InventoryItem.endpoint_get_by_id(current_store(), item_id)


@app.route('/inventory/{item_id}', methods=['PUT'], cors=cors_config)
def update_inventory_item(item_id):
    return inventory.InventoryItem.endpoint_update(app.current_request, current_store(), item_id)


@app.route('/inventory/{item_id}', methods=['DELETE'], cors=cors_config)
def delete_inventory_item(item_id):
    return inventory.InventoryItem.endpoint_delete(app.current_request, current_store(), item_id)


# ORDERS
@app.route('/orders', methods=['GET'], cors=cors_config)
def get_orders():
    return orders.Order.endpoint_get_all(current_store())


@app.route('/orders', methods=['POST'], cors=cors_config)
def create_order():
    return orders.Order.endpoint_create(app.current_request, current_store())


@app.route('/orders', methods=['PUT'], cors=cors_config)
def update_order_by_query():
    return orders.Order.endpoint_update(app.current_request, current_store())


@app.route('/orders', methods=['DELETE'], cors=cors_config)
def delete_order_by_query():
    return orders.Order.endpoint_delete(app.current_request, current_store())


@app.route('/orders/{order_id}', methods=['GET'], cors=cors_config)
def get_order_by_id(order_id):
    return orders.Order.endpoint_get_by_id(current_store(), order_id)


@app.route('/orders/{order_id}', methods=['PUT'], cors=cors_config)
def update_order(order_id):
    return orders.Order.endpoint_update(app.current_request, current_store(), order_id)


@app.route('/orders/{order_id}', methods=['DELETE'], cors=cors_config)
def delete_order(order_id):
    return orders.Order.endpoint_delete(app.current_request, current_store(), order_id)


# TRANSACTIONS
@app.route('/transactions', methods=['GET'], cors=cors_config)
def get_transactions():
    return transactions.Transaction.endpoint_get_all(current_store())


@app.route('/transactions', methods=['POST'], cors=cors_config)
def create_transaction():
    return transactions.Transaction.endpoint_create(app.current_request, current_store())


@app.route('/transactions', methods=['PUT'], cors=cors_config)
def update_transaction_by_query():
    return transactions.Transaction.endpoint_update(app.current_request, current_store())


@app.route('/transactions', methods=['DELETE'], cors=cors_config)
def delete_transaction_by_query():
    return transactions.Transaction.endpoint_delete(app.current_request, current_store())


@app.route('/transactions/{transaction_id}', methods=['GET'], cors=cors_config)
def get_transaction_by_id(transaction_id):
    return transactions.Transaction.endpoint_get_by_id(current_store(), transaction_id)


@app.route('/transactions/{transaction_id}', methods=['PUT'], cors=cors_config)
def update_transaction(transaction_id):
    return transactions.Transaction.endpoint_update(app.current_request, current_store(), transaction_id)


@app.route('/transactions/{transaction_id}', methods=['DELETE'], cors=cors_config)
def delete_transaction(transaction_id):
    return transactions.Transaction.endpoint_delete(app.current_request, current_store(), transaction_id)


# REPORTS
@app.route('/reports', methods=['GET'], cors=cors_config)
def get_report():
    """
    ?type=summary (default) | sales (&startDate=YYYY-MM-DD&endDate=YYYY-MM-DD) | debts
    """
    return reports.endpoint_get_report(app.current_request, current_store())


@app.route('/reports/export', methods=['GET'], cors=cors_config)
def export_report():
    """
    CSV download of the sales (default) or debts report
    """
    return reports.endpoint_export_report(app.current_request, current_store())
