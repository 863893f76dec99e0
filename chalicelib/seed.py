import os
from uuid import uuid4

from chalicelib.customers import Customer
from chalicelib.inventory import InventoryItem
from chalicelib.orders import Order
from chalicelib.suppliers import Supplier
from chalicelib.transactions import Transaction, TRANSACTION_INCOME
from chalicelib.utils.logger import logger


def seed_enabled() -> bool:
    return os.environ.get('SEED_SAMPLE_DATA', 'true').lower() == 'true'


def seed_sample_data(store) -> None:
    """
    Puts one illustrative record into every collection of a fresh in-memory store.
    Persistent stores are never seeded.
    """
    if store.is_persistent or not seed_enabled():
        logger.info(f"seed_sample_data ::: skipped {store.is_persistent=}")
        return

    customer = Customer(str(uuid4()), store, name='Spice Restaurant', type_='restaurant',
                        contact='555-987-6543', pending_amount=2500)
    supplier = Supplier(str(uuid4()), store, name='Fresh Farm Foods', debt=1200, contact='555-123-4567')
    item = InventoryItem(str(uuid4()), store, type_='chicken', quantity=50, rate=120)
    order = Order(str(uuid4()), store, customer_id=customer.id_, total=1200, status_='completed', type_='takeaway',
                  items=[{'itemId': item.id_, 'quantity': 10, 'rate': 120}])
    transaction = Transaction(str(uuid4()), store, type_=TRANSACTION_INCOME, amount=1200, entity_id=customer.id_,
                              entity_type='customer', description='Payment received')

    for entity in (customer, supplier, item, order, transaction):
        entity._create_db_record()
    logger.info("seed_sample_data ::: sample records created")
