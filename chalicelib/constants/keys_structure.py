customers_pk = 'customers'
customers_sk = '{customer_id}'

suppliers_pk = 'suppliers'
suppliers_sk = '{supplier_id}'

inventory_pk = 'inventory'
inventory_sk = '{item_id}'

orders_pk = 'orders'
orders_sk = '{order_id}'

transactions_pk = 'transactions'
transactions_sk = '{transaction_id}'
