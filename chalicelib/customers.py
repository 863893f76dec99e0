from decimal import Decimal
from typing import Tuple

from chalice import Response

from chalicelib import transactions
from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.utils import app as utils_app, data as utils_data


class Customer(EntityBase):
    pk = keys_structure.customers_pk
    sk = keys_structure.customers_sk
    display_name = 'Customer'

    mutable_fields = ('name', 'type_', 'contact', 'pending_amount')

    def __init__(self, id_, store=None, **kwargs):
        EntityBase.__init__(self, id_, store)

        self.name: str = kwargs.get('name', 'New Customer')
        self.type_: str = kwargs.get('type_', 'hotel')
        self.contact: str = kwargs.get('contact')
        self.pending_amount: Decimal = utils_data.to_decimal(kwargs.get('pending_amount', 0))
        self.created_at: str = kwargs.get('created_at') or utils_data.now_iso()
        self.record_type = 'customer'

    @classmethod
    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_record_payment(cls, request, store, customer_id) -> Response:
        amount, description = transactions.parse_payment_body(request)
        customer = cls.init_get_by_id(store, customer_id)
        return transactions.record_payment(
            store, customer,
            balance_field='pending_amount',
            transaction_type=transactions.TRANSACTION_INCOME,
            amount=amount,
            description=description or f'Payment from customer: {customer.name}'
        )

    def _get_pk_sk(self) -> Tuple[str, str]:
        return self.pk, self.sk.format(customer_id=self.id_)

    def _to_dict(self):
        return {
            'id_': self.id_,
            'name': self.name,
            'type_': self.type_,
            'contact': self.contact,
            'pending_amount': self.pending_amount,
            'created_at': self.created_at
        }
