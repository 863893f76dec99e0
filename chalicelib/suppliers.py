from decimal import Decimal
from typing import Tuple

from chalice import Response

from chalicelib import transactions
from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.utils import app as utils_app, data as utils_data


class Supplier(EntityBase):
    pk = keys_structure.suppliers_pk
    sk = keys_structure.suppliers_sk
    display_name = 'Supplier'

    mutable_fields = ('name', 'debt', 'contact')

    def __init__(self, id_, store=None, **kwargs):
        EntityBase.__init__(self, id_, store)

        self.name: str = kwargs.get('name', 'New Supplier')
        self.debt: Decimal = utils_data.to_decimal(kwargs.get('debt', 0))
        self.contact: str = kwargs.get('contact')
        self.created_at: str = kwargs.get('created_at') or utils_data.now_iso()
        self.record_type = 'supplier'

    @classmethod
    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_record_payment(cls, request, store, supplier_id) -> Response:
        amount, description = transactions.parse_payment_body(request)
        supplier = cls.init_get_by_id(store, supplier_id)
        return transactions.record_payment(
            store, supplier,
            balance_field='debt',
            transaction_type=transactions.TRANSACTION_EXPENSE,
            amount=amount,
            description=description or f'Payment to supplier: {supplier.name}'
        )

    def _get_pk_sk(self) -> Tuple[str, str]:
        return self.pk, self.sk.format(supplier_id=self.id_)

    def _to_dict(self):
        return {
            'id_': self.id_,
            'name': self.name,
            'debt': self.debt,
            'contact': self.contact,
            'created_at': self.created_at
        }
