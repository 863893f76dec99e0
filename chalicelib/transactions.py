from decimal import Decimal
from typing import Tuple
from uuid import uuid4

from chalice import Response

from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http201
from chalicelib.utils import data as utils_data, exceptions
from chalicelib.utils.logger import logger

TRANSACTION_INCOME = 'income'
TRANSACTION_EXPENSE = 'expense'


class Transaction(EntityBase):
    pk = keys_structure.transactions_pk
    sk = keys_structure.transactions_sk
    display_name = 'Transaction'

    mutable_fields = ('type_', 'amount', 'entity_id', 'entity_type', 'date', 'description')

    def __init__(self, id_, store=None, **kwargs):
        EntityBase.__init__(self, id_, store)

        self.type_: str = kwargs.get('type_', TRANSACTION_EXPENSE)
        self.amount: Decimal = utils_data.to_decimal(kwargs.get('amount', 0))
        self.entity_id: str = kwargs.get('entity_id', '')
        self.entity_type: str = kwargs.get('entity_type', 'customer')
        self.date: str = utils_data.normalize_timestamp(kwargs.get('date'))
        self.description: str = kwargs.get('description')
        self.record_type = 'transaction'

    def _get_pk_sk(self) -> Tuple[str, str]:
        return self.pk, self.sk.format(transaction_id=self.id_)

    def _to_dict(self):
        return {
            'id_': self.id_,
            'type_': self.type_,
            'amount': self.amount,
            'entity_id': self.entity_id,
            'entity_type': self.entity_type,
            'date': self.date,
            'description': self.description
        }


def parse_payment_body(request) -> Tuple[Decimal, str]:
    request_body = utils_data.parse_raw_body(request)
    amount = utils_data.to_decimal(request_body.get('amount'), default=None)
    if amount is None or amount <= 0:
        raise exceptions.ValidationException('Invalid payment amount')
    return amount, request_body.get('description')


def record_payment(store, entity: EntityBase, balance_field: str, transaction_type: str,
                   amount: Decimal, description: str) -> Response:
    """
    Books a payment against a customer or supplier: a transaction is created and
    the outstanding balance goes down by the amount, never below zero.
    """
    transaction = Transaction(
        id_=str(uuid4()),
        store=store,
        type_=transaction_type,
        amount=amount,
        entity_id=entity.id_,
        entity_type=entity.record_type,
        description=description
    )
    transaction._create_db_record()
    balance = max(Decimal('0'), utils_data.sum_decimals((getattr(entity, balance_field), -amount)))
    entity._update_db_record({balance_field: balance})
    logger.info(f"record_payment ::: {entity.record_type=} {entity.id_=} {amount=} new {balance_field}={balance}")
    return Response(status_code=http201, body=transaction._to_ui())
