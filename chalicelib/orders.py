from decimal import Decimal
from typing import Tuple, List, Dict, Any, Optional
from uuid import uuid4

from chalice import Response

from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.constants.constants import QUANTITY_PLACES
from chalicelib.constants.status_codes import http200, http201
from chalicelib.customers import Customer
from chalicelib.inventory import InventoryItem
from chalicelib.utils import app as utils_app, data as utils_data
from chalicelib.utils.exceptions import RecordNotFound
from chalicelib.utils.logger import logger

ORDER_STATUS_PENDING = 'pending'
ORDER_STATUS_PAID = 'paid'


class Order(EntityBase):
    """
    Customer order. total is supplied by the caller and is never recomputed
    from items.

    A new order takes its lines out of stock and, while pending, adds its total
    to the customer's pendingAmount. Moving it from pending to paid takes the
    total off again. Balances and quantities never go below zero, and lines or
    customers that can not be found are skipped.
    """
    pk = keys_structure.orders_pk
    sk = keys_structure.orders_sk
    display_name = 'Order'

    mutable_fields = ('customer_id', 'items', 'date', 'total', 'status_', 'type_')

    def __init__(self, id_, store=None, **kwargs):
        EntityBase.__init__(self, id_, store)

        self.customer_id: str = kwargs.get('customer_id', '')
        self.items: List[Dict] = self.normalize_items(kwargs.get('items', []))
        self.date: str = utils_data.normalize_timestamp(kwargs.get('date'))
        self.total: Decimal = utils_data.to_decimal(kwargs.get('total', 0))
        self.status_: str = kwargs.get('status_', ORDER_STATUS_PENDING)
        self.type_: str = kwargs.get('type_', 'dine-in')
        self.record_type = 'order'

    @staticmethod
    def normalize_items(items: Any) -> List[Dict]:
        """
        Order lines keep the API key names (id, itemId, quantity, rate) and any extra keys.
        A line without id gets a fresh one.
        """
        if not isinstance(items, list):
            logger.warning(f'normalize_items ::: {items=} is not a list, using empty list')
            return []
        normalized = []
        for item in items:
            if not isinstance(item, dict):
                logger.warning(f'normalize_items ::: skipping order line {item=}')
                continue
            normalized.append({
                **item,
                'id': item.get('id') or str(uuid4()),
                'itemId': item.get('itemId', ''),
                'quantity': utils_data.to_decimal(item.get('quantity', 0), default=Decimal('0.000'),
                                                  places=QUANTITY_PLACES),
                'rate': utils_data.to_decimal(item.get('rate', 0))
            })
        return normalized

    @classmethod
    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_create(cls, request, store) -> Response:
        order = cls.init_request_create(request, store)
        order._create_db_record()
        order._take_items_from_stock()
        if order.status_ == ORDER_STATUS_PENDING:
            order._change_customer_pending(order.total)
        return Response(status_code=http201, body=order._to_ui())

    @classmethod
    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_update(cls, request, store, id_=None) -> Response:
        id_ = cls.get_required_id(request, id_)
        request_body = cls.parse_request_body(request)
        order = cls.init_get_by_id(store, id_)
        previous_status, previous_total = order.status_, order.total
        order._update_db_record(request_body)
        if previous_status == ORDER_STATUS_PENDING and order.status_ == ORDER_STATUS_PAID:
            order._change_customer_pending(-previous_total)
        return Response(status_code=http200, body=order._to_ui())

    @staticmethod
    def _find_stock_item(line: Dict, stock: List[InventoryItem]) -> Optional[InventoryItem]:
        """
        A line points at an inventory item by itemId, or failing that by the item type
        """
        for item in stock:
            if item.id_ == line['itemId']:
                return item
        for item in stock:
            if line.get('type') and item.type_ == line.get('type'):
                return item
        return None

    def _take_items_from_stock(self) -> None:
        stock = InventoryItem.load_all(self.store)
        for line in self.items:
            item = self._find_stock_item(line, stock)
            if item is None:
                logger.info(f"_take_items_from_stock ::: no inventory item for order line {line['id']}, skipping..")
                continue
            quantity = max(Decimal('0'), utils_data.sum_decimals((item.quantity, -line['quantity'])))
            item._update_db_record({'quantity': quantity})

    def _change_customer_pending(self, amount: Decimal) -> None:
        if not self.customer_id:
            return
        try:
            customer = Customer.init_get_by_id(self.store, self.customer_id)
        except RecordNotFound:
            logger.info(f"_change_customer_pending ::: customer {self.customer_id} not found, skipping..")
            return
        pending_amount = max(Decimal('0'), utils_data.sum_decimals((customer.pending_amount, amount)))
        customer._update_db_record({'pending_amount': pending_amount})

    def _get_pk_sk(self) -> Tuple[str, str]:
        return self.pk, self.sk.format(order_id=self.id_)

    def _to_dict(self):
        return {
            'id_': self.id_,
            'customer_id': self.customer_id,
            'items': self.items,
            'date': self.date,
            'total': self.total,
            'status_': self.status_,
            'type_': self.type_
        }
