from decimal import Decimal
from typing import Tuple

from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.constants.constants import QUANTITY_PLACES
from chalicelib.utils import data as utils_data


class InventoryItem(EntityBase):
    pk = keys_structure.inventory_pk
    sk = keys_structure.inventory_sk
    display_name = 'Inventory item'

    mutable_fields = ('type_', 'quantity', 'rate')

    def __init__(self, id_, store=None, **kwargs):
        EntityBase.__init__(self, id_, store)

        self.type_: str = kwargs.get('type_', 'unknown')
        self.quantity: Decimal = utils_data.to_decimal(kwargs.get('quantity', 0), default=Decimal('0.000'),
                                                       places=QUANTITY_PLACES)
        self.rate: Decimal = utils_data.to_decimal(kwargs.get('rate', 0))
        self.updated_at: str = kwargs.get('updated_at') or utils_data.now_iso()
        self.record_type = 'inventory_item'

    def _touch(self) -> None:
        self.updated_at = utils_data.now_iso()

    def _get_pk_sk(self) -> Tuple[str, str]:
        return self.pk, self.sk.format(item_id=self.id_)

    def _to_dict(self):
        return {
            'id_': self.id_,
            'type_': self.type_,
            'quantity': self.quantity,
            'rate': self.rate,
            'updated_at': self.updated_at
        }
