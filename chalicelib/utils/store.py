import os
from copy import deepcopy
from time import time_ns
from typing import Callable, Dict, List, Optional

from boto3.dynamodb.conditions import Key

from chalicelib.utils import db as utils_db, exceptions
from chalicelib.utils.logger import logger

_STORE = None


class MemoryStore:
    """
    Process-lifetime record store. Every collection (partkey) keeps its records
    in insertion order. Records are copied on the way in and out so callers
    never share state with the store.
    """
    is_persistent = False

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict]] = {}

    def list_records(self, partkey: str) -> List[Dict]:
        return [deepcopy(record) for record in self._collections.get(partkey, {}).values()]

    def get_record(self, partkey: str, sortkey: str) -> Dict:
        collection = self._collections.get(partkey, {})
        if sortkey not in collection:
            logger.error(f"get_record ::: record partkey={partkey} sortkey={sortkey} not found")
            raise exceptions.RecordNotFound(f'record partkey={partkey} sortkey={sortkey} not found')
        return deepcopy(collection[sortkey])

    def put_record(self, partkey: str, sortkey: str, record: Dict) -> None:
        self._collections.setdefault(partkey, {})[sortkey] = deepcopy(record)

    def update_record(self, partkey: str, sortkey: str, fields: Dict) -> Dict:
        record = {**self.get_record(partkey, sortkey), **fields}
        self._collections[partkey][sortkey] = deepcopy(record)
        return record

    def delete_record(self, partkey: str, sortkey: str) -> None:
        self.get_record(partkey, sortkey)
        del self._collections[partkey][sortkey]

    def clear(self) -> None:
        self._collections = {}


class DynamoDBStore:
    """
    Records live in the generic table under partkey=<collection>, sortkey=<record id>.
    record_order keeps insertion order for listing.
    """
    is_persistent = True
    service_keys = ('partkey', 'sortkey', 'record_order')

    def __init__(self, table: Callable = utils_db.get_gen_table):
        self.table = table

    def _strip(self, item: Dict) -> Dict:
        return {key: value for key, value in item.items() if key not in self.service_keys}

    def list_records(self, partkey: str) -> List[Dict]:
        items = utils_db.query_items_paged(Key('partkey').eq(partkey), table=self.table)
        items.sort(key=lambda item: item.get('record_order', 0))
        return [self._strip(item) for item in items]

    def get_record(self, partkey: str, sortkey: str) -> Dict:
        return self._strip(utils_db.get_db_item(partkey, sortkey, table=self.table))

    def put_record(self, partkey: str, sortkey: str, record: Dict) -> None:
        utils_db.put_db_record({
            **record,
            'partkey': partkey,
            'sortkey': sortkey,
            'record_order': time_ns()
        }, table=self.table)

    def update_record(self, partkey: str, sortkey: str, fields: Dict) -> Dict:
        current = self.get_record(partkey, sortkey)
        utils_db.update_db_record(
            key={'partkey': partkey, 'sortkey': sortkey},
            update_body=fields,
            allowed_attrs_to_update=list(fields.keys()),
            allowed_attrs_to_delete=[],
            table=self.table
        )
        return {**current, **fields}

    def delete_record(self, partkey: str, sortkey: str) -> None:
        self.get_record(partkey, sortkey)
        utils_db.delete_db_record({'partkey': partkey, 'sortkey': sortkey}, table=self.table)


def create_store(backend: str):
    if backend == 'memory':
        return MemoryStore()
    if backend == 'dynamodb':
        return DynamoDBStore()
    raise ValueError(f'Unknown STORE_BACKEND={backend}')


def get_store(initializer: Optional[Callable] = None):
    """
    Store shared by all requests handled by this Lambda container.
    initializer runs once, right after the store is created (cold start).
    """
    global _STORE
    if _STORE is None:
        backend = os.environ.get('STORE_BACKEND', 'memory').lower()
        _STORE = create_store(backend)
        logger.info(f"get_store ::: created {backend=} store")
        if initializer is not None:
            initializer(_STORE)
    return _STORE


def set_store(store) -> None:
    global _STORE
    _STORE = store


def reset_store() -> None:
    set_store(None)
