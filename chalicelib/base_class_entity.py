from typing import Tuple, Dict, List
from uuid import uuid4

from chalice import Response

from chalicelib.constants.status_codes import http200, http201
from chalicelib.constants.substitute_keys import from_db, to_db
from chalicelib.utils import app as utils_app, data as utils_data, exceptions
from chalicelib.utils.data import substitute_keys
from chalicelib.utils.logger import logger


class EntityBase:
    """
    Generic record handler. A child class describes one collection (pk/sk, fields
    and their defaults) and gets list / create / read / update / delete endpoints.
    The store is always passed in by the caller.
    """
    pk = None
    sk = None
    display_name = 'Record'

    # fields a client may set on create and update, server-assigned ones (id_, timestamps) are left out
    mutable_fields: Tuple[str, ...] = ()

    def __init__(self, id_, store=None):
        self.id_: str = id_
        self.store = store
        self.record_type: str = ''

    @classmethod
    def load_all(cls, store) -> List['EntityBase']:
        return [cls(store=store, **record) for record in store.list_records(cls.pk)]

    @classmethod
    def init_get_by_id(cls, store, id_):
        logger.info(f"init_get_by_id ::: started {cls.__name__} {id_=}")
        c = cls(id_=id_, store=store)
        c.__init__(store=store, **c._get_db_item())
        return c

    @classmethod
    def init_request_create(cls, request, store):
        logger.info(f"init_request_create ::: started {cls.__name__}")
        request_body = cls.parse_request_body(request)
        create_fields = {}
        for key, value in request_body.items():
            if key in cls.mutable_fields:
                create_fields[key] = value
            else:
                logger.warning(f'init_request_create ::: {key=}, {value=} can not be set, skipping..')
        return cls(id_=str(uuid4()), store=store, **create_fields)

    @staticmethod
    def parse_request_body(request) -> Dict:
        request_body = utils_data.parse_raw_body(request)
        substitute_keys(dict_to_process=request_body, base_keys=to_db)
        return request_body

    @classmethod
    def get_required_id(cls, request, id_=None) -> str:
        id_ = id_ or utils_data.get_query_param(request, 'id')
        if not id_:
            raise exceptions.MandatoryFieldsAreNotFilled(f'{cls.display_name} id is required')
        return id_

    @classmethod
    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_get_all(cls, store) -> Response:
        items: List[Dict] = [entity._to_ui() for entity in cls.load_all(store)]
        logger.info(f"endpoint_get_all ::: returning {cls.pk}={[item['id'] for item in items]}")
        return Response(status_code=http200, body=items)

    @classmethod
    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_get_by_id(cls, store, id_) -> Response:
        return Response(status_code=http200, body=cls.init_get_by_id(store, id_)._to_ui())

    @classmethod
    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_create(cls, request, store) -> Response:
        entity = cls.init_request_create(request, store)
        entity._create_db_record()
        return Response(status_code=http201, body=entity._to_ui())

    @classmethod
    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_update(cls, request, store, id_=None) -> Response:
        id_ = cls.get_required_id(request, id_)
        request_body = cls.parse_request_body(request)
        entity = cls.init_get_by_id(store, id_)
        entity._update_db_record(request_body)
        return Response(status_code=http200, body=entity._to_ui())

    @classmethod
    @utils_app.request_exception_handler
    @utils_app.log_start_finish
    def endpoint_delete(cls, request, store, id_=None) -> Response:
        id_ = cls.get_required_id(request, id_)
        cls.init_get_by_id(store, id_)._delete_db_record()
        return Response(status_code=http200,
                        body={'message': f'{cls.display_name} successfully deleted', 'id': id_})

    def _get_pk_sk(self) -> Tuple[str, str]:
        """
        Should be re-implemented in each child class
        :return:
        partkey, sortkey of the entity record
        """
        return self.pk, self.sk

    def _get_db_item(self) -> Dict:
        return self.store.get_record(*self._get_pk_sk())

    def _to_dict(self) -> Dict:
        """
        Should be re-implemented in each child class
        :return:
        dict of item's attributes
        """
        return {
            'id_': self.id_
        }

    def _to_ui(self) -> Dict:
        item = self._to_dict()
        substitute_keys(dict_to_process=item, base_keys=from_db)
        return item

    def to_ui(self) -> Dict:
        return self._to_ui()

    def _touch(self) -> None:
        """
        Called right before an update is written, e.g. to refresh updated_at
        """
        pass

    def _update_fields_whitelist(self) -> List:
        return list(self.mutable_fields)

    def _create_db_record(self) -> None:
        pk, sk = self._get_pk_sk()
        self.store.put_record(pk, sk, self._to_dict())
        logger.info(f"_create_db_record ::: {self.record_type=} {self.id_=} {pk=} {sk=} successfully created")

    def _update_db_record(self, update_body: Dict) -> None:
        """
        Merges the provided fields into the entity and writes the whole record back.
        Every whitelisted field present in update_body is applied, 0 and '' included.
        """
        whitelist = self._update_fields_whitelist()
        update_dict = {}
        for key, value in update_body.items():
            if key in whitelist:
                update_dict[key] = value
            else:
                logger.warning(f'_update_db_record ::: {key=}, {value=} can not be updated, skipping..')
        self.__init__(store=self.store, **{**self._to_dict(), **update_dict})
        self._touch()
        pk, sk = self._get_pk_sk()
        self.store.update_record(pk, sk, self._to_dict())
        logger.info(f"_update_db_record ::: {self.record_type=} {self.id_=} {pk=} {sk=} successfully updated")

    def _delete_db_record(self) -> None:
        pk, sk = self._get_pk_sk()
        self.store.delete_record(pk, sk)
        logger.info(f"_delete_db_record ::: {self.record_type=} {self.id_=} {pk=} {sk=} successfully deleted")
