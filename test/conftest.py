import json
from typing import Optional

import pytest
from chalice.test import Client

from app import app
from chalicelib.utils import store as utils_store

JSON_HEADERS = {'Content-Type': 'application/json', 'Host': 'test-domain.com'}


class ApiClient:
    """Thin wrapper around the chalice test client that sends and decodes JSON"""

    def __init__(self, client: Client):
        self.client = client

    def request(self, method: str, endpoint: str, json_body=None, query: Optional[str] = None):
        return self.client.http.request(
            method=method,
            path=f"{endpoint}?{query}" if query else endpoint,
            headers=JSON_HEADERS,
            body=json.dumps(json_body).encode('utf-8') if json_body is not None else b''
        )

    def get(self, endpoint, query=None):
        return self.request('GET', endpoint, query=query)

    def post(self, endpoint, json_body=None):
        return self.request('POST', endpoint, json_body=json_body)

    def put(self, endpoint, json_body=None, query=None):
        return self.request('PUT', endpoint, json_body=json_body, query=query)

    def delete(self, endpoint, query=None):
        return self.request('DELETE', endpoint, query=query)

    def create(self, endpoint, json_body=None) -> dict:
        response = self.post(endpoint, json_body or {})
        assert response.status_code == 201, f"status code not as expected: {response.body}"
        return response.json_body


@pytest.fixture
def memory_store():
    store = utils_store.MemoryStore()
    utils_store.set_store(store)
    yield store
    utils_store.reset_store()


@pytest.fixture
def api(memory_store):
    with Client(app, stage_name='test') as client:
        yield ApiClient(client)
