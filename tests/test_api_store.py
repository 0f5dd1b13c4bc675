from unittest import mock

import pytest
import requests

from migrator.errors import RecordStoreError
from migrator.stores.api_store import APIRecordStore


def response(status=200, json_data=None):
    resp = mock.Mock()
    resp.status_code = status
    resp.text = "x" if json_data is not None else ""
    resp.json.return_value = json_data
    if status >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(response=resp)
    else:
        resp.raise_for_status.return_value = None
    return resp


@pytest.fixture
def store():
    store = APIRecordStore("https://target.example.com/api/", api_key="secret",
                           page_size=2, rate_limit=0)
    store._session = mock.Mock()
    return store


def test_session_auth_header():
    store = APIRecordStore("https://target.example.com/api", api_key="secret")
    assert store._session.headers["Authorization"] == "Bearer secret"
    assert store.base_url == "https://target.example.com/api"


def test_count(store):
    store._session.request.return_value = response(json_data={"count": 42})

    assert store.count("Account") == 42
    store._session.request.assert_called_once_with(
        "GET", "https://target.example.com/api/Account/count", timeout=30.0)


def test_query_pages_until_short_page(store):
    store._session.request.side_effect = [
        response(json_data={"records": [{"Id": "1"}, {"Id": "2"}]}),
        response(json_data={"records": [{"Id": "3"}]}),
    ]

    records = store.query("Account")

    assert [r["Id"] for r in records] == ["1", "2", "3"]
    offsets = [c.kwargs["params"]["offset"] for c in store._session.request.call_args_list]
    assert offsets == [0, 2]


def test_delete_records(store):
    store._session.request.side_effect = [
        response(json_data={"records": [{"Id": "1"}, {"id": "2"}]}),
        response(json_data={"records": []}),
        response(),
        response(),
    ]

    assert store.delete_records("Account") == 2
    deleted_urls = [c.args[1] for c in store._session.request.call_args_list if c.args[0] == "DELETE"]
    assert deleted_urls == [
        "https://target.example.com/api/Account/1",
        "https://target.example.com/api/Account/2",
    ]


def test_delete_dry_run(store):
    store.dry_run = True
    store._session.request.return_value = response(json_data={"records": [{"Id": "1"}]})

    assert store.delete_records("Account") == 0
    assert all(c.args[0] == "GET" for c in store._session.request.call_args_list)


def test_http_error_raises_store_error(store):
    store._session.request.return_value = response(status=404, json_data={})

    with pytest.raises(RecordStoreError) as exc_info:
        store.count("Account")
    assert exc_info.value.status_code == 404


def test_connection_error_raises_store_error(store):
    store._session.request.side_effect = requests.exceptions.ConnectionError("down")

    with pytest.raises(RecordStoreError):
        store.count("Account")
