"""Unit tests for HttpStoreClient using a mock transport."""

import json

import httpx
import pytest

from common.protocol import encode_bytes
from common.types import ColumnFamilyDefinition, Consistency, KeyspaceDefinition
from widerow.exceptions import FaultError, LoginError, SchemaConflictError, SchemaNotFoundError
from widerow.store_client import HttpStoreClient


def _client(handler):
    session = httpx.Client(base_url="http://store", transport=httpx.MockTransport(handler))
    return HttpStoreClient("http://store", "ks", session=session)


def _error(status, code):
    return httpx.Response(status, json={"detail": "error", "code": code})


class TestRequests:
    def test_put_sends_base64_fields(self):
        captured = {}

        def handler(request):
            captured["path"] = request.url.path
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"applied": True})

        _client(handler).put(b"row/1", "cf", b"name", b"\x00\xff", 42, Consistency.ANY)

        assert captured["path"] == "/keyspaces/ks/column-families/cf/columns"
        assert captured["body"] == {
            "key": encode_bytes(b"row/1"),
            "name": encode_bytes(b"name"),
            "value": encode_bytes(b"\x00\xff"),
            "timestamp": 42,
            "consistency": "ANY",
        }

    def test_get_slice_decodes_columns(self):
        def handler(request):
            assert request.url.params["key"] == encode_bytes(b"k")
            assert request.url.params["consistency"] == "QUORUM"
            return httpx.Response(200, json={"columns": [
                {"name": encode_bytes(b"a"), "value": encode_bytes(b"1"), "timestamp": 7},
            ]})

        columns = _client(handler).get_slice(b"k", "cf", Consistency.QUORUM)

        assert [(c.name, c.value, c.timestamp) for c in columns] == [(b"a", b"1", 7)]

    def test_range_slice_passes_bounds_and_limit(self):
        def handler(request):
            assert request.url.path == "/keyspaces/ks/column-families/cf/range"
            assert request.url.params["start_key"] == encode_bytes(b"m")
            assert request.url.params["end_key"] == ""
            assert request.url.params["limit"] == "5"
            return httpx.Response(200, json={"rows": [
                {"key": encode_bytes(b"m"), "columns": []},
            ]})

        rows = _client(handler).range_slice("cf", b"m", b"", 5, Consistency.ONE)

        assert rows[0].key == b"m"
        assert rows[0].columns == []

    def test_get_count(self):
        client = _client(lambda request: httpx.Response(200, json={"count": 3}))
        assert client.get_count(b"k", "cf", Consistency.ONE) == 3

    def test_describe_keyspace(self):
        def handler(request):
            return httpx.Response(200, json={
                "name": "ks",
                "strategy_class": "SimpleStrategy",
                "strategy_options": {"replication_factor": "1"},
                "column_families": [{"keyspace": "ks", "name": "cf", "binary_columns": ["bytes"]}],
            })

        definition = _client(handler).describe_keyspace("ks")

        assert definition.strategy_options == {"replication_factor": "1"}
        assert definition.column_families == [ColumnFamilyDefinition("ks", "cf", ["bytes"])]

    def test_login_sets_bearer_header(self):
        def handler(request):
            if request.url.path == "/auth/login":
                return httpx.Response(200, json={"api_key": "wr_key"})
            assert request.headers["Authorization"] == "Bearer wr_key"
            return httpx.Response(200, json={"keyspaces": []})

        client = _client(handler)
        client.login("admin", "pw")
        assert client.describe_keyspaces() == []


class TestErrorMapping:
    def test_conflict_is_schema_signal(self):
        client = _client(lambda request: _error(409, "ALREADY_EXISTS"))
        with pytest.raises(SchemaConflictError):
            client.add_keyspace(KeyspaceDefinition("ks"))

    @pytest.mark.parametrize("code", ["KEYSPACE_NOT_FOUND", "COLUMN_FAMILY_NOT_FOUND"])
    def test_not_found_is_schema_signal(self, code):
        client = _client(lambda request: _error(404, code))
        with pytest.raises(SchemaNotFoundError):
            client.drop_column_family("cf")

    def test_not_found_on_row_operation_is_fault(self):
        client = _client(lambda request: _error(404, "COLUMN_FAMILY_NOT_FOUND"))
        with pytest.raises(FaultError):
            client.get_slice(b"k", "cf", Consistency.ONE)

    def test_server_error_is_fault(self):
        client = _client(lambda request: httpx.Response(500, text="oops"))
        with pytest.raises(FaultError, match="500"):
            client.describe_keyspaces()

    def test_bad_request_is_fault_even_for_ddl(self):
        client = _client(lambda request: _error(400, "INVALID_REQUEST"))
        with pytest.raises(FaultError):
            client.add_keyspace(KeyspaceDefinition("ks"))

    def test_transport_error_is_fault_with_cause(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FaultError) as exc_info:
            _client(handler).get_count(b"k", "cf", Consistency.ONE)

        assert isinstance(exc_info.value.cause, httpx.ConnectError)
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_transport_errors_are_not_retried(self):
        attempts = []

        def handler(request):
            attempts.append(request)
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(FaultError):
            _client(handler).remove(b"k", "cf", 1, Consistency.ANY)
        assert len(attempts) == 1

    @pytest.mark.parametrize("status", [401, 403])
    def test_login_rejection_is_login_error(self, status):
        client = _client(lambda request: _error(status, "INVALID_CREDENTIALS"))
        with pytest.raises(LoginError):
            client.login("admin", "wrong")

    def test_malformed_body_is_fault(self):
        client = _client(lambda request: httpx.Response(200, text="not json"))
        with pytest.raises(FaultError):
            client.get_count(b"k", "cf", Consistency.ONE)

    @pytest.mark.parametrize("body", [{"unexpected": 1}, [1, 2], {"count": "many"}])
    def test_unexpected_count_body_is_fault(self, body):
        client = _client(lambda request: httpx.Response(200, json=body))
        with pytest.raises(FaultError):
            client.get_count(b"k", "cf", Consistency.ONE)

    @pytest.mark.parametrize("body", [{"unexpected": 1}, [], {"keyspaces": [{"strategy_class": "x"}]}])
    def test_unexpected_keyspace_list_body_is_fault(self, body):
        client = _client(lambda request: httpx.Response(200, json=body))
        with pytest.raises(FaultError):
            client.describe_keyspaces()

    def test_unexpected_keyspace_body_is_fault(self):
        client = _client(lambda request: httpx.Response(200, json={"name": "ks"}))
        with pytest.raises(FaultError):
            client.describe_keyspace("ks")

    @pytest.mark.parametrize("body", [{"unexpected": 1}, ["wr_key"]])
    def test_unexpected_login_body_is_fault(self, body):
        client = _client(lambda request: httpx.Response(200, json=body))
        with pytest.raises(FaultError):
            client.login("admin", "secret123")
        assert "Authorization" not in client.session.headers

    @pytest.mark.parametrize("body", [{"unexpected": 1}, [1]])
    def test_unexpected_slice_body_is_fault(self, body):
        client = _client(lambda request: httpx.Response(200, json=body))
        with pytest.raises(FaultError):
            client.get_slice(b"k", "cf", Consistency.ONE)
        with pytest.raises(FaultError):
            client.range_slice("cf", b"", b"", 5, Consistency.ONE)

    @pytest.mark.parametrize("body", [["not", "an", "object"], {"code": ["ALREADY_EXISTS"]}])
    def test_error_body_of_unexpected_shape_is_fault(self, body):
        client = _client(lambda request: httpx.Response(409, json=body))
        with pytest.raises(FaultError, match="UNKNOWN|409"):
            client.add_keyspace(KeyspaceDefinition("ks"))
