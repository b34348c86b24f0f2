"""Tests for paginated record enumeration."""

import io

import pytest

from common.types import Column, KeySlice
from widerow.config import ConnectionConfig
from widerow.record_enumerator import RecordEnumerator

TEST_CF = "testcf"


def _put_records(connection, count):
    for i in range(count):
        connection.put_record(TEST_CF, f"key{i:02d}", {"n": str(i)})


class ScriptedStore:
    """Serves pre-built range slices keyed by start key and records requests."""

    def __init__(self, pages):
        self.pages = pages
        self.requests = []

    def range_slice(self, column_family, start_key, end_key, limit, consistency):
        self.requests.append((start_key, end_key, limit))
        return self.pages.get(start_key, [])


def _slice(key, **columns):
    return KeySlice(
        key.encode(),
        [Column(name.encode(), value.encode(), 1) for name, value in columns.items()],
    )


class TestForEachRecord:
    @pytest.mark.parametrize("count", [0, 1, 4, 5, 6, 10, 22])
    def test_visits_every_record_once(self, memory_connection, count):
        _put_records(memory_connection, count)
        seen = []

        total = memory_connection.for_each_record(TEST_CF, lambda key, columns: seen.append(key))

        assert total == count
        assert seen == [f"key{i:02d}" for i in range(count)]

    def test_callback_receives_decoded_columns(self, memory_connection):
        memory_connection.put_record(TEST_CF, "k", {"a": "1", "b": "2"})
        received = {}

        memory_connection.for_each_record(TEST_CF, lambda key, columns: received.update({key: columns}))

        assert received == {"k": {"a": "1", "b": "2"}}

    @pytest.mark.parametrize("stop_after", [1, 3, 5, 7, 21])
    def test_stop_after_k_invocations(self, memory_connection, stop_after):
        _put_records(memory_connection, 22)
        seen = []

        def callback(key, columns):
            seen.append(key)
            return len(seen) < stop_after

        assert memory_connection.for_each_record(TEST_CF, callback) == stop_after
        assert len(seen) == stop_after

    def test_stop_fetches_no_further_batches(self, memory_connection, memory_store):
        _put_records(memory_connection, 22)
        memory_store.calls.clear()

        memory_connection.for_each_record(TEST_CF, lambda key, columns: False)

        assert len([call for call in memory_store.calls if call[0] == "range_slice"]) == 1

    def test_none_return_continues(self, memory_connection):
        _put_records(memory_connection, 7)
        assert memory_connection.for_each_record(TEST_CF, lambda key, columns: None) == 7

    def test_skips_file_chunks_and_deleted_rows(self, memory_connection):
        _put_records(memory_connection, 3)
        memory_connection.put_file(TEST_CF, "file", io.BytesIO(b"0123456789"))
        memory_connection.delete_record(TEST_CF, "key01")
        seen = []

        count = memory_connection.for_each_record(TEST_CF, lambda key, columns: seen.append(key))

        assert seen == ["file", "key00", "key02"]
        assert count == 3

    def test_respects_batch_size(self, memory_connection, memory_store):
        memory_connection.config.record_batch_size = 3
        _put_records(memory_connection, 7)
        memory_store.calls.clear()

        assert memory_connection.for_each_record(TEST_CF, lambda key, columns: True) == 7

        requests = [call for call in memory_store.calls if call[0] == "range_slice"]
        assert [call[2] for call in requests] == [3, 3, 3, 3]
        assert [call[1] for call in requests] == [b"", b"key02", b"key04", b"key06"]

    def test_counts_zero_after_column_family_recreated(self, memory_connection):
        _put_records(memory_connection, 5)
        assert memory_connection.delete_column_family(TEST_CF)
        assert memory_connection.add_column_family(TEST_CF)

        assert memory_connection.for_each_record(TEST_CF, lambda key, columns: True) == 0


class TestPagingProtocol:
    def _enumerator(self, pages, batch_size=3):
        store = ScriptedStore(pages)
        return store, RecordEnumerator(store, ConnectionConfig(keyspace="ks", record_batch_size=batch_size))

    def test_boundary_row_skipped_only_after_first_batch(self):
        store, enumerator = self._enumerator({
            b"": [_slice("a", v="1"), _slice("b", v="2"), _slice("c", v="3")],
            b"c": [_slice("c", v="3"), _slice("d", v="4")],
            b"d": [_slice("d", v="4")],
        })
        seen = []

        assert enumerator.for_each_record(TEST_CF, lambda key, columns: seen.append(key)) == 4
        assert seen == ["a", "b", "c", "d"]
        assert [request[0] for request in store.requests] == [b"", b"c", b"d"]

    def test_first_row_with_empty_key_boundary_is_not_skipped(self):
        store, enumerator = self._enumerator({b"": [_slice("a", v="1")]})
        assert enumerator.for_each_record(TEST_CF, lambda key, columns: True) == 1
        assert len(store.requests) == 1

    def test_tombstoned_last_row_still_advances_cursor(self):
        store, enumerator = self._enumerator({
            b"": [_slice("a", v="1"), _slice("b"), _slice("c")],
            b"c": [_slice("c"), _slice("d", v="4")],
            b"d": [_slice("d", v="4")],
        })
        seen = []

        enumerator.for_each_record(TEST_CF, lambda key, columns: seen.append(key))

        assert seen == ["a", "d"]

    def test_requests_are_open_ended(self):
        store, enumerator = self._enumerator({b"": []})
        enumerator.for_each_record(TEST_CF, lambda key, columns: True)
        assert store.requests == [(b"", b"", 3)]


class TestIterRecords:
    def test_yields_records_in_key_order(self, memory_connection):
        _put_records(memory_connection, 12)
        records = list(memory_connection.iter_records(TEST_CF))

        assert [key for key, _ in records] == [f"key{i:02d}" for i in range(12)]
        assert records[3] == ("key03", {"n": "3"})

    def test_is_lazy(self, memory_connection, memory_store):
        _put_records(memory_connection, 12)
        memory_store.calls.clear()

        iterator = memory_connection.iter_records(TEST_CF)
        next(iterator)

        assert len([call for call in memory_store.calls if call[0] == "range_slice"]) == 1
