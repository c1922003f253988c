import json
import threading

import pytest

from pwanalyzer.history import (
    DEFAULT_KEY, HistoryRecord, HistoryStore, MemoryStorage,
    PersistenceReadFailure
)


def make_record(i: int) -> HistoryRecord:
    return HistoryRecord(password=f'pw-{i}', strength=i * 20 % 120,
                         timestamp=f'2024-01-0{i}T00:00:00.000Z')


def test_empty_storage_loads_nothing(store):
    assert store.load_all() == []


def test_append_keeps_five_newest_first(store):
    for i in range(1, 7):
        store.append(make_record(i))
    records = store.load_all()
    assert [r.password for r in records] == ['pw-6', 'pw-5', 'pw-4', 'pw-3', 'pw-2']


def test_append_returns_current_history(store):
    store.append(make_record(1))
    assert store.append(make_record(2)) == [make_record(2), make_record(1)]


def test_persisted_layout_is_a_json_array_under_one_key():
    storage = MemoryStorage()
    store = HistoryStore(storage)
    store.append(HistoryRecord(password='Abc12345!', strength=100, timestamp='2024-05-01T12:00:00.000Z'))
    assert json.loads(storage.get(DEFAULT_KEY)) == [
        {'password': 'Abc12345!', 'strength': 100, 'date': '2024-05-01T12:00:00.000Z'}
    ]


def test_history_survives_a_new_store_on_same_storage():
    storage = MemoryStorage()
    HistoryStore(storage).append(make_record(1))
    assert HistoryStore(storage).load_all() == [make_record(1)]


@pytest.mark.parametrize('raw', [
    'not json',
    '{"password": "x"}',
    '[{"password": "x", "strength": "high", "date": "2024"}]',
    '[{"password": "x", "strength": 20}]',
    '[42]',
    '[{"password": "x", "strength": true, "date": "2024"}]',
])
def test_corrupt_history_loads_as_empty(raw, caplog):
    store = HistoryStore(MemoryStorage({DEFAULT_KEY: raw}))
    assert store.load_all() == []
    assert 'unreadable password history' in caplog.text


def test_append_replaces_corrupt_history():
    storage = MemoryStorage({DEFAULT_KEY: '{broken'})
    store = HistoryStore(storage)
    store.append(make_record(1))
    assert store.load_all() == [make_record(1)]


def test_oversized_stored_history_is_truncated_on_load():
    raw = json.dumps([make_record(i).to_dict() for i in range(1, 9)])
    store = HistoryStore(MemoryStorage({DEFAULT_KEY: raw}))
    assert len(store.load_all()) == 5


def test_record_from_dict_rejects_non_object():
    with pytest.raises(PersistenceReadFailure):
        HistoryRecord.from_dict(['x'])


def test_record_timestamp_defaults_to_utc_iso8601():
    record = HistoryRecord(password='x', strength=0)
    assert record.timestamp.endswith('Z')
    assert 'T' in record.timestamp


def test_concurrent_appends_keep_limit(store):
    threads = [threading.Thread(target=store.append, args=(make_record(i % 9 + 1),)) for i in range(40)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(store.load_all()) == 5


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        HistoryStore(MemoryStorage(), limit=0)
