import sqlite3

import pytest

from DB import Store, StorageError


def test_init_creates_file_and_seeds_actuators(store):
    store.init()
    acts = store.get_actuators()
    assert set(acts) == {"pump", "fan"}
    assert acts["pump"]["state"] == 0
    assert acts["fan"]["state"] == 0


def test_init_is_idempotent_and_keeps_state(store):
    store.init()
    store.set_actuator_state("fan", 1)
    store.init()
    acts = store.get_actuators()
    assert len(acts) == 2
    assert acts["fan"]["state"] == 1


def test_init_fails_when_path_cannot_be_created(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    with pytest.raises(StorageError):
        Store(str(blocker / "greenhouse.db")).init()


def test_latest_reading_empty_returns_none(store):
    store.init()
    assert store.latest_reading() is None
    assert store.list_readings() == []


def test_insert_and_latest(store):
    store.init()
    first = store.insert_reading(21.5, 55.0, 1800)
    second = store.insert_reading(22.0, 56.5, 1750)
    assert second > first

    latest = store.latest_reading()
    assert latest["id"] == second
    assert latest["temp"] == 22.0
    assert latest["humidity"] == 56.5
    assert latest["soil"] == 1750
    assert latest["created_at"]


def test_list_readings_limit_and_order(store):
    store.init()
    ids = [store.insert_reading(20.0 + i, 50.0, i) for i in range(5)]

    rows = store.list_readings(limit=3)
    assert [r["id"] for r in rows] == list(reversed(ids))[:3]


def test_list_readings_negative_limit_is_passed_through(store):
    store.init()
    for i in range(4):
        store.insert_reading(20.0, 50.0, i)
    # SQLite reads a negative LIMIT as "no limit"
    assert len(store.list_readings(limit=-1)) == 4


def test_set_actuator_state_unknown_name_is_noop(store):
    store.init()
    before = store.get_actuators()
    assert store.set_actuator_state("heater", 1) is False
    assert store.get_actuators() == before


def test_commands_are_projection_of_actuators(store):
    store.init()
    store.set_actuator_state("pump", 1)
    assert store.get_commands() == {"pump": 1, "fan": 0}


def test_sqlite_errors_become_storage_errors(store):
    store.init()
    conn = sqlite3.connect(store.db_path)
    conn.execute("DROP TABLE readings;")
    conn.commit()
    conn.close()

    with pytest.raises(StorageError):
        store.insert_reading(20.0, 50.0, 1)
    with pytest.raises(StorageError):
        store.latest_reading()


def test_integers_beyond_64_bits_become_storage_errors(store):
    store.init()
    with pytest.raises(StorageError):
        store.insert_reading(20.0, 50.0, 10 ** 20)
    with pytest.raises(StorageError):
        store.list_readings(limit=10 ** 20)
    assert store.count_readings() == 0
