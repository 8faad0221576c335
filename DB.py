# DB.py
import os
import logging
import sqlite3
from typing import Any, Dict, List, Optional

from Config import Config

logger = logging.getLogger(__name__)

ACTUATOR_NAMES = ("pump", "fan")

# UTC with milliseconds, sorts lexicographically
NOW_MS = "strftime('%Y-%m-%d %H:%M:%f', 'now')"

# sqlite3 raises OverflowError (not sqlite3.Error) for ints beyond 64 bits
DB_ERRORS = (sqlite3.Error, OverflowError)


class StorageError(Exception):
    """Any failure from the persistence layer (I/O, constraint, locking)."""


class Store:
    """SQLite-backed storage for readings and actuator states.

    Holds only the database path; every operation opens its own short-lived
    connection, so one instance can be shared by concurrent request handlers.
    """

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.db_path = db_path or Config.DB_PATH

    def _connect(self) -> sqlite3.Connection:
        parent = os.path.dirname(os.path.abspath(self.db_path))
        os.makedirs(parent, exist_ok=True)
        conn = sqlite3.connect(self.db_path, timeout=5.0, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
        return conn

    def _open(self) -> sqlite3.Connection:
        try:
            return self._connect()
        except (sqlite3.Error, OSError) as e:
            logger.exception("[DB] cannot open %s", self.db_path)
            raise StorageError(f"cannot open database: {e}") from e

    def init(self) -> None:
        conn = self._open()
        try:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS readings (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    temp REAL,
                    humidity REAL,
                    soil INTEGER,
                    created_at TEXT NOT NULL DEFAULT ({NOW_MS})
                );
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_readings_created_at
                ON readings(created_at);
                """
            )
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS actuators (
                    name TEXT PRIMARY KEY,
                    state INTEGER NOT NULL DEFAULT 0,
                    updated_at TEXT NOT NULL DEFAULT ({NOW_MS})
                );
                """
            )
            conn.executemany(
                "INSERT OR IGNORE INTO actuators (name, state) VALUES (?, 0);",
                [(name,) for name in ACTUATOR_NAMES],
            )
            conn.commit()
        except DB_ERRORS as e:
            logger.exception("[DB] schema init failed")
            raise StorageError(str(e)) from e
        finally:
            conn.close()
        logger.info("[DB] ready at %s", self.db_path)

    def insert_reading(self, temp: float, humidity: float, soil: int) -> int:
        conn = self._open()
        try:
            cur = conn.execute(
                "INSERT INTO readings (temp, humidity, soil) VALUES (?, ?, ?);",
                (temp, humidity, soil),
            )
            conn.commit()
            return int(cur.lastrowid)
        except DB_ERRORS as e:
            logger.exception("[DB] insert_reading failed")
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def latest_reading(self) -> Optional[Dict[str, Any]]:
        conn = self._open()
        try:
            row = conn.execute(
                """
                SELECT id, temp, humidity, soil, created_at
                FROM readings
                ORDER BY created_at DESC, id DESC
                LIMIT 1;
                """
            ).fetchone()
            if row is None:
                return None
            return dict(row)
        except DB_ERRORS as e:
            logger.exception("[DB] latest_reading failed")
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def list_readings(self, limit: int = 100) -> List[Dict[str, Any]]:
        # limit goes to SQLite as given; a negative value means "no limit" there
        conn = self._open()
        try:
            rows = conn.execute(
                """
                SELECT id, temp, humidity, soil, created_at
                FROM readings
                ORDER BY created_at DESC, id DESC
                LIMIT ?;
                """,
                (limit,),
            ).fetchall()
            return [dict(r) for r in rows]
        except DB_ERRORS as e:
            logger.exception("[DB] list_readings failed")
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def count_readings(self) -> int:
        conn = self._open()
        try:
            row = conn.execute("SELECT COUNT(*) AS n FROM readings;").fetchone()
            return int(row["n"])
        except DB_ERRORS as e:
            logger.exception("[DB] count_readings failed")
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def get_actuators(self) -> Dict[str, Dict[str, Any]]:
        conn = self._open()
        try:
            rows = conn.execute(
                "SELECT name, state, updated_at FROM actuators ORDER BY name;"
            ).fetchall()
            return {r["name"]: {"state": r["state"], "updated_at": r["updated_at"]} for r in rows}
        except DB_ERRORS as e:
            logger.exception("[DB] get_actuators failed")
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def get_commands(self) -> Dict[str, int]:
        return {name: a["state"] for name, a in self.get_actuators().items()}

    def set_actuator_state(self, name: str, state: int) -> bool:
        """Set an actuator's state and refresh updated_at.

        Unknown names touch zero rows and return False.
        """
        conn = self._open()
        try:
            cur = conn.execute(
                f"UPDATE actuators SET state = ?, updated_at = {NOW_MS} WHERE name = ?;",
                (state, name),
            )
            conn.commit()
            return cur.rowcount > 0
        except DB_ERRORS as e:
            logger.exception("[DB] set_actuator_state failed")
            raise StorageError(str(e)) from e
        finally:
            conn.close()
