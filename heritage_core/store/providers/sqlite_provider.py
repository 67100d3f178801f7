from __future__ import annotations
from typing import Any, Dict, List, Tuple
import json, sqlite3, os, threading
from heritage_core.errors import StoreUnavailableError
from heritage_core.logger import get_logger
from heritage_core.store.provider import StoreProvider

log = get_logger("Heritage.Store.SQLite")


class SQLiteStorage(StoreProvider):
    def __init__(self, path="db/heritage_state.db"):
        # If no directory, default to current working directory
        dir_path = os.path.dirname(path) or "."
        os.makedirs(dir_path, exist_ok=True)
        self.path = path
        self.db = sqlite3.connect(path, check_same_thread=False)
        self._lock = threading.Lock()
        self._closed = False

        self._init()

    def _init(self) -> None:
        c = self.db.cursor()
        c.execute("""CREATE TABLE IF NOT EXISTS kv(
            key TEXT PRIMARY KEY,
            value BLOB NOT NULL
        )""")
        c.execute("""CREATE TABLE IF NOT EXISTS audit(
            ts TEXT,
            event_type TEXT,
            payload TEXT
        )""")
        self.db.commit()

    def is_available(self) -> bool:
        if self._closed:
            return False
        try:
            with self._lock:
                self.db.execute("SELECT 1")
            return True
        except sqlite3.Error as e:
            log.error(f"[SQLITE] probe failed for {self.path}: {e}")
            return False

    def get(self, key: str) -> bytes:
        try:
            with self._lock:
                row = self.db.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"sqlite read failed for {key}: {e}") from e
        if not row:
            return b""
        return bytes(row[0])

    def set(self, key: str, value: bytes) -> None:
        try:
            with self._lock:
                self.db.execute(
                    "INSERT INTO kv(key,value) VALUES(?,?) "
                    "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                    (key, sqlite3.Binary(value)),
                )
                self.db.commit()
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"sqlite write failed for {key}: {e}") from e

    # audit
    def log_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        from heritage_core.utils import now_ts

        try:
            with self._lock:
                self.db.execute("INSERT INTO audit(ts,event_type,payload) VALUES(?,?,?)",
                                (now_ts(), event_type, json.dumps(payload, separators=(",", ":"), sort_keys=True)))
                self.db.commit()
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"sqlite audit write failed for {event_type}: {e}") from e

    def list_events(self) -> List[Tuple[str, str, Dict[str, Any]]]:
        with self._lock:
            cur = self.db.execute("SELECT ts, event_type, payload FROM audit ORDER BY rowid")
            return [(ts, et, json.loads(p)) for ts, et, p in cur.fetchall()]

    def close(self):
        if not self._closed:
            self.db.close()
            self._closed = True
