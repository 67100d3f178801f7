import pytest
import requests
from heritage_core.errors import StoreUnavailableError
from heritage_core.legacy_store import LegacyStore
from heritage_core.models import LegacyRecord
from heritage_core.store import HTTPStorage, InMemoryStorage, SQLiteStorage, load_store_provider


def test_sqlite_get_set_roundtrip(tmp_path):
    s = SQLiteStorage(str(tmp_path / "state.db"))
    assert s.is_available()
    assert s.get("legacy_missing") == b""
    s.set("legacy_a", b'{"x":1}')
    s.set("legacy_a", b'{"x":2}')
    assert s.get("legacy_a") == b'{"x":2}'


def test_sqlite_persists_across_connections(tmp_path):
    path = str(tmp_path / "nested" / "state.db")
    s = SQLiteStorage(path)
    LegacyStore(s).register_record(
        LegacyRecord(id="r1", owner="0xAAA", category="Social Media", encrypted_payload="FHE-x", created_at=1)
    )
    s.close()
    assert not s.is_available()

    reopened = LegacyStore(SQLiteStorage(path))
    assert [r.id for r in reopened.list_all()] == ["r1"]


def test_sqlite_audit_log(tmp_path):
    s = SQLiteStorage(str(tmp_path / "state.db"))
    s.log_event("legacy.expired", {"id": "r1", "by": "0xAAA"})
    [(ts, event_type, payload)] = s.list_events()
    assert event_type == "legacy.expired"
    assert payload == {"id": "r1", "by": "0xAAA"}
    assert ts.endswith("Z")


class FakeResponse:
    def __init__(self, status_code=200, content=b""):
        self.status_code = status_code
        self.content = content
        self.text = content.decode("utf-8", "replace")
        self.reason = "OK" if status_code < 400 else "ERR"

    @property
    def ok(self):
        return self.status_code < 400


def test_http_storage_routes_and_grant(monkeypatch):
    calls = []

    def fake_get(url, headers=None, timeout=None):
        calls.append(("GET", url, headers))
        if url.endswith("/healthz"):
            return FakeResponse(200)
        if url.endswith("/data/legacy_keys"):
            return FakeResponse(200, b'["a"]')
        return FakeResponse(404)

    def fake_put(url, data=None, headers=None, timeout=None):
        calls.append(("PUT", url, headers))
        return FakeResponse(204)

    monkeypatch.setattr(requests, "get", fake_get)
    monkeypatch.setattr(requests, "put", fake_put)

    s = HTTPStorage("http://store.local/")
    s.set_grant("grant-123")
    assert s.is_available()
    assert s.get("legacy_keys") == b'["a"]'
    assert s.get("legacy_zzz") == b""
    s.set("legacy_a", b"{}")

    assert calls[-1][1] == "http://store.local/data/legacy_a"
    assert calls[-1][2]["Authorization"] == "Bearer grant-123"


def test_http_storage_failures_are_unavailable(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(requests, "get", boom)
    monkeypatch.setattr(requests, "put", lambda *a, **k: FakeResponse(503))

    s = HTTPStorage("http://store.local")
    assert not s.is_available()
    with pytest.raises(StoreUnavailableError):
        s.get("legacy_keys")
    with pytest.raises(StoreUnavailableError):
        s.set("legacy_a", b"{}")


def test_store_factory_modes(monkeypatch, tmp_path):
    monkeypatch.delenv("HERITAGE_STORE_PROVIDER", raising=False)
    monkeypatch.setenv("HERITAGE_DB_PATH", str(tmp_path / "env.db"))
    assert isinstance(load_store_provider(), SQLiteStorage)

    monkeypatch.setenv("HERITAGE_STORE_PROVIDER", "memory")
    assert isinstance(load_store_provider(), InMemoryStorage)

    monkeypatch.setenv("HERITAGE_STORE_PROVIDER", "http")
    monkeypatch.setenv("HERITAGE_STORE_URL", "http://gateway:9000")
    http = load_store_provider()
    assert isinstance(http, HTTPStorage)
    assert http.base_url == "http://gateway:9000"

    assert isinstance(load_store_provider({"provider": "memory"}), InMemoryStorage)
    with pytest.raises(ValueError):
        load_store_provider({"provider": "ipfs"})


def test_sqlite_audit_trail_from_lifecycle(tmp_path):
    from heritage_core.crypto import EncodingConfidentiality
    from heritage_core.lifecycle import LifecycleManager
    from heritage_core.models import LegacyDraft, Session

    s = SQLiteStorage(str(tmp_path / "state.db"))
    session = Session(caller_identity="0xAAA", store=LegacyStore(s))
    mgr = LifecycleManager(EncodingConfidentiality())
    rid = mgr.create(session, LegacyDraft(category="Social Media", beneficiary="0xBEEF", sensitive_info="pw"))
    mgr.expire(session, rid)

    assert [(et, p["id"]) for _, et, p in s.list_events()] == [
        ("legacy.created", rid),
        ("legacy.expired", rid),
    ]
