from __future__ import annotations

from google.oauth2.credentials import Credentials

from inbox_tasks.storage.sessions import InMemorySessionStore


def test_save_and_get_by_session_id() -> None:
    store = InMemorySessionStore()
    creds = Credentials(token="abc")

    store.save("default", creds)

    assert store.get("default") is creds
    assert store.get("other") is None
    assert len(store) == 1


def test_sessions_are_isolated_and_overwritable() -> None:
    store = InMemorySessionStore()
    first, second, replacement = Credentials(token="1"), Credentials(token="2"), Credentials(token="3")

    store.save("a", first)
    store.save("b", second)
    store.save("a", replacement)

    assert store.get("a") is replacement
    assert store.get("b") is second


def test_delete_is_idempotent() -> None:
    store = InMemorySessionStore()
    store.save("a", Credentials(token="1"))

    store.delete("a")
    store.delete("a")

    assert store.get("a") is None
    assert len(store) == 0
