from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from inbox_tasks.gmail import client as gmail_client
from inbox_tasks.gmail.client import GmailClient


def _creds(*, valid: bool, expired: bool = False, refresh_token: str | None = None) -> MagicMock:
    creds = MagicMock()
    creds.valid = valid
    creds.expired = expired
    creds.refresh_token = refresh_token
    return creds


def test_service_requires_connect() -> None:
    with pytest.raises(RuntimeError):
        GmailClient(_creds(valid=True)).service


def test_connect_refreshes_expired_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    build = MagicMock(return_value="service")
    monkeypatch.setattr(gmail_client, "build", build)
    creds = _creds(valid=False, expired=True, refresh_token="r")

    client = GmailClient(creds)
    client.connect()

    creds.refresh.assert_called_once()
    assert client.service == "service"
    build.assert_called_once_with("gmail", "v1", credentials=creds, cache_discovery=False)


def test_connect_keeps_valid_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(gmail_client, "build", MagicMock(return_value="service"))
    creds = _creds(valid=True)

    GmailClient(creds).connect()

    creds.refresh.assert_not_called()


def test_list_and_get_messages_use_user_id() -> None:
    service = MagicMock()
    messages = service.users.return_value.messages.return_value
    messages.list.return_value.execute.return_value = {"messages": [{"id": "m1"}, {"id": "m2"}]}
    messages.get.return_value.execute.return_value = {"id": "m1"}

    client = GmailClient(_creds(valid=True))
    client._service = service

    assert client.list_messages(query="after:1", max_results=5) == ["m1", "m2"]
    messages.list.assert_called_once_with(userId="me", q="after:1", maxResults=5)
    assert client.get_message("m1") == {"id": "m1"}
    messages.get.assert_called_once_with(userId="me", id="m1", format="full")


def test_list_messages_handles_empty_listing() -> None:
    service = MagicMock()
    service.users.return_value.messages.return_value.list.return_value.execute.return_value = {
        "resultSizeEstimate": 0
    }
    client = GmailClient(_creds(valid=True))
    client._service = service

    assert client.list_messages() == []
