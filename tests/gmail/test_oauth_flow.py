from __future__ import annotations

import json
from pathlib import Path

import pytest

from inbox_tasks.config.settings import Settings
from inbox_tasks.gmail.auth import build_flow
from inbox_tasks.gmail.client import SCOPES

REDIRECT = "http://localhost:8000/api/auth/callback"


def test_flow_from_environment_client(tmp_path: Path) -> None:
    settings = Settings(
        secrets_dir=tmp_path,
        logs_dir=tmp_path,
        google_client_id="id.apps.googleusercontent.com",
        google_client_secret="secret",
    )

    flow = build_flow(settings, REDIRECT)

    assert flow.redirect_uri == REDIRECT
    assert flow.client_config["client_id"] == "id.apps.googleusercontent.com"
    assert list(flow.oauth2session.scope) == SCOPES


def test_client_file_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "credentials.json").write_text(
        json.dumps(
            {
                "web": {
                    "client_id": "from-file",
                    "client_secret": "s",
                    "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                    "token_uri": "https://oauth2.googleapis.com/token",
                }
            }
        ),
        encoding="utf-8",
    )
    settings = Settings(
        secrets_dir=tmp_path,
        logs_dir=tmp_path,
        google_client_id="from-env",
        google_client_secret="secret",
    )

    flow = build_flow(settings, REDIRECT, state="abc")

    assert flow.client_config["client_id"] == "from-file"
    assert flow.oauth2session.state == "abc"


def test_missing_client_raises(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError):
        build_flow(Settings(secrets_dir=tmp_path, logs_dir=tmp_path), REDIRECT)
