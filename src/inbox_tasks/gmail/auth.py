from __future__ import annotations

from typing import Optional

from google_auth_oauthlib.flow import Flow

from inbox_tasks.config.settings import Settings
from inbox_tasks.gmail.client import SCOPES


def build_flow(settings: Settings, redirect_uri: str, state: Optional[str] = None) -> Flow:
    """
    OAuth web flow for the Gmail read-only scope.

    Prefers the client file in the secrets dir; otherwise uses
    GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET from the environment.
    """
    if settings.client_secrets_path.exists():
        flow = Flow.from_client_secrets_file(
            str(settings.client_secrets_path),
            scopes=SCOPES,
            state=state,
        )
    elif settings.google_client_id and settings.google_client_secret:
        client_config = {
            "web": {
                "client_id": settings.google_client_id,
                "client_secret": settings.google_client_secret,
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://oauth2.googleapis.com/token",
                "redirect_uris": [redirect_uri],
            }
        }
        flow = Flow.from_client_config(client_config, scopes=SCOPES, state=state)
    else:
        raise RuntimeError(
            f"Missing Gmail OAuth client at {settings.client_secrets_path}. "
            "Provide credentials.json or set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET."
        )

    flow.redirect_uri = redirect_uri
    return flow
