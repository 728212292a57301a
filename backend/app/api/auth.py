from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, Tuple

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from google_auth_oauthlib.flow import Flow

from backend.app.deps import get_session_store, get_settings
from backend.app.schemas import AuthUrlResponse
from inbox_tasks.config.settings import Settings
from inbox_tasks.gmail.auth import build_flow
from inbox_tasks.storage.sessions import DEFAULT_SESSION_ID, SessionStore

logger = logging.getLogger(__name__)

router = APIRouter()

# Pending flows by OAuth state, so the callback resumes the right session.
# Abandoned logins are evicted oldest first once the cap is reached.
MAX_PENDING_FLOWS = 100
_pending_lock = Lock()
_pending_flows: Dict[str, Tuple[str, Flow]] = {}


def _redirect_uri(request: Request, settings: Settings) -> str:
    if settings.google_redirect_uri:
        return settings.google_redirect_uri
    # Base URL is used to build the OAuth callback URL dynamically.
    base_url = str(request.base_url).rstrip("/")
    return f"{base_url}/api/auth/callback"


@router.get("/auth", response_model=AuthUrlResponse)
def start_oauth(
    request: Request,
    session_id: str = DEFAULT_SESSION_ID,
    settings: Settings = Depends(get_settings),
) -> AuthUrlResponse:
    try:
        flow = build_flow(settings, _redirect_uri(request, settings))
    except RuntimeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    auth_url, state = flow.authorization_url(
        access_type="offline",
        include_granted_scopes="true",
        prompt="consent",
    )
    with _pending_lock:
        while len(_pending_flows) >= MAX_PENDING_FLOWS:
            stale = next(iter(_pending_flows))
            del _pending_flows[stale]
            logger.info("Dropped pending OAuth flow %s", stale)
        _pending_flows[state] = (session_id, flow)
    return AuthUrlResponse(auth_url=auth_url, session_id=session_id)


@router.get("/auth/callback")
def oauth_callback(
    request: Request,
    state: str,
    code: str,
    store: SessionStore = Depends(get_session_store),
) -> HTMLResponse:
    with _pending_lock:
        pending = _pending_flows.pop(state, None)
    if pending is None:
        raise HTTPException(status_code=400, detail="Unknown or expired OAuth state.")

    session_id, flow = pending
    try:
        flow.fetch_token(code=code)
    except Exception as exc:
        logger.error("OAuth token exchange failed: %s", exc)
        raise HTTPException(status_code=400, detail="Authentication failed.") from exc

    store.save(session_id, flow.credentials)
    logger.info("Stored Gmail credentials for session %s", session_id)
    return HTMLResponse(
        "<h2>Authentication successful</h2><p>You can close this tab.</p>"
    )
