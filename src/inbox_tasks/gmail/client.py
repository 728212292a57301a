from __future__ import annotations

import logging
from typing import Any, Dict, List

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

logger = logging.getLogger(__name__)

# Reading messages is all the task list needs.
SCOPES = ["https://www.googleapis.com/auth/gmail.readonly"]


class GmailClient:
    def __init__(self, credentials: Credentials, user_id: str = "me"):
        # Gmail userId, "me" refers to the authenticated user.
        self._creds = credentials
        self._user_id = user_id
        self._service = None

    def connect(self) -> None:
        """Create an authenticated Gmail API service client."""
        creds = self._creds
        if not creds.valid and creds.expired and creds.refresh_token:
            logger.info("Refreshing expired Gmail credentials")
            creds.refresh(Request())

        self._service = build("gmail", "v1", credentials=creds, cache_discovery=False)

    @property
    def credentials(self) -> Credentials:
        return self._creds

    @property
    def service(self):
        if self._service is None:
            raise RuntimeError("GmailClient is not connected. Call connect() first.")
        return self._service

    def list_messages(self, query: str = "", max_results: int = 10) -> List[str]:
        """
        List message IDs matching a Gmail search query.
        Example query: 'after:1718323200'
        """
        resp = (
            self.service.users()
            .messages()
            .list(userId=self._user_id, q=query, maxResults=max_results)
            .execute()
        )
        msgs = resp.get("messages", [])
        return [m["id"] for m in msgs]

    def get_message(self, message_id: str, fmt: str = "full") -> Dict[str, Any]:
        """
        Fetch a full message resource.
        fmt: 'full' | 'metadata' | 'minimal' | 'raw'
        """
        return (
            self.service.users()
            .messages()
            .get(userId=self._user_id, id=message_id, format=fmt)
            .execute()
        )
