from __future__ import annotations

import base64
from typing import Dict, Optional


def _decode(data: str) -> str:
    # Gmail strips base64url padding on some parts.
    padded = data + "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(padded).decode("utf-8", errors="replace")


def headers_from_payload(payload: dict) -> Dict[str, str]:
    """Header name -> value. Later duplicates win, matching Gmail's display."""
    return {
        h["name"]: h.get("value", "")
        for h in payload.get("headers", []) or []
        if h.get("name")
    }


def extract_body_from_payload(payload: dict) -> str:
    """
    Extract plain text body from Gmail message payload.
    Falls back to HTML if plain text is unavailable.
    """
    def find_part(part: dict, mime_type: str) -> Optional[str]:
        # Depth-first search through multipart payloads.
        if part.get("mimeType") == mime_type and part.get("body", {}).get("data"):
            return _decode(part["body"]["data"])
        for child in part.get("parts", []) or []:
            found = find_part(child, mime_type)
            if found:
                return found
        return None

    if not payload.get("parts") and payload.get("body", {}).get("data"):
        return _decode(payload["body"]["data"])

    return find_part(payload, "text/plain") or find_part(payload, "text/html") or ""
