from __future__ import annotations

from http import HTTPStatus
from typing import Dict

CLOSE_CONNECTION = "close"


def build_headers(user_agent: str) -> Dict[str, str]:
    """Headers shared by every request; connections are never reused."""
    return {"User-Agent": user_agent, "Connection": CLOSE_CONNECTION}


def status_text(status_code: int) -> str:
    """Canonical reason phrase for an HTTP status code."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return f"Status {status_code}"
