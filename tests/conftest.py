from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Puts the 'src' directory on sys.path so the package imports uninstalled.
2. Provides media file factories, a configured client and HTTP response doubles.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Union
from unittest.mock import MagicMock

import pytest
import requests

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from subdb.core.client import SubDBClient  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Return a factory writing `data` to `tmp_path / name`."""
    def _make(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _make


@pytest.fixture
def media_file(make_file: Callable[[str, bytes], Path]) -> Path:
    """A 128 KiB media file: zero bytes then 0xFF bytes."""
    return make_file("movie.mkv", b"\x00" * 65536 + b"\xff" * 65536)


@pytest.fixture
def subtitle_file(make_file: Callable[[str, bytes], Path]) -> Path:
    return make_file("movie.en.srt", b"1\n00:00:01,000 --> 00:00:02,000\nHello\n")


@pytest.fixture
def client() -> SubDBClient:
    c = SubDBClient()
    c.set_user_agent("pytest", "0.1", "https://example.org")
    return c


@pytest.fixture
def fake_response() -> Callable[..., MagicMock]:
    """Return a factory building stand-ins for requests.Response (str bodies are UTF-8 encoded)."""
    def _build(status_code: int, body: Union[str, bytes] = b"") -> MagicMock:
        resp = MagicMock()
        resp.status_code = status_code
        resp.content = body.encode("utf-8") if isinstance(body, str) else body
        return resp
    return _build


@pytest.fixture
def http_response() -> Callable[..., requests.Response]:
    """
    Return a factory building real requests.Response objects.

    The text encoding is derived from the headers the way requests does it,
    so a bare text/plain body decodes as ISO-8859-1 through `.text`.
    """
    def _build(status_code: int, body: bytes, content_type: str = "text/plain") -> requests.Response:
        resp = requests.Response()
        resp.status_code = status_code
        resp.headers["Content-Type"] = content_type
        resp.encoding = requests.utils.get_encoding_from_headers(resp.headers)
        resp._content = body
        resp._content_consumed = True
        return resp
    return _build
