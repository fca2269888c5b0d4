from __future__ import annotations

"""
Unit tests for the SubDB API Client.

Verifies:
1. Identity is mandatory and checked before any file or network access.
2. Comma-split parsing of languages and search responses.
3. Query construction (hash embedding, language lower-casing).
4. Status code mapping for GET and upload.
5. Endpoint routing: reads to sandbox, uploads to production.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from subdb.core.client import SubDBClient
from subdb.domain.config import ClientConfig
from subdb.domain.constants import PRODUCTION_ENDPOINT, SANDBOX_ENDPOINT
from subdb.domain.models import ErrorKind

FP = "3e35ba1ffe2ab27d72b59d24cbd40fa5"

# -----------------------------------------------------------------------------
# IDENTITY
# -----------------------------------------------------------------------------

def test_user_agent_format() -> None:
    c = SubDBClient()
    assert c.user_agent == ""
    c.set_user_agent("SubLoader", "0.5", "https://github.com/x/subloader")
    assert c.user_agent == "SubDB/1.0 (SubLoader/0.5; https://github.com/x/subloader)"


def test_user_agent_can_be_reset() -> None:
    c = SubDBClient()
    c.set_user_agent("a", "1", "u")
    c.set_user_agent("b", "2", "v")
    assert c.user_agent == "SubDB/1.0 (b/2; v)"


def test_operations_without_identity_make_no_network_call(media_file: Path, subtitle_file: Path) -> None:
    """TC-01: Every network operation fails with MISSING_IDENTITY before any request."""
    c = SubDBClient()

    with patch("requests.get") as mock_get, patch("requests.post") as mock_post:
        results = [
            c.list_languages(),
            c.search(str(media_file)),
            c.download(str(media_file), "en"),
            c.upload(str(media_file), str(subtitle_file)),
        ]

    for result in results:
        assert result.ok is False
        assert result.error is ErrorKind.MISSING_IDENTITY
        assert result.value is None
    mock_get.assert_not_called()
    mock_post.assert_not_called()


def test_missing_identity_checked_before_file_access(tmp_path: Path) -> None:
    result = SubDBClient().search(str(tmp_path / "missing.mkv"))
    assert result.error is ErrorKind.MISSING_IDENTITY

# -----------------------------------------------------------------------------
# LIST PARSING
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("body, expected", [
    ("en,fr,es", ["en", "fr", "es"]),
    ("", [""]),
    ("en", ["en"]),
    ("en, pt", ["en", " pt"]),
])
def test_list_languages_raw_split(client: SubDBClient, fake_response, body: str, expected) -> None:
    """TC-02: The body is split on commas with no trimming or filtering."""
    with patch("requests.get", return_value=fake_response(200, body)) as mock_get:
        result = client.list_languages()

    assert result.ok is True
    assert result.value == expected
    args, kwargs = mock_get.call_args
    assert args[0] == f"{SANDBOX_ENDPOINT}/?action=languages"


def test_search_embeds_hash_and_versions(client: SubDBClient, media_file: Path, fake_response) -> None:
    with patch("requests.get", return_value=fake_response(200, "en:1,pt:2")) as mock_get:
        result = client.search(str(media_file))

    assert result.ok is True
    assert result.value == ["en:1", "pt:2"]
    args, _ = mock_get.call_args
    assert args[0] == f"{SANDBOX_ENDPOINT}/?action=search&hash={FP}&versions"


def test_search_not_found(client: SubDBClient, media_file: Path, fake_response) -> None:
    with patch("requests.get", return_value=fake_response(404)):
        result = client.search(str(media_file))

    assert result.error is ErrorKind.NO_SUBTITLE
    assert result.value is None
    assert result.status_code == 404

# -----------------------------------------------------------------------------
# DOWNLOAD
# -----------------------------------------------------------------------------

def test_download_returns_raw_body(client: SubDBClient, media_file: Path, fake_response) -> None:
    body = b"1\r\n00:00:01,000 --> 00:00:02,000\r\nHello\r\n"
    with patch("requests.get", return_value=fake_response(200, body)):
        result = client.download(str(media_file), "en")

    assert result.ok is True
    assert result.value == body


def test_download_language_is_case_insensitive(client: SubDBClient, media_file: Path, fake_response) -> None:
    """TC-03: 'EN' and 'en' produce identical requests."""
    with patch("requests.get", return_value=fake_response(200, "x")) as mock_get:
        client.download(str(media_file), "EN")
        client.download(str(media_file), "en")

    first, second = mock_get.call_args_list
    assert first.args[0] == second.args[0]
    assert first.args[0] == f"{SANDBOX_ENDPOINT}/?action=download&hash={FP}&language=en"


def test_download_not_found_maps_to_no_subtitle(client: SubDBClient, media_file: Path, fake_response) -> None:
    with patch("requests.get", return_value=fake_response(404)):
        result = client.download(str(media_file), "fr")

    assert result.ok is False
    assert result.error is ErrorKind.NO_SUBTITLE


def test_download_too_small_file_skips_network(client: SubDBClient, make_file) -> None:
    small = make_file("tiny.mkv", b"\x00" * 1024)
    with patch("requests.get") as mock_get:
        result = client.download(str(small), "en")

    assert result.error is ErrorKind.FILE_TOO_SMALL
    mock_get.assert_not_called()


def test_search_missing_file(client: SubDBClient, tmp_path: Path) -> None:
    with patch("requests.get") as mock_get:
        result = client.search(str(tmp_path / "gone.mkv"))

    assert result.error is ErrorKind.FILE_NOT_FOUND
    assert isinstance(result.exception, FileNotFoundError)
    mock_get.assert_not_called()

# -----------------------------------------------------------------------------
# UPLOAD
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("status, ok, kind", [
    (201, True, None),
    (403, False, ErrorKind.DUPLICATE),
    (415, False, ErrorKind.INVALID_MEDIA_TYPE),
    (500, False, ErrorKind.HTTP_ERROR),
])
def test_upload_status_mapping(client, media_file, subtitle_file, fake_response, status, ok, kind) -> None:
    """TC-04: Upload status codes map to the documented outcomes."""
    with patch("requests.post", return_value=fake_response(status)):
        result = client.upload(str(media_file), str(subtitle_file))

    assert result.ok is ok
    assert result.error is kind
    assert result.value is None


def test_upload_targets_production_with_multipart_form(client, media_file, subtitle_file, fake_response) -> None:
    captured = {}

    def _post(url, **kwargs):
        captured["url"] = url
        captured["kwargs"] = kwargs
        (name, fh), = [part[1] for part in kwargs["files"] if part[0] == "file"]
        captured["filename"] = name
        captured["content"] = fh.read()
        return fake_response(201)

    with patch("requests.post", side_effect=_post):
        result = client.upload(str(media_file), str(subtitle_file))

    assert result.ok is True
    assert captured["url"] == f"{PRODUCTION_ENDPOINT}/?action=upload"
    assert captured["filename"] == "movie.en.srt"
    assert captured["content"] == subtitle_file.read_bytes()
    assert ("hash", (None, FP)) in captured["kwargs"]["files"]
    assert captured["kwargs"]["timeout"] is None


def test_upload_missing_subtitle(client, media_file, tmp_path) -> None:
    with patch("requests.post") as mock_post:
        result = client.upload(str(media_file), str(tmp_path / "absent.srt"))

    assert result.error is ErrorKind.FILE_NOT_FOUND
    mock_post.assert_not_called()

# -----------------------------------------------------------------------------
# CONFIGURATION
# -----------------------------------------------------------------------------

def test_endpoints_are_injected(media_file, subtitle_file, fake_response) -> None:
    config = ClientConfig(
        read_endpoint="http://reads.local",
        upload_endpoint="http://writes.local",
        read_timeout=2.5,
        upload_timeout=30.0,
    )
    c = SubDBClient(config)
    c.set_user_agent("t", "1", "u")

    with patch("requests.get", return_value=fake_response(200, "en")) as mock_get, \
            patch("requests.post", return_value=fake_response(201)) as mock_post:
        c.list_languages()
        c.upload(str(media_file), str(subtitle_file))

    assert mock_get.call_args.args[0].startswith("http://reads.local/?")
    assert mock_get.call_args.kwargs["timeout"] == 2.5
    assert mock_post.call_args.args[0].startswith("http://writes.local/?")
    assert mock_post.call_args.kwargs["timeout"] == 30.0


def test_fingerprint_operation_needs_no_identity(media_file: Path) -> None:
    result = SubDBClient().fingerprint(str(media_file))
    assert result.ok is True
    assert result.value == FP
