from __future__ import annotations

"""
SubDB HTTP Transport.

Executes the two request shapes used by the service, a query-string GET and
a multipart upload POST, and translates status codes into APIResult values.
"""

import logging
import os
from typing import Optional

import requests

from subdb.domain.models import (
    APIResult,
    ErrorKind,
    create_error_result,
    create_success_result,
    result_from_exception,
)
from subdb.infra.network.common import build_headers, status_text

logger = logging.getLogger(__name__)

UPLOAD_QUERY = "action=upload"

# -----------------------------------------------------------------------------
# GET
# -----------------------------------------------------------------------------

def get_request(endpoint: str, query: str, user_agent: str, timeout: Optional[float]) -> APIResult:
    """
    Perform a GET against the service and return the raw response body.

    404 maps to NO_SUBTITLE; any status other than 200 maps to HTTP_ERROR
    carrying the canonical status text. The body is only read after a 200.

    Args:
        endpoint: Base URL of the service.
        query: Pre-encoded query string (without leading '?').
        user_agent: Client identification header.
        timeout: Seconds before the request is abandoned.

    Returns:
        APIResult: Success carrying the body bytes, or a mapped error.
    """
    url = f"{endpoint}/?{query}"
    logger.debug(f"GET {url}")

    try:
        response = requests.get(url, headers=build_headers(user_agent), timeout=timeout)
    except requests.exceptions.Timeout as e:
        logger.warning(f"Network: GET {url} timed out after {timeout}s.")
        return create_error_result(ErrorKind.TRANSPORT_ERROR, f"request timed out: {e}", exception=e)
    except requests.exceptions.RequestException as e:
        logger.warning(f"Network: GET {url} failed: {e}")
        return create_error_result(ErrorKind.TRANSPORT_ERROR, str(e), exception=e)

    try:
        code = response.status_code
        if code == 404:
            return create_error_result(
                ErrorKind.NO_SUBTITLE,
                "no subtitle found for the requested hash on the server",
                status_code=code,
            )
        if code != 200:
            text = status_text(code)
            logger.warning(f"Network: GET {url} returned {code} {text}.")
            return create_error_result(ErrorKind.HTTP_ERROR, text, status_code=code)
        return create_success_result(response.content, status_code=code)
    finally:
        response.close()

# -----------------------------------------------------------------------------
# POST (UPLOAD)
# -----------------------------------------------------------------------------

def post_subtitle(
        endpoint: str,
        fingerprint: str,
        subtitle_path: str,
        user_agent: str,
        timeout: Optional[float],
) -> APIResult:
    """
    Upload a subtitle file as multipart/form-data.

    The form carries the subtitle bytes under 'file' (named after the
    subtitle's base name) followed by the media fingerprint under 'hash'.

    Args:
        endpoint: Base URL of the service.
        fingerprint: Fingerprint of the media file.
        subtitle_path: Local subtitle file to transmit.
        user_agent: Client identification header.
        timeout: Seconds before the upload is abandoned; None waits forever.

    Returns:
        APIResult: Success for any 2xx (201 expected), DUPLICATE for 403,
                   INVALID_MEDIA_TYPE for 415, HTTP_ERROR otherwise.
    """
    url = f"{endpoint}/?{UPLOAD_QUERY}"
    logger.debug(f"POST {url} ({os.path.basename(subtitle_path)})")

    try:
        with open(subtitle_path, "rb") as fh:
            files = [
                ("file", (os.path.basename(subtitle_path), fh)),
                ("hash", (None, fingerprint)),
            ]
            response = requests.post(url, files=files, headers=build_headers(user_agent), timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.warning(f"Network: upload to {url} failed: {e}")
        return create_error_result(ErrorKind.TRANSPORT_ERROR, str(e), exception=e)
    except OSError as e:
        return result_from_exception(e)

    try:
        return _map_upload_status(response.status_code)
    finally:
        response.close()


def _map_upload_status(code: int) -> APIResult:
    if code == 201:
        return create_success_result(None, status_code=code)
    if code == 403:
        return create_error_result(
            ErrorKind.DUPLICATE, "subtitle file already exists in database", status_code=code
        )
    if code == 415:
        return create_error_result(
            ErrorKind.INVALID_MEDIA_TYPE, "subtitle file is not supported by SubDB", status_code=code
        )
    if 200 <= code < 300:
        return create_success_result(None, status_code=code)

    text = status_text(code)
    logger.warning(f"Network: upload returned {code} {text}.")
    return create_error_result(ErrorKind.HTTP_ERROR, text, status_code=code)
