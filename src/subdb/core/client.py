from __future__ import annotations

"""
SubDB API Client.

Builds the four service operations (languages, search, download, upload)
on top of the fingerprint engine and the HTTP transport. Every operation
returns an APIResult; enumerated failures are reported, never raised.

A client instance is not synchronized: set its identity once before
sharing it between threads.
"""

import logging
from typing import List, Optional
from urllib.parse import quote

from subdb.core.fingerprint import fingerprint_file
from subdb.domain.config import ClientConfig
from subdb.domain.errors import FileTooSmallError
from subdb.domain.models import (
    APIResult,
    ClientIdentity,
    ErrorKind,
    create_error_result,
    create_success_result,
    result_from_exception,
)
from subdb.infra.network import get_request, post_subtitle

logger = logging.getLogger(__name__)

LIST_ENCODING = "utf-8"


class SubDBClient:
    """
    Synchronous client for the SubDB service.

    Args:
        config: Endpoint routing and timeouts; defaults to sandbox reads
                and production uploads.
        identity: Optional pre-built client identity.
    """

    def __init__(self, config: Optional[ClientConfig] = None, identity: Optional[ClientIdentity] = None):
        self.config = config or ClientConfig()
        self.identity = identity

    # -------------------------------------------------------------------------
    # IDENTITY
    # -------------------------------------------------------------------------

    def set_user_agent(self, client_name: str, client_version: str, client_url: str) -> None:
        """Set (or replace) the identity sent with every request."""
        self.identity = ClientIdentity(client_name, client_version, client_url)
        logger.debug(f"User agent set: {self.identity.user_agent}")

    @property
    def user_agent(self) -> str:
        return self.identity.user_agent if self.identity else ""

    # -------------------------------------------------------------------------
    # OPERATIONS
    # -------------------------------------------------------------------------

    def list_languages(self) -> APIResult:
        """List the languages of all subtitles stored in the database."""
        missing = self._check_identity()
        if missing:
            return missing
        return _split_codes(self._get("action=languages"))

    def search(self, file_path: str) -> APIResult:
        """List the subtitle languages available for a media file."""
        missing = self._check_identity()
        if missing:
            return missing

        fp = self._fingerprint(file_path)
        if not fp.ok:
            return fp
        return _split_codes(self._get(f"action=search&hash={fp.value}&versions"))

    def download(self, file_path: str, lang_code: str) -> APIResult:
        """
        Download the subtitle of a media file in the given language.

        The language code is lower-cased before transmission. The subtitle is
        returned as the raw bytes sent by the server; the caller owns decoding
        and persistence.

        Args:
            file_path: Media file to fingerprint.
            lang_code: Two-letter language code, any case.

        Returns:
            APIResult: Subtitle bytes on success.
        """
        missing = self._check_identity()
        if missing:
            return missing

        fp = self._fingerprint(file_path)
        if not fp.ok:
            return fp
        lang = quote(lang_code.lower(), safe="")
        return self._get(f"action=download&hash={fp.value}&language={lang}")

    def upload(self, file_path: str, subtitle_file_path: str) -> APIResult:
        """
        Upload a subtitle for a media file.

        Args:
            file_path: Media file whose fingerprint identifies the subtitle.
            subtitle_file_path: Local subtitle file to transmit.

        Returns:
            APIResult: ok with no value on success, or DUPLICATE,
                       INVALID_MEDIA_TYPE and the generic kinds.
        """
        missing = self._check_identity()
        if missing:
            return missing

        fp = self._fingerprint(file_path)
        if not fp.ok:
            return fp

        logger.info(f"Uploading {subtitle_file_path} for hash {fp.value}")
        return post_subtitle(
            self.config.upload_endpoint,
            fp.value,
            subtitle_file_path,
            self.user_agent,
            self.config.upload_timeout,
        )

    def fingerprint(self, file_path: str) -> APIResult:
        """Compute the fingerprint of a media file without any network call."""
        return self._fingerprint(file_path)

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _check_identity(self) -> Optional[APIResult]:
        if self.identity is None:
            return create_error_result(
                ErrorKind.MISSING_IDENTITY,
                "no user agent set required to access SubDB API",
            )
        return None

    def _fingerprint(self, file_path: str) -> APIResult:
        try:
            return create_success_result(fingerprint_file(file_path))
        except (FileTooSmallError, OSError) as e:
            logger.debug(f"Cannot fingerprint {file_path}: {e}")
            return result_from_exception(e)

    def _get(self, query: str) -> APIResult:
        return get_request(self.config.read_endpoint, query, self.user_agent, self.config.read_timeout)


def _split_codes(result: APIResult) -> APIResult:
    """
    Split a successful body on commas; the split is raw (no trimming).

    Language lists are ASCII in practice; the body is decoded as UTF-8.
    """
    if not result.ok:
        return result
    codes: List[str] = result.value.decode(LIST_ENCODING, errors="replace").split(",")
    return create_success_result(codes, status_code=result.status_code)
