from __future__ import annotations

"""
SubDB client library.

Fingerprints local media files and queries, downloads or uploads subtitles
on the SubDB service.
"""

from subdb.core.client import SubDBClient
from subdb.core.fingerprint import fingerprint_file, hash_stream
from subdb.domain.config import ClientConfig
from subdb.domain.constants import PRODUCTION_ENDPOINT, SANDBOX_ENDPOINT, __version__
from subdb.domain.errors import (
    ConfigError,
    DuplicateSubtitleError,
    FileTooSmallError,
    HTTPStatusError,
    InvalidMediaTypeError,
    MissingIdentityError,
    NoSubtitleError,
    SubDBError,
    TransportError,
)
from subdb.domain.models import APIResult, ClientIdentity, ErrorKind

__all__ = [
    "SubDBClient",
    "ClientConfig",
    "ClientIdentity",
    "APIResult",
    "ErrorKind",
    "fingerprint_file",
    "hash_stream",
    "PRODUCTION_ENDPOINT",
    "SANDBOX_ENDPOINT",
    "SubDBError",
    "ConfigError",
    "MissingIdentityError",
    "FileTooSmallError",
    "NoSubtitleError",
    "DuplicateSubtitleError",
    "InvalidMediaTypeError",
    "HTTPStatusError",
    "TransportError",
    "__version__",
]
