from __future__ import annotations

"""
SubDB Error Taxonomy.

Exceptions mirroring the error kinds reported by the API client. They are
raised internally by the fingerprint engine and by APIResult.raise_for_error();
the public client surface reports them as result values instead.
"""

from typing import Optional


class SubDBError(Exception):
    """Base class for every SubDB client failure."""
    pass


class ConfigError(SubDBError):
    """
    Invalid or unreadable configuration source.

    Raised when a configuration file exists but cannot be parsed.
    """
    def __init__(self, message: str, config_path: Optional[str] = None):
        self.config_path = config_path
        super().__init__(message)


class MissingIdentityError(SubDBError):
    """No user agent has been set; the service rejects anonymous clients."""

    def __init__(self, message: str = "no user agent set required to access SubDB API"):
        super().__init__(message)


class FileTooSmallError(SubDBError):
    """
    The media file cannot be fingerprinted.

    Attributes:
        path: File that was inspected (may be None for raw streams).
        size: Observed size in bytes.
    """
    def __init__(self, size: int, path: Optional[str] = None):
        self.path = path
        self.size = size
        super().__init__(f"the supplied file is too small ({size} bytes)")


class NoSubtitleError(SubDBError):
    """The server has no subtitle for the requested hash."""

    def __init__(self, message: str = "no subtitle found for the requested hash on the server"):
        super().__init__(message)


class DuplicateSubtitleError(SubDBError):
    def __init__(self, message: str = "subtitle file already exists in database"):
        super().__init__(message)


class InvalidMediaTypeError(SubDBError):
    def __init__(self, message: str = "subtitle file is not supported by SubDB"):
        super().__init__(message)


class HTTPStatusError(SubDBError):
    """
    Unmapped HTTP status returned by the service.

    Attributes:
        status_code: Numeric HTTP status.
        status_text: Canonical reason phrase for the status.
    """
    def __init__(self, status_code: int, status_text: str):
        self.status_code = status_code
        self.status_text = status_text
        super().__init__(status_text)


class TransportError(SubDBError):
    """The request never produced an HTTP response (DNS, refused, timeout)."""
    pass
