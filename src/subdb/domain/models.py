from __future__ import annotations

"""
SubDB Domain Data Models.

Defines the client identity, the enumerated error kinds and the unified
result object returned by every API client operation, together with the
factory functions used to build results.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Type

from subdb.domain.constants import USER_AGENT_TEMPLATE
from subdb.domain.errors import (
    DuplicateSubtitleError,
    FileTooSmallError,
    HTTPStatusError,
    InvalidMediaTypeError,
    MissingIdentityError,
    NoSubtitleError,
    SubDBError,
    TransportError,
)

# -----------------------------------------------------------------------------
# IDENTITY
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ClientIdentity:
    """
    Client identification sent to the service on every request.

    Attributes:
        name: Client application name.
        version: Client application version.
        url: Homepage of the client application.
    """
    name: str
    version: str
    url: str

    @property
    def user_agent(self) -> str:
        return USER_AGENT_TEMPLATE.format(name=self.name, version=self.version, url=self.url)

# -----------------------------------------------------------------------------
# ERROR KINDS
# -----------------------------------------------------------------------------

class ErrorKind(str, Enum):
    MISSING_IDENTITY = "missing_identity"
    FILE_TOO_SMALL = "file_too_small"
    FILE_NOT_FOUND = "file_not_found"
    IO_ERROR = "io_error"
    NO_SUBTITLE = "no_subtitle"
    DUPLICATE = "duplicate"
    INVALID_MEDIA_TYPE = "invalid_media_type"
    HTTP_ERROR = "http_error"
    TRANSPORT_ERROR = "transport_error"


# Kinds whose exception can be rebuilt from the message alone
_SIMPLE_ERRORS: Dict[ErrorKind, Type[SubDBError]] = {
    ErrorKind.MISSING_IDENTITY: MissingIdentityError,
    ErrorKind.NO_SUBTITLE: NoSubtitleError,
    ErrorKind.DUPLICATE: DuplicateSubtitleError,
    ErrorKind.INVALID_MEDIA_TYPE: InvalidMediaTypeError,
    ErrorKind.TRANSPORT_ERROR: TransportError,
}

# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class APIResult:
    """
    Outcome of a single client operation.

    Either `ok` is True and `value` carries the payload, or `error` names the
    failure kind and `value` is None. Results never carry partial data.

    Attributes:
        ok: Flag indicating success.
        value: Operation payload (list of codes, subtitle text, fingerprint or None).
        error: Failure kind when ok is False.
        message: Human readable description of the failure.
        status_code: HTTP status observed, if a response was received.
        exception: Original exception for I/O and transport failures.
    """
    ok: bool
    value: Any = None
    error: Optional[ErrorKind] = None
    message: str = ""
    status_code: Optional[int] = None
    exception: Optional[BaseException] = None

    def raise_for_error(self) -> None:
        """
        Raise the exception matching this result's error kind.

        I/O failures re-raise the original OSError unchanged. Does nothing
        for successful results.
        """
        if self.ok:
            return

        if self.error in (ErrorKind.FILE_NOT_FOUND, ErrorKind.IO_ERROR, ErrorKind.FILE_TOO_SMALL):
            if self.exception is not None:
                raise self.exception
            if self.error is ErrorKind.FILE_TOO_SMALL:
                raise FileTooSmallError(0)
            raise OSError(self.message)

        if self.error is ErrorKind.HTTP_ERROR:
            raise HTTPStatusError(self.status_code or 0, self.message)

        exc_cls = _SIMPLE_ERRORS.get(self.error) if self.error else None
        if exc_cls is None:
            raise SubDBError(self.message)
        if self.exception is not None:
            raise exc_cls(self.message) from self.exception
        raise exc_cls(self.message)

    def unwrap(self) -> Any:
        """Return the payload or raise the matching exception."""
        self.raise_for_error()
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view used by the CLI JSON renderer."""
        return {
            "ok": self.ok,
            "value": _jsonable(self.value),
            "error": self.error.value if self.error else None,
            "message": self.message,
            "status_code": self.status_code,
        }


def _jsonable(value: Any) -> Any:
    """Bytes payloads are rendered as UTF-8 text for JSON consumers."""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_success_result(value: Any = None, status_code: Optional[int] = None) -> APIResult:
    return APIResult(ok=True, value=value, status_code=status_code)


def create_error_result(
        error: ErrorKind,
        message: str,
        status_code: Optional[int] = None,
        exception: Optional[BaseException] = None,
) -> APIResult:
    """
    Create a failed result instance.

    Args:
        error: Enumerated failure kind.
        message: Descriptive error text.
        status_code: HTTP status if a response was received.
        exception: Original exception kept for verbatim re-raising.

    Returns:
        APIResult: An immutable error result object.
    """
    return APIResult(
        ok=False,
        value=None,
        error=error,
        message=message,
        status_code=status_code,
        exception=exception,
    )


def result_from_exception(exc: BaseException) -> APIResult:
    """
    Translate a local failure raised while preparing a request into a result.

    Args:
        exc: Exception raised by the fingerprint engine or file access.

    Returns:
        APIResult: Error result preserving the original exception.
    """
    if isinstance(exc, FileTooSmallError):
        return create_error_result(ErrorKind.FILE_TOO_SMALL, str(exc), exception=exc)
    if isinstance(exc, FileNotFoundError):
        return create_error_result(ErrorKind.FILE_NOT_FOUND, str(exc), exception=exc)
    if isinstance(exc, OSError):
        return create_error_result(ErrorKind.IO_ERROR, str(exc), exception=exc)
    if isinstance(exc, MissingIdentityError):
        return create_error_result(ErrorKind.MISSING_IDENTITY, str(exc), exception=exc)
    raise exc
