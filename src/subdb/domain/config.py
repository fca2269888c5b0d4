from __future__ import annotations

"""
Client Configuration Management.

Holds the endpoint routing, timeouts and optional client identity used to
build a SubDBClient. Configuration is resolved from defaults, an optional
JSON file and caller overrides, then validated into a ClientConfig.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from subdb.domain.constants import (
    PRODUCTION_ENDPOINT,
    READ_TIMEOUT,
    SANDBOX_ENDPOINT,
    UPLOAD_TIMEOUT,
)
from subdb.domain.errors import ConfigError
from subdb.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"

# -----------------------------------------------------------------------------
# CONFIGURATION MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable network configuration injected into SubDBClient.

    Read operations target the sandbox endpoint and uploads the production
    endpoint unless overridden.

    Attributes:
        read_endpoint: Base URL for languages/search/download.
        upload_endpoint: Base URL for upload.
        read_timeout: Seconds before a GET request is abandoned.
        upload_timeout: Seconds before an upload is abandoned; None waits forever.
    """
    read_endpoint: str = SANDBOX_ENDPOINT
    upload_endpoint: str = PRODUCTION_ENDPOINT
    read_timeout: float = READ_TIMEOUT
    upload_timeout: Optional[float] = UPLOAD_TIMEOUT

    @classmethod
    def from_dict(cls, conf: Dict[str, Any]) -> ClientConfig:
        """Build from a validated configuration dictionary."""
        return cls(
            read_endpoint=conf["read_endpoint"],
            upload_endpoint=conf["upload_endpoint"],
            read_timeout=conf["read_timeout"],
            upload_timeout=conf["upload_timeout"],
        )


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default configuration dictionary.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Endpoint routing
        "read_endpoint": SANDBOX_ENDPOINT,
        "upload_endpoint": PRODUCTION_ENDPOINT,

        # Timeouts
        "read_timeout": READ_TIMEOUT,
        "upload_timeout": UPLOAD_TIMEOUT,

        # Identity
        "client_name": None,
        "client_version": None,
        "client_url": None,
    }


def get_default_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# PERSISTENCE
# -----------------------------------------------------------------------------

def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a configuration file and merge it over the defaults.

    A missing file yields the defaults. A file that exists but cannot be
    read or parsed is an error, never silently ignored.

    Args:
        path: Explicit file path; defaults to the user data directory.

    Returns:
        Dict[str, Any]: Raw merged configuration (not yet validated).

    Raises:
        ConfigError: The file is unreadable, not JSON or not an object.
    """
    config_path = path or get_default_config_path()
    conf = get_default_config()

    if not os.path.exists(config_path):
        if path:
            raise ConfigError(f"Configuration file not found: {config_path}", config_path)
        logger.debug(f"No configuration file at {config_path}; using defaults.")
        return conf

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read configuration file: {e}", config_path) from e

    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a JSON object.", config_path)

    unknown = sorted(set(data) - set(conf))
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

    conf.update({k: v for k, v in data.items() if k in conf})
    logger.debug(f"Configuration loaded from {config_path}")
    return conf

# -----------------------------------------------------------------------------
# VALIDATION
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: If True, raise TypeError/ValueError instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if v is not None})

    for field in ("read_endpoint", "upload_endpoint"):
        merged[field] = _as_endpoint(merged.get(field), defaults[field], field, warnings, strict)

    merged["read_timeout"] = _as_timeout(
        merged.get("read_timeout"), defaults["read_timeout"], "read_timeout", warnings, strict
    )
    merged["upload_timeout"] = _as_timeout(
        merged.get("upload_timeout"), defaults["upload_timeout"], "upload_timeout", warnings, strict
    )

    for field in ("client_name", "client_version", "client_url"):
        merged[field] = _as_optional_str(merged.get(field), field, warnings, strict)

    return merged, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_endpoint(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if isinstance(value, str) and value.strip().startswith(("http://", "https://")):
        return value.strip().rstrip("/")

    msg = f"Invalid field '{field}': expected an http(s) URL, received {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_timeout(
        value: Any,
        fallback: Optional[float],
        field: str,
        warnings: List[str],
        strict: bool,
) -> Optional[float]:
    """Accept positive numbers (or numeric strings); None disables the timeout."""
    if value is None:
        return None
    if isinstance(value, bool):
        value = None
    elif isinstance(value, str) and not strict:
        try:
            value = float(value.strip())
        except ValueError:
            value = None
    if isinstance(value, (int, float)) and value > 0:
        return float(value)

    msg = f"Invalid field '{field}': expected a positive number of seconds."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_optional_str(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        v = value.strip()
        return v or None

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Ignored.")
    return None
