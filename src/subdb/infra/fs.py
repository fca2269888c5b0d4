from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the per-user data directory and normalizes user supplied paths
so the configuration and CLI layers behave identically on Windows and
Unix-like systems.
"""

import os
from typing import Optional

APP_DIR_NAME = "SubDB"
UNIX_APP_DIR_NAME = ".subdb"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent client data.

    Standards:
    - Windows: %LOCALAPPDATA%/SubDB
    - Linux/Mac: ~/.subdb

    Returns:
        str: Absolute path to the data directory.
    """
    path = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str]) -> str:
    """
    Expand environment variables and '~' and return an absolute path.

    Returns an empty string for empty input.
    """
    p = (path or "").strip()
    if not p:
        return ""
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def default_subtitle_path(media_path: str, lang_code: str, extension: str = ".srt") -> str:
    """
    Derive the subtitle destination next to a media file.

    'movie.mkv' + 'EN' -> 'movie.en.srt'
    """
    stem, _ = os.path.splitext(media_path)
    return f"{stem}.{lang_code.lower()}{extension}"
