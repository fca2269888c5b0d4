from __future__ import annotations

"""
Fingerprint Engine.

Computes the SubDB content hash of a media file: the MD5 digest of the first
64 KiB followed by the last 64 KiB. Files shorter than two blocks cannot be
fingerprinted. Files sharing both windows produce the same fingerprint.
"""

import hashlib
import logging
import os
from typing import BinaryIO, Optional

from subdb.domain.constants import BLOCK_SIZE, MIN_FILE_SIZE
from subdb.domain.errors import FileTooSmallError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def hash_stream(stream: BinaryIO, size: Optional[int] = None) -> str:
    """
    Fingerprint a readable, seekable binary stream.

    Both blocks are anchored (offset 0 and size - BLOCK_SIZE) and may abut.

    Args:
        stream: Binary stream supporting read() and seek().
        size: Total stream length; measured by seeking to the end when omitted.

    Returns:
        str: 32-character lowercase hexadecimal MD5 digest.

    Raises:
        FileTooSmallError: The stream is shorter than MIN_FILE_SIZE.
        OSError: Seeking or reading failed, or the stream ended early.
    """
    if size is None:
        size = stream.seek(0, os.SEEK_END)
    if size < MIN_FILE_SIZE:
        raise FileTooSmallError(size)

    stream.seek(0)
    first = _read_block(stream)

    stream.seek(size - BLOCK_SIZE)
    last = _read_block(stream)

    digest = hashlib.md5()
    digest.update(first)
    digest.update(last)
    return digest.hexdigest()


def fingerprint_file(path: str) -> str:
    """
    Fingerprint the media file at `path`.

    Args:
        path: Path to the media file.

    Returns:
        str: The file fingerprint.

    Raises:
        FileNotFoundError: The file does not exist.
        FileTooSmallError: The file is shorter than MIN_FILE_SIZE.
        OSError: Any other I/O failure, propagated unchanged.
    """
    size = os.stat(path).st_size
    if size < MIN_FILE_SIZE:
        raise FileTooSmallError(size, path)

    with open(path, "rb") as f:
        fp = hash_stream(f, size)

    logger.debug(f"Fingerprint of {path}: {fp}")
    return fp

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _read_block(stream: BinaryIO) -> bytes:
    """Read exactly BLOCK_SIZE bytes, tolerating short reads from the OS."""
    chunks = []
    remaining = BLOCK_SIZE
    while remaining:
        chunk = stream.read(remaining)
        if not chunk:
            raise OSError(f"unexpected end of stream: {BLOCK_SIZE - remaining} of {BLOCK_SIZE} bytes read")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)
