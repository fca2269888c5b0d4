from __future__ import annotations

"""
Domain Constants.

Centralizes the SubDB service endpoints, fingerprint geometry, network
timeouts and the identity template shared by every layer.
"""

from typing import Optional

__version__ = "1.0.0"

# -----------------------------------------------------------------------------
# SERVICE ENDPOINTS
# -----------------------------------------------------------------------------

PRODUCTION_ENDPOINT = "http://api.thesubdb.com"
SANDBOX_ENDPOINT = "http://sandbox.thesubdb.com"

# -----------------------------------------------------------------------------
# FINGERPRINT GEOMETRY
# -----------------------------------------------------------------------------

BLOCK_SIZE = 64 * 1024
MIN_FILE_SIZE = 2 * BLOCK_SIZE

# -----------------------------------------------------------------------------
# NETWORK
# -----------------------------------------------------------------------------

READ_TIMEOUT: float = 5.0
UPLOAD_TIMEOUT: Optional[float] = None

USER_AGENT_TEMPLATE = "SubDB/1.0 ({name}/{version}; {url})"

DEFAULT_CLIENT_NAME = "subdb-client"
