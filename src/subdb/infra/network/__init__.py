from __future__ import annotations

"""
Network Communication Infrastructure.

Facade over the requests-based transport used by the API client.
"""

from subdb.infra.network.common import build_headers, status_text
from subdb.infra.network.transport import get_request, post_subtitle

__all__ = [
    "build_headers",
    "status_text",
    "get_request",
    "post_subtitle",
]
