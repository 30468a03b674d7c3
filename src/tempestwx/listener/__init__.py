"""UDP listener for hub broadcasts.

Thin plumbing around the codec: receive one datagram, decode one record.
"""

from __future__ import annotations

from .config import DEFAULT_PORT, ListenerConfig
from .receiver import UdpListener

__all__ = [
    "DEFAULT_PORT",
    "ListenerConfig",
    "UdpListener",
]
