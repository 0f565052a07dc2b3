"""Concrete adapters for the transport, identity, clock, and logging ports."""

from __future__ import annotations

from .logging_handler import RemoteSyslogHandler
from .notifier import ErrorNotifier, ErrorObserver
from .system import SystemClock, SystemIdentity
from .udp import UdpTransport

__all__ = [
    "ErrorNotifier",
    "ErrorObserver",
    "RemoteSyslogHandler",
    "SystemClock",
    "SystemIdentity",
    "UdpTransport",
]
