"""Protocols the application layer depends on."""

from __future__ import annotations

from .identity import HostIdentityPort, ProcessIdentityPort
from .time import ClockPort
from .transport import TransportPort

__all__ = ["ClockPort", "HostIdentityPort", "ProcessIdentityPort", "TransportPort"]
