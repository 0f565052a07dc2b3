"""Ports describing where HOSTNAME and PROCID come from."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class HostIdentityPort(Protocol):
    """Return the name of the machine emitting messages."""

    def hostname(self) -> str: ...


@runtime_checkable
class ProcessIdentityPort(Protocol):
    """Return the numeric identifier of the emitting process."""

    def pid(self) -> int: ...


__all__ = ["HostIdentityPort", "ProcessIdentityPort"]
