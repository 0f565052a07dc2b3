"""Port describing the outbound datagram transport."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TransportPort(Protocol):
    """Fire one encoded message at the configured collector."""

    def send(self, payload: bytes) -> bool:
        """Hand ``payload`` off as a single datagram without waiting for the network."""

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until every handed-off datagram reached the local network stack."""

    def close(self, timeout: float | None = None) -> None:
        """Release the socket; later sends are programming errors."""


__all__ = ["TransportPort"]
