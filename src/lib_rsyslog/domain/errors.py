"""Error taxonomy shared by every layer."""

from __future__ import annotations


class RsyslogError(Exception):
    """Base class for errors raised by :mod:`lib_rsyslog`."""


class InvalidSeverity(RsyslogError, ValueError):
    """Severity outside 0..7 or an unknown severity name."""


class InvalidFacility(RsyslogError, ValueError):
    """Facility outside 0..23 or an unknown facility name."""


class InvalidHeaderField(RsyslogError, ValueError):
    """Header value containing spaces, non-printable characters, or exceeding its length limit."""


class TransmissionError(RsyslogError):
    """Local failure while handing a datagram to the network stack.

    Delivered through the transport's error observers, never raised from
    ``send``. The originating :class:`OSError` is chained as ``__cause__``.
    """

    def __init__(self, message: str, *, host: str, port: int, payload: bytes) -> None:
        super().__init__(message)
        self.host = host
        self.port = port
        self.payload = payload


__all__ = [
    "InvalidFacility",
    "InvalidHeaderField",
    "InvalidSeverity",
    "RsyslogError",
    "TransmissionError",
]
