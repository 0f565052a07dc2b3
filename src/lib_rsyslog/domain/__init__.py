"""Domain values and pure formatting rules for RFC5424 messages."""

from __future__ import annotations

from .endpoint import EndpointConfig, SendOptions
from .errors import InvalidFacility, InvalidHeaderField, InvalidSeverity, RsyslogError, TransmissionError
from .message import NILVALUE, SyslogMessage, build_message, format_timestamp, priority, resolve_field
from .severity import Facility, Severity, coerce_facility, coerce_severity

__all__ = [
    "EndpointConfig",
    "Facility",
    "InvalidFacility",
    "InvalidHeaderField",
    "InvalidSeverity",
    "NILVALUE",
    "RsyslogError",
    "SendOptions",
    "Severity",
    "SyslogMessage",
    "TransmissionError",
    "build_message",
    "coerce_facility",
    "coerce_severity",
    "format_timestamp",
    "priority",
    "resolve_field",
]
