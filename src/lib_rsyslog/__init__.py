"""Public package surface for RFC5424 syslog over UDP.

``import lib_rsyslog`` exposes the sender façade, the protocol enums, the
error taxonomy, and the pure formatting helpers so callers never need to reach
into the inner layers.
"""

from __future__ import annotations

from .adapters import RemoteSyslogHandler
from .domain import (
    NILVALUE,
    EndpointConfig,
    Facility,
    InvalidFacility,
    InvalidHeaderField,
    InvalidSeverity,
    RsyslogError,
    SendOptions,
    Severity,
    SyslogMessage,
    TransmissionError,
    build_message,
    format_timestamp,
    priority,
    resolve_field,
)
from .lib_rsyslog import RemoteSyslog, summary_info

__all__ = [
    "EndpointConfig",
    "Facility",
    "InvalidFacility",
    "InvalidHeaderField",
    "InvalidSeverity",
    "NILVALUE",
    "RemoteSyslog",
    "RemoteSyslogHandler",
    "RsyslogError",
    "SendOptions",
    "Severity",
    "SyslogMessage",
    "TransmissionError",
    "build_message",
    "format_timestamp",
    "priority",
    "resolve_field",
    "summary_info",
]
