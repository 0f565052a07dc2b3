"""RFC5424 message value object and its wire rendering.

Purpose
-------
Turn validated header inputs into the exact byte layout a collector expects::

    <PRI>1 TIMESTAMP HOSTNAME APPNAME PROCID MSGID MESSAGE

Contents
--------
* :func:`priority` - ``facility * 8 + severity`` with range validation.
* :func:`format_timestamp` - millisecond UTC rendering with a ``Z`` suffix.
* :func:`resolve_field` - override, then default, then ``NILVALUE``.
* :class:`SyslogMessage` - immutable resolved message with ``render``/``encode``.
* :func:`build_message` - validating constructor used by the use cases.

System Role
-----------
Pure domain code: no clock, socket, or environment access. The application
layer supplies timestamps and identities through ports.

Notes
-----
MESSAGE is appended verbatim. Embedded newlines or control characters are
transmitted as-is; callers that need strict protocol purity must clean the
text themselves.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .errors import InvalidHeaderField
from .severity import Facility, Severity, coerce_facility, coerce_severity

NILVALUE = "-"
VERSION = 1

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MIN_MS = (datetime(1, 1, 1, tzinfo=timezone.utc) - _EPOCH) // timedelta(milliseconds=1)
_MAX_MS = (datetime(9999, 12, 31, 23, 59, 59, 999000, tzinfo=timezone.utc) - _EPOCH) // timedelta(milliseconds=1)

#: Maximum header field lengths from RFC5424 section 6.
FIELD_LIMITS = {
    "hostname": 255,
    "appname": 48,
    "procid": 128,
    "msgid": 32,
}


def priority(severity: Severity | int | str, facility: Facility | int | str) -> int:
    """Return the PRI value for ``severity`` and ``facility``.

    Raises :class:`~lib_rsyslog.domain.errors.InvalidSeverity` or
    :class:`~lib_rsyslog.domain.errors.InvalidFacility` for values outside the
    protocol tables.

    Examples
    --------
    >>> priority(Severity.NOTICE, Facility.LOCAL0)
    133
    >>> priority(0, 23)
    184
    """
    return int(coerce_facility(facility)) * 8 + int(coerce_severity(severity))


def format_timestamp(instant: int | float | datetime) -> str:
    """Render epoch milliseconds or an aware datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``.

    Integer input is converted with exact arithmetic so no float rounding can
    shift the millisecond digits; float input is truncated to whole
    milliseconds first. Instants outside years 0001..9999 raise
    :class:`ValueError`.

    Examples
    --------
    >>> format_timestamp(1521416285134)
    '2018-03-18T23:38:05.134Z'
    >>> format_timestamp(1521416285134.9)
    '2018-03-18T23:38:05.134Z'
    >>> format_timestamp(datetime(2018, 3, 18, 23, 38, 5, 134999, tzinfo=timezone.utc))
    '2018-03-18T23:38:05.134Z'
    """
    if isinstance(instant, datetime):
        if instant.tzinfo is None or instant.tzinfo.utcoffset(instant) is None:
            raise ValueError("timestamp must be timezone-aware")
        try:
            moment = instant.astimezone(timezone.utc)
        except OverflowError as exc:
            raise ValueError(f"timestamp is outside years 0001..9999: {instant!r}") from exc
    elif isinstance(instant, (int, float)) and not isinstance(instant, bool):
        if isinstance(instant, float):
            if not math.isfinite(instant):
                raise ValueError(f"timestamp must be finite, got {instant!r}")
            instant = int(instant)
        if not _MIN_MS <= instant <= _MAX_MS:
            raise ValueError(f"timestamp is outside years 0001..9999: {instant} ms")
        moment = _EPOCH + timedelta(milliseconds=instant)
    else:
        raise TypeError(f"timestamp must be epoch milliseconds or datetime, got {type(instant).__name__}")
    return f"{moment.year:04d}-{moment:%m-%dT%H:%M:%S}.{moment.microsecond // 1000:03d}Z"


def resolve_field(override: str | None, default: str | None) -> str:
    """Pick the per-call override, else the endpoint default, else ``NILVALUE``.

    Empty strings count as absent at both tiers.

    Examples
    --------
    >>> resolve_field("op", "fallback")
    'op'
    >>> resolve_field(None, "fallback")
    'fallback'
    >>> resolve_field("", None)
    '-'
    """
    if override:
        return override
    if default:
        return default
    return NILVALUE


def validate_header_field(name: str, value: str) -> str:
    """Return ``value`` when it is a legal header token for ``name``.

    Header fields must be printable US-ASCII (33..126), so spaces and control
    characters are rejected rather than rewritten.
    """
    limit = FIELD_LIMITS[name]
    if not value:
        raise InvalidHeaderField(f"{name} must not be empty")
    if len(value) > limit:
        raise InvalidHeaderField(f"{name} exceeds {limit} characters: {value!r}")
    for char in value:
        if not 33 <= ord(char) <= 126:
            raise InvalidHeaderField(f"{name} contains an illegal character {char!r}: {value!r}")
    return value


@dataclass(slots=True, frozen=True)
class SyslogMessage:
    """Fully resolved RFC5424 message.

    Attributes
    ----------
    severity, facility:
        Protocol enums; :attr:`priority` is derived from both on demand.
    timestamp:
        Rendered TIMESTAMP field.
    hostname, appname, procid, msgid:
        Header tokens, ``-`` when absent (``procid`` is always numeric).
    text:
        Free-form MESSAGE, sent verbatim.
    """

    severity: Severity
    facility: Facility
    timestamp: str
    hostname: str
    appname: str
    procid: str
    msgid: str
    text: str

    @property
    def priority(self) -> int:
        return int(self.facility) * 8 + int(self.severity)

    def render(self) -> str:
        """Return the single-line wire representation without a trailing newline."""

        return (
            f"<{self.priority}>{VERSION} {self.timestamp} {self.hostname} "
            f"{self.appname} {self.procid} {self.msgid} {self.text}"
        )

    def encode(self) -> bytes:
        """Return :meth:`render` encoded as UTF-8, ready for one datagram."""

        return self.render().encode("utf-8")


def build_message(
    severity: Severity | int | str,
    facility: Facility | int | str,
    text: str,
    *,
    timestamp: int | float | datetime,
    hostname: str | None,
    appname: str | None,
    procid: int,
    msgid: str | None,
) -> SyslogMessage:
    """Validate all inputs and assemble a :class:`SyslogMessage`.

    ``hostname``/``appname``/``msgid`` arrive already resolved by
    :func:`resolve_field`; ``None`` or empty still renders as ``-``.

    Examples
    --------
    >>> build_message(
    ...     Severity.EMERG, Facility.LOCAL7, "I'm awake!",
    ...     timestamp=1521416285134, hostname="sender", appname="appname",
    ...     procid=42, msgid="operation",
    ... ).render()
    "<184>1 2018-03-18T23:38:05.134Z sender appname 42 operation I'm awake!"
    """
    resolved_severity = coerce_severity(severity)
    resolved_facility = coerce_facility(facility)
    if isinstance(procid, bool) or not isinstance(procid, int) or procid < 0:
        raise InvalidHeaderField(f"procid must be a non-negative integer, got {procid!r}")
    return SyslogMessage(
        severity=resolved_severity,
        facility=resolved_facility,
        timestamp=format_timestamp(timestamp),
        hostname=validate_header_field("hostname", resolve_field(hostname, None)),
        appname=validate_header_field("appname", resolve_field(appname, None)),
        procid=validate_header_field("procid", str(procid)),
        msgid=validate_header_field("msgid", resolve_field(msgid, None)),
        text=text,
    )


__all__ = [
    "FIELD_LIMITS",
    "NILVALUE",
    "SyslogMessage",
    "VERSION",
    "build_message",
    "format_timestamp",
    "priority",
    "resolve_field",
    "validate_header_field",
]
