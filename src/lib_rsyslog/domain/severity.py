"""Severity and facility tables defined by RFC5424.

Purpose
-------
Offer domain-specific enumerations for the two halves of the syslog priority
value, plus the conversions callers need (names, numbers, stdlib levels).

Contents
--------
* :class:`Severity` - urgency levels 0 (EMERG) through 7 (DEBUG).
* :class:`Facility` - subsystem categories 0 (KERN) through 23 (LOCAL7).
* :func:`coerce_severity` / :func:`coerce_facility` - validating converters.

System Role
-----------
Used by the message builder to compute priorities and by the CLI and logging
bridge to translate human or stdlib input into protocol values.
"""

from __future__ import annotations

import logging
from enum import IntEnum

from .errors import InvalidFacility, InvalidSeverity


class Severity(IntEnum):
    """RFC5424 severity levels; lower numbers are more urgent."""

    EMERG = 0
    ALERT = 1
    CRIT = 2
    ERR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7

    @property
    def label(self) -> str:
        """Return the lowercase keyword used by syslog tooling."""

        return self.name.lower()

    @classmethod
    def from_name(cls, name: str) -> "Severity":
        normalized = name.strip().upper()
        normalized = _SEVERITY_ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise InvalidSeverity(f"Unknown severity: {name!r}") from exc

    @classmethod
    def from_numeric(cls, value: int) -> "Severity":
        """Return the :class:`Severity` for ``value`` or raise :class:`InvalidSeverity`."""
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidSeverity(f"Severity must be in 0..7, got {value!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "Severity":
        """Translate a stdlib logging level, rounding down to the nearest standard level.

        Examples
        --------
        >>> Severity.from_python_level(logging.ERROR)
        <Severity.ERR: 3>
        >>> Severity.from_python_level(25)
        <Severity.INFO: 6>
        """
        for threshold, severity in _PYTHON_LEVEL_MAP:
            if level >= threshold:
                return severity
        return cls.DEBUG


class Facility(IntEnum):
    """RFC5424 facility codes."""

    KERN = 0
    USER = 1
    MAIL = 2
    DAEMON = 3
    AUTH = 4
    SYSLOG = 5
    LPR = 6
    NEWS = 7
    UUCP = 8
    CRON = 9
    AUTHPRIV = 10
    FTP = 11
    NTP = 12
    SECURITY = 13
    CONSOLE = 14
    SOLARIS_CRON = 15
    LOCAL0 = 16
    LOCAL1 = 17
    LOCAL2 = 18
    LOCAL3 = 19
    LOCAL4 = 20
    LOCAL5 = 21
    LOCAL6 = 22
    LOCAL7 = 23

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_name(cls, name: str) -> "Facility":
        normalized = name.strip().upper().replace("-", "_")
        try:
            return cls[normalized]
        except KeyError as exc:
            raise InvalidFacility(f"Unknown facility: {name!r}") from exc

    @classmethod
    def from_numeric(cls, value: int) -> "Facility":
        """Return the :class:`Facility` for ``value`` or raise :class:`InvalidFacility`."""
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidFacility(f"Facility must be in 0..23, got {value!r}") from exc


_SEVERITY_ALIASES = {
    "EMERGENCY": "EMERG",
    "PANIC": "EMERG",
    "CRITICAL": "CRIT",
    "ERROR": "ERR",
    "WARN": "WARNING",
    "INFORMATIONAL": "INFO",
}
# Spellings accepted by ``Severity.from_name`` in addition to member names.

_PYTHON_LEVEL_MAP = (
    (logging.CRITICAL, Severity.CRIT),
    (logging.ERROR, Severity.ERR),
    (logging.WARNING, Severity.WARNING),
    (logging.INFO, Severity.INFO),
)


def coerce_severity(value: Severity | int | str) -> Severity:
    """Normalise enum members, integers, or names into :class:`Severity`.

    Examples
    --------
    >>> coerce_severity("notice") is Severity.NOTICE
    True
    >>> coerce_severity(0) is Severity.EMERG
    True
    """
    if isinstance(value, Severity):
        return value
    if isinstance(value, bool):
        raise InvalidSeverity(f"Severity must be an integer or name, got {value!r}")
    if isinstance(value, int):
        return Severity.from_numeric(value)
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdigit():
            return Severity.from_numeric(int(stripped))
        return Severity.from_name(stripped)
    raise InvalidSeverity(f"Severity must be an integer or name, got {value!r}")


def coerce_facility(value: Facility | int | str) -> Facility:
    """Normalise enum members, integers, or names into :class:`Facility`."""
    if isinstance(value, Facility):
        return value
    if isinstance(value, bool):
        raise InvalidFacility(f"Facility must be an integer or name, got {value!r}")
    if isinstance(value, int):
        return Facility.from_numeric(value)
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdigit():
            return Facility.from_numeric(int(stripped))
        return Facility.from_name(stripped)
    raise InvalidFacility(f"Facility must be an integer or name, got {value!r}")


__all__ = ["Facility", "Severity", "coerce_facility", "coerce_severity"]
