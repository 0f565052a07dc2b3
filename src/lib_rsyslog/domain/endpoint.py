"""Endpoint configuration and per-call send options."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .message import resolve_field, validate_header_field
from .severity import Facility, coerce_facility

DEFAULT_TARGET_HOST = "localhost"
DEFAULT_TARGET_PORT = 514
DEFAULT_FACILITY = Facility.LOCAL0


@dataclass(slots=True, frozen=True)
class EndpointConfig:
    """Immutable collector address and header defaults for one sender.

    Attributes
    ----------
    target_host:
        Collector hostname or IP literal.
    target_port:
        Collector UDP port (1..65535).
    hostname:
        Default HOSTNAME; the facade fills in the machine name when omitted.
    appname:
        Default APP-NAME; ``None`` renders as ``-``.
    facility:
        Default facility applied when a send does not override it.
    """

    target_host: str = DEFAULT_TARGET_HOST
    target_port: int = DEFAULT_TARGET_PORT
    hostname: str | None = None
    appname: str | None = None
    facility: Facility = DEFAULT_FACILITY

    def __post_init__(self) -> None:
        if not self.target_host or not self.target_host.strip():
            raise ValueError("target_host must not be empty")
        if isinstance(self.target_port, bool) or not isinstance(self.target_port, int):
            raise ValueError(f"target_port must be an integer, got {self.target_port!r}")
        if not 0 < self.target_port <= 65535:
            raise ValueError(f"target_port must be in 1..65535, got {self.target_port}")
        object.__setattr__(self, "facility", coerce_facility(self.facility))
        for name in ("hostname", "appname"):
            value = getattr(self, name)
            if value:
                validate_header_field(name, value)

    @property
    def address(self) -> tuple[str, int]:
        return self.target_host, self.target_port


@dataclass(slots=True, frozen=True)
class SendOptions:
    """Optional overrides applied to a single message."""

    timestamp: int | float | datetime | None = None
    msgid: str | None = None
    hostname: str | None = None
    appname: str | None = None
    facility: Facility | int | str | None = None

    def resolve_hostname(self, config: EndpointConfig) -> str:
        return resolve_field(self.hostname, config.hostname)

    def resolve_appname(self, config: EndpointConfig) -> str:
        return resolve_field(self.appname, config.appname)

    def resolve_msgid(self) -> str:
        return resolve_field(self.msgid, None)

    def resolve_facility(self, config: EndpointConfig) -> Facility:
        """Return the override facility, else the endpoint default."""
        if self.facility is None:
            return config.facility
        return coerce_facility(self.facility)


__all__ = [
    "DEFAULT_FACILITY",
    "DEFAULT_TARGET_HOST",
    "DEFAULT_TARGET_PORT",
    "EndpointConfig",
    "SendOptions",
]
