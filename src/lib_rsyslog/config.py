"""Environment and ``.env`` driven configuration for the sender.

Purpose
-------
Resolve collector address and header defaults from explicit arguments,
``RSYSLOG_*`` environment variables, and (optionally) the nearest ``.env``
file, so the CLI and host applications agree on one set of rules.

Contents
--------
* :data:`DOTENV_ENV_VAR` - toggle consulted when no CLI flag decides.
* :func:`should_use_dotenv` / :func:`enable_dotenv` - python-dotenv loading.
* :class:`SenderSettings` / :func:`load_settings` - resolved configuration.

System Role
-----------
Outer shell only. Precedence is explicit argument, then the individual
variable, then ``RSYSLOG_ENDPOINT``, then built-in defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping

from dotenv import find_dotenv, load_dotenv

from .domain import Facility, coerce_facility
from .domain.endpoint import DEFAULT_FACILITY, DEFAULT_TARGET_HOST, DEFAULT_TARGET_PORT

LOGGER = logging.getLogger(__name__)

DOTENV_ENV_VAR = "RSYSLOG_USE_DOTENV"
ENV_TARGET_HOST = "RSYSLOG_TARGET_HOST"
ENV_TARGET_PORT = "RSYSLOG_TARGET_PORT"
ENV_ENDPOINT = "RSYSLOG_ENDPOINT"
ENV_HOSTNAME = "RSYSLOG_HOSTNAME"
ENV_APPNAME = "RSYSLOG_APPNAME"
ENV_FACILITY = "RSYSLOG_FACILITY"

_TRUTHY = {"1", "true", "yes", "on"}

_dotenv_loaded: Path | None = None
_dotenv_attempted = False


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Decide whether to load ``.env``; an explicit CLI flag beats the environment.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(explicit=None, env_value=None)
    False
    """
    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` without overriding variables already set.

    The search walks upward from the current working directory. Loading
    happens at most once per process; later calls return the path found the
    first time.
    """
    global _dotenv_loaded, _dotenv_attempted
    if _dotenv_attempted:
        return _dotenv_loaded
    _dotenv_attempted = True

    found = find_dotenv(usecwd=True)
    if not found:
        LOGGER.debug("No .env file found")
        return None

    path = Path(found).resolve()
    load_dotenv(path, override=False)
    _dotenv_loaded = path
    LOGGER.debug("Loaded environment from %s", path)
    return path


def _reset_dotenv_state_for_testing() -> None:
    global _dotenv_loaded, _dotenv_attempted
    _dotenv_loaded = None
    _dotenv_attempted = False


@dataclass(slots=True, frozen=True)
class SenderSettings:
    """Resolved constructor arguments for :class:`lib_rsyslog.RemoteSyslog`."""

    target_host: str = DEFAULT_TARGET_HOST
    target_port: int = DEFAULT_TARGET_PORT
    hostname: str | None = None
    appname: str | None = None
    facility: Facility = DEFAULT_FACILITY

    def as_kwargs(self) -> dict[str, Any]:
        return asdict(self)


def load_settings(
    *,
    target_host: str | None = None,
    target_port: int | str | None = None,
    hostname: str | None = None,
    appname: str | None = None,
    facility: Facility | int | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> SenderSettings:
    """Merge explicit arguments with ``RSYSLOG_*`` variables.

    Raises
    ------
    ValueError
        When a port or endpoint value is malformed (the message names the
        offending source and the expected format).

    Examples
    --------
    >>> load_settings(environ={"RSYSLOG_ENDPOINT": "logs.example:5514"}).target_port
    5514
    >>> load_settings(target_port=6514, environ={"RSYSLOG_TARGET_PORT": "1"}).target_port
    6514
    """
    env = os.environ if environ is None else environ

    endpoint = _coerce_endpoint(env.get(ENV_ENDPOINT))
    endpoint_host, endpoint_port = endpoint if endpoint is not None else (None, None)

    host = target_host or _non_empty(env.get(ENV_TARGET_HOST)) or endpoint_host or DEFAULT_TARGET_HOST
    if target_port is not None:
        port = _coerce_port(target_port, "target_port")
    elif _non_empty(env.get(ENV_TARGET_PORT)) is not None:
        port = _coerce_port(env[ENV_TARGET_PORT], ENV_TARGET_PORT)
    elif endpoint_port is not None:
        port = endpoint_port
    else:
        port = DEFAULT_TARGET_PORT

    raw_facility = facility if facility is not None else _non_empty(env.get(ENV_FACILITY))
    return SenderSettings(
        target_host=host,
        target_port=port,
        hostname=hostname or _non_empty(env.get(ENV_HOSTNAME)),
        appname=appname or _non_empty(env.get(ENV_APPNAME)),
        facility=coerce_facility(raw_facility) if raw_facility is not None else DEFAULT_FACILITY,
    )


def _non_empty(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def _coerce_port(value: int | str, source: str) -> int:
    """Validate a UDP port from code or the environment.

    Examples
    --------
    >>> _coerce_port("514", "RSYSLOG_TARGET_PORT")
    514
    >>> _coerce_port("0", "RSYSLOG_TARGET_PORT")
    Traceback (most recent call last):
    ...
    ValueError: RSYSLOG_TARGET_PORT must be positive, got 0
    """
    try:
        port = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{source} must be an integer, got {value!r}") from exc
    if port <= 0:
        raise ValueError(f"{source} must be positive, got {port}")
    if port > 65535:
        raise ValueError(f"{source} must be <= 65535, got {port}")
    return port


def _coerce_endpoint(value: str | None) -> tuple[str, int] | None:
    """Parse ``HOST:PORT`` (or ``[IPv6]:PORT``) strictly.

    Examples
    --------
    >>> _coerce_endpoint("syslog.local:514")
    ('syslog.local', 514)
    >>> _coerce_endpoint("[::1]:5514")
    ('::1', 5514)
    """
    if value is None or not value.strip():
        return None
    raw = value.strip()
    if raw.startswith("["):
        host, _, rest = raw[1:].partition("]")
        separator, port_str = rest[:1], rest[1:]
    else:
        host, separator, port_str = raw.rpartition(":")
    if not host or separator != ":" or not port_str:
        raise ValueError(f"{ENV_ENDPOINT} must look like HOST:PORT, got {value!r}")
    return host, _coerce_port(port_str, ENV_ENDPOINT)


__all__ = [
    "DOTENV_ENV_VAR",
    "ENV_APPNAME",
    "ENV_ENDPOINT",
    "ENV_FACILITY",
    "ENV_HOSTNAME",
    "ENV_TARGET_HOST",
    "ENV_TARGET_PORT",
    "SenderSettings",
    "enable_dotenv",
    "load_settings",
    "should_use_dotenv",
]
