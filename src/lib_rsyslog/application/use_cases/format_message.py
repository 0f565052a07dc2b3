"""Use case resolving defaults and rendering one RFC5424 message.

Purpose
-------
Combine the endpoint configuration, per-call overrides, and the injected
clock/process collaborators into the pure domain builder.

Contents
--------
* :data:`FormatCallable` - signature of the returned callable.
* :func:`create_format_message` - factory freezing the collaborators.

System Role
-----------
Application-layer step run by :class:`lib_rsyslog.RemoteSyslog` before any
network activity, so validation failures surface synchronously.
"""

from __future__ import annotations

from typing import Callable

from lib_rsyslog.application.ports import ClockPort, ProcessIdentityPort
from lib_rsyslog.domain import EndpointConfig, SendOptions, Severity, SyslogMessage, build_message

FormatCallable = Callable[[Severity | int | str, str, SendOptions], SyslogMessage]


def create_format_message(
    *,
    config: EndpointConfig,
    clock: ClockPort,
    process: ProcessIdentityPort,
) -> FormatCallable:
    """Return a callable producing :class:`SyslogMessage` objects for ``config``.

    Parameters
    ----------
    config:
        Endpoint defaults for HOSTNAME, APP-NAME, and facility.
    clock:
        Queried only when the caller omits a timestamp.
    process:
        Supplies PROCID for every message.

    Examples
    --------
    >>> class FixedClock:
    ...     def now_ms(self) -> int:
    ...         return 1521416285134
    >>> class FixedProcess:
    ...     def pid(self) -> int:
    ...         return 7
    >>> fmt = create_format_message(
    ...     config=EndpointConfig(hostname="host"), clock=FixedClock(), process=FixedProcess()
    ... )
    >>> fmt(Severity.NOTICE, "I'm awake!", SendOptions()).render()
    "<133>1 2018-03-18T23:38:05.134Z host - 7 - I'm awake!"
    """

    def format_message(severity: Severity | int | str, text: str, options: SendOptions) -> SyslogMessage:
        """Resolve every header field and build the message."""
        timestamp = options.timestamp if options.timestamp is not None else clock.now_ms()
        return build_message(
            severity,
            options.resolve_facility(config),
            text,
            timestamp=timestamp,
            hostname=options.resolve_hostname(config),
            appname=options.resolve_appname(config),
            procid=process.pid(),
            msgid=options.resolve_msgid(),
        )

    return format_message


__all__ = ["FormatCallable", "create_format_message"]
