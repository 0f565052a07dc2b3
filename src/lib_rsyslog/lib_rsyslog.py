"""Sender façade that wires domain, application, and adapter layers together.

Purpose
-------
Expose a small, ergonomic API for host applications: construct a
:class:`RemoteSyslog` once, then call :meth:`RemoteSyslog.send` (or a level
helper) for every message.

Contents
--------
* :class:`RemoteSyslog` - composition root and public sender object.
* :func:`summary_info` - metadata banner shared with the CLI.

System Role
-----------
The only place where system collaborators (clock, hostname, pid, UDP socket)
are chosen. Inner layers receive them through ports, so the formatter stays a
pure function under test.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from types import TracebackType
from typing import Callable

from .adapters import ErrorNotifier, ErrorObserver, SystemClock, SystemIdentity, UdpTransport
from .application.ports import ClockPort, HostIdentityPort, ProcessIdentityPort, TransportPort
from .application.use_cases import create_format_message, create_send_message
from .domain import EndpointConfig, Facility, SendOptions, Severity
from .domain.endpoint import DEFAULT_FACILITY, DEFAULT_TARGET_HOST, DEFAULT_TARGET_PORT


class RemoteSyslog:
    """Format RFC5424 messages and fire them at a remote collector over UDP.

    Transmission failures are delivered to observers registered with
    :meth:`on_error` / :meth:`once_error`. Without observers they are logged
    and dropped.

    Examples
    --------
    >>> class FixedClock:
    ...     def now_ms(self) -> int:
    ...         return 1521416285134
    >>> class FixedIdentity:
    ...     def hostname(self) -> str:
    ...         return "web01"
    ...     def pid(self) -> int:
    ...         return 4242
    >>> sender = RemoteSyslog(clock=FixedClock(), host_identity=FixedIdentity(), process_identity=FixedIdentity())
    >>> sender.format(Severity.NOTICE, "I'm awake!")
    b"<133>1 2018-03-18T23:38:05.134Z web01 - 4242 - I'm awake!"
    >>> sender.close()
    """

    def __init__(
        self,
        *,
        target_host: str = DEFAULT_TARGET_HOST,
        target_port: int = DEFAULT_TARGET_PORT,
        hostname: str | None = None,
        appname: str | None = None,
        facility: Facility | int | str = DEFAULT_FACILITY,
        clock: ClockPort | None = None,
        host_identity: HostIdentityPort | None = None,
        process_identity: ProcessIdentityPort | None = None,
        transport: TransportPort | None = None,
        notifier: ErrorNotifier | None = None,
    ) -> None:
        """Build the sender and its collaborators.

        Parameters
        ----------
        target_host, target_port:
            Collector address.
        hostname:
            Default HOSTNAME; the machine name from ``host_identity`` when omitted.
        appname:
            Default APP-NAME; renders as ``-`` when omitted.
        facility:
            Default facility (``local0`` unless overridden).
        clock, host_identity, process_identity:
            Port implementations; system-backed adapters when omitted.
        transport:
            Custom :class:`TransportPort`; a :class:`UdpTransport` otherwise.
        notifier:
            Error channel shared with the transport. When a custom transport
            is supplied, pass the notifier it reports to so :meth:`on_error`
            observes its failures.
        """
        system = SystemIdentity()
        host_identity = host_identity if host_identity is not None else system
        self._config = EndpointConfig(
            target_host=target_host,
            target_port=target_port,
            hostname=hostname or host_identity.hostname(),
            appname=appname,
            facility=facility,  # type: ignore[arg-type]
        )
        if transport is None:
            self._notifier = notifier if notifier is not None else ErrorNotifier()
            transport = UdpTransport(target_host, target_port, notifier=self._notifier)
        else:
            self._notifier = notifier if notifier is not None else getattr(transport, "notifier", ErrorNotifier())
        self._transport = transport
        self._format = create_format_message(
            config=self._config,
            clock=clock if clock is not None else SystemClock(),
            process=process_identity if process_identity is not None else system,
        )
        self._send = create_send_message(format_message=self._format, transport=self._transport)

    @property
    def config(self) -> EndpointConfig:
        return self._config

    def send(
        self,
        severity: Severity | int | str,
        message: str,
        *,
        timestamp: int | float | datetime | None = None,
        msgid: str | None = None,
        hostname: str | None = None,
        appname: str | None = None,
        facility: Facility | int | str | None = None,
    ) -> bool:
        """Send ``message`` as one datagram at ``severity``.

        Validation errors (:class:`InvalidSeverity`, :class:`InvalidFacility`,
        :class:`InvalidHeaderField`) raise before anything is transmitted. A
        ``True`` return only means the datagram was handed off, never that it
        was delivered.
        """
        options = SendOptions(timestamp=timestamp, msgid=msgid, hostname=hostname, appname=appname, facility=facility)
        return self._send(severity, message, options)

    def format(
        self,
        severity: Severity | int | str,
        message: str,
        *,
        timestamp: int | float | datetime | None = None,
        msgid: str | None = None,
        hostname: str | None = None,
        appname: str | None = None,
        facility: Facility | int | str | None = None,
    ) -> bytes:
        """Return the encoded datagram :meth:`send` would emit, without sending it."""
        options = SendOptions(timestamp=timestamp, msgid=msgid, hostname=hostname, appname=appname, facility=facility)
        return self._format(severity, message, options).encode()

    def emerg(self, message: str, **options) -> bool:
        return self.send(Severity.EMERG, message, **options)

    def alert(self, message: str, **options) -> bool:
        return self.send(Severity.ALERT, message, **options)

    def crit(self, message: str, **options) -> bool:
        return self.send(Severity.CRIT, message, **options)

    def err(self, message: str, **options) -> bool:
        return self.send(Severity.ERR, message, **options)

    def warning(self, message: str, **options) -> bool:
        return self.send(Severity.WARNING, message, **options)

    def notice(self, message: str, **options) -> bool:
        return self.send(Severity.NOTICE, message, **options)

    def info(self, message: str, **options) -> bool:
        return self.send(Severity.INFO, message, **options)

    def debug(self, message: str, **options) -> bool:
        return self.send(Severity.DEBUG, message, **options)

    def on_error(self, observer: ErrorObserver) -> Callable[[], bool]:
        """Observe every transmission error; returns an unsubscribe callable."""
        return self._notifier.subscribe(observer)

    def once_error(self, observer: ErrorObserver) -> Callable[[], bool]:
        """Observe only the next transmission error."""
        return self._notifier.subscribe(observer, once=True)

    def remove_error_observer(self, observer: ErrorObserver) -> bool:
        return self._notifier.unsubscribe(observer)

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until every datagram handed off so far reached the network stack."""
        return self._transport.flush(timeout)

    def close(self, timeout: float | None = 5.0) -> None:
        """Flush pending datagrams and release the socket."""
        self._transport.close(timeout)

    async def aclose(self, timeout: float | None = 5.0) -> None:
        """Close from async code without blocking the event loop."""
        await asyncio.to_thread(self.close, timeout)

    def __enter__(self) -> "RemoteSyslog":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        config = self._config
        return f"RemoteSyslog(target={config.target_host}:{config.target_port}, facility={config.facility.label})"


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point.

    Examples
    --------
    >>> "version" in summary_info()
    True
    """
    from . import __init__conf__

    lines: list[str] = []

    def _capture(text: str) -> None:
        lines.append(text)

    __init__conf__.print_info(writer=_capture)
    return "".join(lines)


__all__ = ["RemoteSyslog", "summary_info"]
