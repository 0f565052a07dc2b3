"""Fire-and-forget UDP transport for syslog datagrams.

Purpose
-------
Own the outbound datagram socket and dispatch every encoded message as exactly
one packet, without making callers wait on DNS or the network stack.

Contents
--------
* :data:`Resolver` - ``getaddrinfo``-compatible callable signature.
* :class:`UdpTransport` - :class:`TransportPort` implementation.

System Role
-----------
``send`` hands the payload to a daemon writer thread and returns. The writer
resolves the collector, writes through a non-blocking socket that is created
on first use and reused afterwards, and publishes any :class:`OSError` (or
the :class:`UnicodeError` raised for hosts that cannot be IDNA-encoded) as a
:class:`TransmissionError` through :class:`ErrorNotifier`. Nothing is retried
or kept for redelivery.
"""

from __future__ import annotations

import logging
import queue
import socket
import threading
import time
from collections.abc import Callable
from typing import Any

from lib_rsyslog.application.ports.transport import TransportPort
from lib_rsyslog.domain.errors import TransmissionError

from .notifier import ErrorNotifier

LOGGER = logging.getLogger(__name__)

Resolver = Callable[..., list[tuple[Any, ...]]]


class UdpTransport(TransportPort):
    """Send datagrams to ``host:port`` from a background writer thread.

    Examples
    --------
    >>> receiver = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    >>> receiver.bind(("127.0.0.1", 0))
    >>> transport = UdpTransport("127.0.0.1", receiver.getsockname()[1])
    >>> transport.send(b"<133>1 - - - 1 - hi")
    True
    >>> transport.close()
    >>> receiver.recv(1024)
    b'<133>1 - - - 1 - hi'
    >>> receiver.close()
    """

    def __init__(
        self,
        host: str,
        port: int,
        *,
        notifier: ErrorNotifier | None = None,
        resolver: Resolver | None = None,
    ) -> None:
        """Configure the target; the socket and thread start on the first send.

        Parameters
        ----------
        host, port:
            Collector address, resolved on the writer thread for every send.
        notifier:
            Error channel; a private :class:`ErrorNotifier` when omitted.
        resolver:
            Replacement for :func:`socket.getaddrinfo`, mainly for tests.
        """
        self._host = host
        self._port = port
        self._notifier = notifier if notifier is not None else ErrorNotifier()
        self._resolver = resolver if resolver is not None else socket.getaddrinfo
        self._queue: queue.SimpleQueue[bytes | None] = queue.SimpleQueue()
        self._sockets: dict[int, socket.socket] = {}
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._idle = threading.Condition()
        self._pending = 0
        self._closed = False

    @property
    def notifier(self) -> ErrorNotifier:
        return self._notifier

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, payload: bytes) -> bool:
        """Queue ``payload`` for the writer thread and return immediately."""
        with self._lock:
            if self._closed:
                raise RuntimeError("UdpTransport is closed")
            self._ensure_worker()
            with self._idle:
                self._pending += 1
            self._queue.put(payload)
        return True

    def flush(self, timeout: float | None = None) -> bool:
        """Block until handed-off datagrams are written; ``False`` on timeout."""
        with self._idle:
            return self._idle.wait_for(lambda: self._pending == 0, timeout)

    def close(self, timeout: float | None = 5.0) -> None:
        """Flush, stop the writer thread, and release the sockets. Idempotent.

        ``timeout`` bounds the whole shutdown, flush and thread join together.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            thread = self._thread
            self._thread = None
        if thread is not None:
            deadline = None if timeout is None else time.monotonic() + timeout
            if not self.flush(timeout):
                LOGGER.warning("Syslog transport closed with %d datagram(s) still pending", self._pending)
            self._queue.put(None)
            thread.join(None if deadline is None else max(0.0, deadline - time.monotonic()))
        for sock in self._sockets.values():
            sock.close()
        self._sockets.clear()
        LOGGER.debug("Syslog transport for %s:%s closed", self._host, self._port)

    def _ensure_worker(self) -> None:
        """Start the writer thread if it is not already running."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._thread = threading.Thread(target=self._run, name="lib_rsyslog-udp", daemon=True)
        self._thread.start()
        LOGGER.debug("Syslog writer thread started for %s:%s", self._host, self._port)

    def _run(self) -> None:
        """Internal worker loop writing datagrams until the stop sentinel arrives."""
        while True:
            payload = self._queue.get()
            if payload is None:
                break
            try:
                self._transmit(payload)
            finally:
                with self._idle:
                    self._pending -= 1
                    if self._pending == 0:
                        self._idle.notify_all()

    def _transmit(self, payload: bytes) -> None:
        """Resolve the collector and write one datagram, reporting failures."""
        try:
            family, sockaddr = self._resolve()
            self._socket_for(family).sendto(payload, sockaddr)
        except (OSError, UnicodeError) as exc:
            error = TransmissionError(
                f"Failed to send syslog datagram to {self._host}:{self._port}: {exc}",
                host=self._host,
                port=self._port,
                payload=payload,
            )
            error.__cause__ = exc
            self._notifier.notify(error)

    def _resolve(self) -> tuple[int, Any]:
        infos = self._resolver(self._host, self._port, 0, socket.SOCK_DGRAM)
        if not infos:
            raise OSError(f"no address found for {self._host}:{self._port}")
        family, _type, _proto, _canonname, sockaddr = infos[0]
        return family, sockaddr

    def _socket_for(self, family: int) -> socket.socket:
        """Return the cached socket for ``family``, creating it on first use."""
        sock = self._sockets.get(family)
        if sock is None:
            sock = socket.socket(family, socket.SOCK_DGRAM)
            sock.setblocking(False)
            self._sockets[family] = sock
            LOGGER.debug("Opened UDP socket family=%s for %s:%s", family, self._host, self._port)
        return sock


__all__ = ["Resolver", "UdpTransport"]
