"""Out-of-band channel for transport failures.

Purpose
-------
Deliver :class:`TransmissionError` instances to observers after ``send`` has
already returned, mirroring an event-emitter ``error`` channel.

Contents
--------
* :data:`ErrorObserver` - observer callable signature.
* :class:`ErrorNotifier` - observer registry with ``once`` support.

System Role
-----------
Owned by :class:`~lib_rsyslog.adapters.udp.UdpTransport` and exposed through
:meth:`lib_rsyslog.RemoteSyslog.on_error`. Errors nobody listens for are
logged once and discarded so a failed send never crashes the host.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from lib_rsyslog.domain.errors import TransmissionError

LOGGER = logging.getLogger(__name__)

ErrorObserver = Callable[[TransmissionError], None]


class ErrorNotifier:
    """Fan transmission errors out to registered observers.

    Examples
    --------
    >>> seen = []
    >>> notifier = ErrorNotifier()
    >>> unsubscribe = notifier.subscribe(seen.append, once=True)
    >>> error = TransmissionError("boom", host="h", port=1, payload=b"")
    >>> notifier.notify(error)
    >>> seen == [error], notifier.observer_count
    (True, 0)
    """

    def __init__(self) -> None:
        self._observers: list[tuple[ErrorObserver, bool]] = []
        self._lock = threading.Lock()

    @property
    def observer_count(self) -> int:
        with self._lock:
            return len(self._observers)

    def subscribe(self, observer: ErrorObserver, *, once: bool = False) -> Callable[[], bool]:
        """Register ``observer`` and return a callable that removes it again."""
        with self._lock:
            self._observers.append((observer, once))

        def unsubscribe() -> bool:
            return self.unsubscribe(observer)

        return unsubscribe

    def unsubscribe(self, observer: ErrorObserver) -> bool:
        """Remove the first registration of ``observer``; ``False`` when absent."""
        with self._lock:
            for index, (candidate, _once) in enumerate(self._observers):
                if candidate is observer:
                    del self._observers[index]
                    return True
        return False

    def notify(self, error: TransmissionError) -> None:
        """Invoke observers with ``error``; log and discard when nobody listens."""
        with self._lock:
            observers = [observer for observer, _once in self._observers]
            self._observers = [entry for entry in self._observers if not entry[1]]

        if not observers:
            LOGGER.warning("Discarding unobserved syslog transmission error: %s", error, exc_info=error)
            return

        for observer in observers:
            try:
                observer(error)
            except Exception as exc:  # noqa: BLE001
                LOGGER.error("Syslog error observer %r raised; continuing", observer, exc_info=exc)


__all__ = ["ErrorNotifier", "ErrorObserver"]
