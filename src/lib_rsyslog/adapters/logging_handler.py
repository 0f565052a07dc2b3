"""Bridge from the stdlib :mod:`logging` tree to a remote syslog collector."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lib_rsyslog.domain.severity import Severity

if TYPE_CHECKING:
    from lib_rsyslog.lib_rsyslog import RemoteSyslog


class RemoteSyslogHandler(logging.Handler):
    """Forward log records through a :class:`~lib_rsyslog.RemoteSyslog` sender.

    Severity follows the record level, rounded down to the nearest standard
    level. The record's creation time becomes TIMESTAMP and an ``msgid``
    passed via ``extra=`` becomes MSGID.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.calls = []
    ...     def send(self, severity, message, **options):
    ...         self.calls.append((severity, message, options["msgid"]))
    >>> recorder = Recorder()
    >>> log = logging.getLogger("doctest.rsyslog")
    >>> log.propagate = False
    >>> log.addHandler(RemoteSyslogHandler(recorder))
    >>> log.warning("disk at %d%%", 91, extra={"msgid": "disk"})
    >>> recorder.calls
    [(<Severity.WARNING: 4>, 'disk at 91%', 'disk')]
    """

    def __init__(self, sender: "RemoteSyslog", level: int = logging.NOTSET, *, close_sender: bool = False) -> None:
        super().__init__(level)
        self._sender = sender
        self._close_sender = close_sender

    @property
    def sender(self) -> "RemoteSyslog":
        return self._sender

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._sender.send(
                Severity.from_python_level(record.levelno),
                self.format(record),
                timestamp=int(record.created * 1000),
                msgid=getattr(record, "msgid", None),
            )
        except Exception:  # noqa: BLE001
            self.handleError(record)

    def close(self) -> None:
        """Close the handler, and the sender too when it was handed over."""
        try:
            if self._close_sender:
                self._sender.close()
        finally:
            super().close()


__all__ = ["RemoteSyslogHandler"]
