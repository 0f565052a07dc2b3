"""System-backed implementations of the clock and identity ports."""

from __future__ import annotations

import os
import socket
import time

from lib_rsyslog.application.ports import ClockPort, HostIdentityPort, ProcessIdentityPort


class SystemClock(ClockPort):
    """Concrete clock returning the current epoch time in milliseconds."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000


class SystemIdentity(HostIdentityPort, ProcessIdentityPort):
    """Read the machine name and the current process id from the OS.

    The pid is looked up on every call so forked children report their own id.
    """

    def hostname(self) -> str:
        return socket.gethostname()

    def pid(self) -> int:
        return os.getpid()


__all__ = ["SystemClock", "SystemIdentity"]
