from __future__ import annotations

import socket
from collections.abc import Iterator

import pytest


class FixedClock:
    def __init__(self, now_ms: int = 1521416285134) -> None:
        self.value = now_ms
        self.calls = 0

    def now_ms(self) -> int:
        self.calls += 1
        return self.value


class FixedIdentity:
    def __init__(self, hostname: str = "web01", pid: int = 4242) -> None:
        self._hostname = hostname
        self._pid = pid

    def hostname(self) -> str:
        return self._hostname

    def pid(self) -> int:
        return self._pid


class UdpListener:
    """Loopback UDP socket collecting datagrams sent by the code under test."""

    def __init__(self) -> None:
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.settimeout(2.0)
        self.host, self.port = self._sock.getsockname()

    def receive(self, count: int = 1) -> list[bytes]:
        return [self._sock.recv(65535) for _ in range(count)]

    def pending(self, timeout: float = 0.1) -> list[bytes]:
        """Return whatever else arrives within ``timeout`` seconds."""
        self._sock.settimeout(timeout)
        extra: list[bytes] = []
        try:
            while True:
                extra.append(self._sock.recv(65535))
        except socket.timeout:
            return extra
        finally:
            self._sock.settimeout(2.0)

    def close(self) -> None:
        self._sock.close()


@pytest.fixture
def udp_listener() -> Iterator[UdpListener]:
    listener = UdpListener()
    try:
        yield listener
    finally:
        listener.close()


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def fixed_identity() -> FixedIdentity:
    return FixedIdentity()
