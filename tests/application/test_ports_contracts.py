from __future__ import annotations

import pytest

from lib_rsyslog.adapters import SystemClock, SystemIdentity, UdpTransport
from lib_rsyslog.application.ports import ClockPort, HostIdentityPort, ProcessIdentityPort, TransportPort
from tests.conftest import FixedClock, FixedIdentity


@pytest.mark.parametrize(
    "candidate, port",
    [
        (SystemClock(), ClockPort),
        (FixedClock(), ClockPort),
        (SystemIdentity(), HostIdentityPort),
        (SystemIdentity(), ProcessIdentityPort),
        (FixedIdentity(), HostIdentityPort),
        (FixedIdentity(), ProcessIdentityPort),
        (UdpTransport("127.0.0.1", 514), TransportPort),
    ],
)
def test_adapters_satisfy_runtime_checkable_ports(candidate: object, port: type) -> None:
    assert isinstance(candidate, port)


def test_clock_port_rejects_unrelated_objects() -> None:
    assert not isinstance(object(), ClockPort)
    assert not isinstance(object(), TransportPort)
