"""End-to-end coverage of the sender façade over a loopback UDP listener."""

from __future__ import annotations

import asyncio
import os
import socket

import pytest

from lib_rsyslog import (
    Facility,
    InvalidFacility,
    InvalidHeaderField,
    InvalidSeverity,
    RemoteSyslog,
    Severity,
    TransmissionError,
)
from lib_rsyslog.adapters import UdpTransport
from tests.conftest import FixedClock, FixedIdentity, UdpListener
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]

AWAKE_MS = 1521416285134


def test_smallest_example_uses_system_identity(udp_listener: UdpListener) -> None:
    rsyslog = RemoteSyslog(target_host=udp_listener.host, target_port=udp_listener.port)
    rsyslog.once_error(lambda _error: None)

    rsyslog.send(Severity.NOTICE, "I'm awake!", timestamp=AWAKE_MS)
    rsyslog.close()

    assert udp_listener.receive() == [
        f"<133>1 2018-03-18T23:38:05.134Z {socket.gethostname()} - {os.getpid()} - I'm awake!".encode()
    ]
    assert udp_listener.pending() == []


def test_overriding_hostname_appname_facility_severity_and_msgid(udp_listener: UdpListener) -> None:
    rsyslog = RemoteSyslog(
        target_host=udp_listener.host,
        target_port=udp_listener.port,
        hostname="sender",
        appname="appname",
        facility=Facility.LOCAL7,
    )
    rsyslog.once_error(lambda _error: None)

    rsyslog.send(Severity.EMERG, "I'm awake!", timestamp=AWAKE_MS, msgid="operation")
    rsyslog.close()

    assert udp_listener.receive() == [
        f"<184>1 2018-03-18T23:38:05.134Z sender appname {os.getpid()} operation I'm awake!".encode()
    ]
    assert udp_listener.pending() == []


@pytest.mark.parametrize(
    "severity, kwargs, error",
    [
        (8, {}, InvalidSeverity),
        (-1, {}, InvalidSeverity),
        (Severity.INFO, {"facility": 24}, InvalidFacility),
        (Severity.INFO, {"msgid": "has space"}, InvalidHeaderField),
    ],
)
def test_invalid_input_raises_and_sends_nothing(
    udp_listener: UdpListener, severity: object, kwargs: dict[str, object], error: type[Exception]
) -> None:
    with RemoteSyslog(target_host=udp_listener.host, target_port=udp_listener.port) as rsyslog:
        with pytest.raises(error):
            rsyslog.send(severity, "never", **kwargs)  # type: ignore[arg-type]

    assert udp_listener.pending() == []


def test_missing_timestamp_comes_from_the_clock(udp_listener: UdpListener) -> None:
    with RemoteSyslog(
        target_host=udp_listener.host,
        target_port=udp_listener.port,
        clock=FixedClock(0),
        host_identity=FixedIdentity(),
        process_identity=FixedIdentity(),
    ) as rsyslog:
        rsyslog.info("tick")

    assert udp_listener.receive() == [b"<134>1 1970-01-01T00:00:00.000Z web01 - 4242 - tick"]


def test_level_helpers_map_to_severities(fixed_clock: FixedClock, fixed_identity: FixedIdentity) -> None:
    rsyslog = RemoteSyslog(clock=fixed_clock, host_identity=fixed_identity, process_identity=fixed_identity)
    payloads = {
        name: rsyslog.format(getattr(Severity, name.upper()), "m")
        for name in ("emerg", "alert", "crit", "err", "warning", "notice", "info", "debug")
    }
    rsyslog.close()

    assert [payload.split(b">")[0] for payload in payloads.values()] == [
        b"<128", b"<129", b"<130", b"<131", b"<132", b"<133", b"<134", b"<135"
    ]


def test_level_helpers_send_one_datagram_each(udp_listener: UdpListener) -> None:
    with RemoteSyslog(target_host=udp_listener.host, target_port=udp_listener.port, facility="user") as rsyslog:
        for helper in (rsyslog.emerg, rsyslog.alert, rsyslog.crit, rsyslog.err, rsyslog.warning, rsyslog.notice, rsyslog.info, rsyslog.debug):
            helper("m", timestamp=0)

    datagrams = udp_listener.receive(8)
    assert [datagram.split(b">")[0] for datagram in datagrams] == [f"<{8 + n}".encode() for n in range(8)]
    assert udp_listener.pending() == []


def test_format_matches_send_without_network(fixed_clock: FixedClock, fixed_identity: FixedIdentity) -> None:
    rsyslog = RemoteSyslog(clock=fixed_clock, host_identity=fixed_identity, process_identity=fixed_identity)
    first = rsyslog.format("notice", "same", msgid="id")
    second = rsyslog.format("notice", "same", msgid="id")
    rsyslog.close()

    assert first == second == b"<133>1 2018-03-18T23:38:05.134Z web01 - 4242 id same"


def _unresolvable(*_args: object) -> list[tuple[object, ...]]:
    raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")


def test_transmission_errors_reach_registered_observers() -> None:
    errors: list[TransmissionError] = []
    transport = UdpTransport("no-such-host.invalid", 514, resolver=_unresolvable)
    rsyslog = RemoteSyslog(target_host="no-such-host.invalid", target_port=514, transport=transport)
    rsyslog.on_error(errors.append)

    assert rsyslog.send(Severity.ERR, "unreachable") is True
    rsyslog.flush(5.0)
    rsyslog.close()

    assert len(errors) == 1
    assert errors[0].host == "no-such-host.invalid"


def test_unobserved_transmission_errors_do_not_raise() -> None:
    transport = UdpTransport("no-such-host.invalid", 514, resolver=_unresolvable)
    rsyslog = RemoteSyslog(target_host="no-such-host.invalid", target_port=514, transport=transport)
    assert rsyslog.send(Severity.ERR, "lost") is True
    rsyslog.close()


def test_remove_error_observer() -> None:
    rsyslog = RemoteSyslog()
    observer = lambda _error: None  # noqa: E731
    rsyslog.on_error(observer)
    assert rsyslog.remove_error_observer(observer) is True
    assert rsyslog.remove_error_observer(observer) is False
    rsyslog.close()


def test_custom_transport_receives_encoded_bytes(fixed_clock: FixedClock, fixed_identity: FixedIdentity) -> None:
    class RecordingTransport:
        def __init__(self) -> None:
            self.sent: list[bytes] = []
            self.closed = False

        def send(self, payload: bytes) -> bool:
            self.sent.append(payload)
            return True

        def flush(self, timeout: float | None = None) -> bool:
            return True

        def close(self, timeout: float | None = None) -> None:
            self.closed = True

    transport = RecordingTransport()
    with RemoteSyslog(transport=transport, clock=fixed_clock, host_identity=fixed_identity, process_identity=fixed_identity) as rsyslog:
        rsyslog.notice("hi")

    assert transport.sent == [b"<133>1 2018-03-18T23:38:05.134Z web01 - 4242 - hi"]
    assert transport.closed is True


def test_config_reflects_resolved_defaults(fixed_identity: FixedIdentity) -> None:
    rsyslog = RemoteSyslog(target_host="collector", target_port=5514, host_identity=fixed_identity)
    config = rsyslog.config
    rsyslog.close()

    assert config.address == ("collector", 5514)
    assert config.hostname == "web01"
    assert config.appname is None
    assert config.facility is Facility.LOCAL0
    assert "collector:5514" in repr(rsyslog)


@pytest.mark.asyncio
async def test_aclose_flushes_without_blocking_the_loop(udp_listener: UdpListener) -> None:
    rsyslog = RemoteSyslog(target_host=udp_listener.host, target_port=udp_listener.port)
    rsyslog.notice("async", timestamp=AWAKE_MS)
    await rsyslog.aclose()

    (datagram,) = await asyncio.to_thread(udp_listener.receive)
    assert datagram.endswith(b" - async")


def test_float_epoch_milliseconds_are_accepted(fixed_identity: FixedIdentity) -> None:
    rsyslog = RemoteSyslog(host_identity=fixed_identity, process_identity=fixed_identity)
    payload = rsyslog.format(Severity.NOTICE, "x", timestamp=AWAKE_MS + 0.9)
    rsyslog.close()

    assert payload == b"<133>1 2018-03-18T23:38:05.134Z web01 - 4242 - x"
