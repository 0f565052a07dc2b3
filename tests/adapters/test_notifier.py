from __future__ import annotations

import logging

import pytest

from lib_rsyslog.adapters.notifier import ErrorNotifier
from lib_rsyslog.domain.errors import TransmissionError


def _error(text: str = "boom") -> TransmissionError:
    return TransmissionError(text, host="collector", port=514, payload=b"<134>1 ...")


def test_persistent_observers_see_every_error() -> None:
    notifier = ErrorNotifier()
    seen: list[str] = []
    notifier.subscribe(lambda error: seen.append(str(error)))

    notifier.notify(_error("one"))
    notifier.notify(_error("two"))

    assert seen == ["one", "two"]


def test_once_observers_fire_a_single_time() -> None:
    notifier = ErrorNotifier()
    seen: list[str] = []
    notifier.subscribe(lambda error: seen.append(str(error)), once=True)

    notifier.notify(_error("one"))
    assert notifier.observer_count == 0
    notifier.notify(_error("two"))

    assert seen == ["one"]


def test_unsubscribe_callable_removes_observer() -> None:
    notifier = ErrorNotifier()
    seen: list[TransmissionError] = []
    unsubscribe = notifier.subscribe(seen.append)

    assert unsubscribe() is True
    assert unsubscribe() is False
    notifier.notify(_error())

    assert seen == []


def test_observer_failures_do_not_stop_other_observers(caplog: pytest.LogCaptureFixture) -> None:
    notifier = ErrorNotifier()
    seen: list[TransmissionError] = []

    def broken(_error: TransmissionError) -> None:
        raise RuntimeError("observer bug")

    notifier.subscribe(broken)
    notifier.subscribe(seen.append)
    with caplog.at_level(logging.ERROR, logger="lib_rsyslog.adapters.notifier"):
        notifier.notify(_error())

    assert len(seen) == 1
    assert any("observer" in record.getMessage() for record in caplog.records)


def test_unobserved_error_is_logged_once(caplog: pytest.LogCaptureFixture) -> None:
    notifier = ErrorNotifier()
    with caplog.at_level(logging.WARNING, logger="lib_rsyslog.adapters.notifier"):
        notifier.notify(_error("dropped"))

    assert [record.levelno for record in caplog.records] == [logging.WARNING]
    assert "dropped" in caplog.records[0].getMessage()
