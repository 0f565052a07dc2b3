"""Use case formatting a message and handing it to the transport."""

from __future__ import annotations

import logging
from typing import Callable

from lib_rsyslog.application.ports import TransportPort
from lib_rsyslog.domain import SendOptions, Severity

from .format_message import FormatCallable

LOGGER = logging.getLogger(__name__)

SendCallable = Callable[[Severity | int | str, str, SendOptions], bool]


def create_send_message(*, format_message: FormatCallable, transport: TransportPort) -> SendCallable:
    """Return a callable that validates, encodes, and dispatches one datagram.

    Validation errors propagate from ``format_message`` before the transport
    is touched. Transport failures never come back through the return value;
    they are reported to the transport's error observers.
    """

    def send_message(severity: Severity | int | str, text: str, options: SendOptions) -> bool:
        message = format_message(severity, text, options)
        payload = message.encode()
        LOGGER.debug("Dispatching syslog datagram pri=%d size=%d", message.priority, len(payload))
        return transport.send(payload)

    return send_message


__all__ = ["SendCallable", "create_send_message"]
