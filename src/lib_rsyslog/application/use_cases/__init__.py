"""Use cases composing the domain with injected ports."""

from __future__ import annotations

from .format_message import FormatCallable, create_format_message
from .send_message import SendCallable, create_send_message

__all__ = ["FormatCallable", "SendCallable", "create_format_message", "create_send_message"]
