"""Port for the wall clock used to stamp messages."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Provide the current instant as epoch milliseconds."""

    def now_ms(self) -> int: ...


__all__ = ["ClockPort"]
