"""Time and identifier sources."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol


class Clock(Protocol):
    """Source of the current time in epoch milliseconds."""

    def now_ms(self) -> int:
        """Return the current time in epoch milliseconds."""


class SystemClock(Clock):
    """Wall-clock time source."""

    def now_ms(self) -> int:
        """Return the current UTC time in epoch milliseconds."""
        return int(datetime.now(tz=UTC).timestamp() * 1000)


@dataclass
class TimestampIdFactory:
    """Issue time-derived ids that stay unique within a process."""

    clock: Clock
    _last: int = 0

    def new_id(self) -> str:
        """Return the current timestamp as an id, bumped past the last one."""
        candidate = self.clock.now_ms()
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)
