"""Single-slot, time-boxed undo buffer."""

import asyncio
import logging
from dataclasses import dataclass, field
from types import TracebackType
from typing import Generic, TypeVar

from price_calculator.domain.undo import UndoEntry, UndoEvent, UndoEventKind, UndoState
from price_calculator.services.clock import Clock

T = TypeVar("T")

DEFAULT_TIMEOUT_MS = 5000

_logger = logging.getLogger(__name__)


@dataclass
class UndoController(Generic[T]):
    """Holds one just-removed entity until it is restored or expires.

    Staging replaces any pending entry and restarts the countdown. Restoring
    returns an ``UndoEvent`` carrying the data. Expiry discards the data and
    keeps a data-free ``UndoEvent`` for ``drain_events`` or ``next_event``.
    Only the latest expiry is kept. ``clear`` dismisses the entry without
    any event.

    The owner must call ``close`` (or use the controller as an async context
    manager) so no countdown outlives it.
    """

    clock: Clock
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    _entry: UndoEntry[T] | None = field(default=None, init=False)
    _handle: asyncio.TimerHandle | None = field(default=None, init=False)
    _events: "asyncio.Queue[UndoEvent[T]]" = field(
        default_factory=lambda: asyncio.Queue(maxsize=1), init=False
    )

    @property
    def state(self) -> UndoState:
        """Return whether an entry is pending."""
        return UndoState.EMPTY if self.entry is None else UndoState.PENDING

    @property
    def entry(self) -> UndoEntry[T] | None:
        """Return the pending entry, if any."""
        self._expire_if_due()
        return self._entry

    @property
    def can_undo(self) -> bool:
        """Return True when an entry can be restored."""
        return self.entry is not None

    def stage(self, data: T, action: str = "deleted") -> UndoEntry[T]:
        """Hold ``data`` for restoration and start the countdown.

        Must be called from a running event loop.
        """
        loop = asyncio.get_running_loop()
        self._cancel_countdown()
        entry = UndoEntry(data=data, action=action, timestamp=self.clock.now_ms())
        self._entry = entry
        self._handle = loop.call_later(self.timeout_ms / 1000, self._expire, entry)
        return entry

    def undo(self) -> UndoEvent[T] | None:
        """Restore the pending entry, or return None if there is nothing."""
        entry = self.entry
        if entry is None:
            return None
        self._cancel_countdown()
        self._entry = None
        return UndoEvent(
            kind=UndoEventKind.RESTORED,
            action=entry.action,
            timestamp=entry.timestamp,
            data=entry.data,
        )

    def clear(self) -> None:
        """Dismiss the pending entry without restoring it."""
        self._cancel_countdown()
        self._entry = None

    def remaining_time(self) -> int:
        """Return milliseconds left before the pending entry expires."""
        if self._entry is None:
            return 0
        elapsed = self.clock.now_ms() - self._entry.timestamp
        return max(0, min(self.timeout_ms, self.timeout_ms - elapsed))

    def drain_events(self) -> list[UndoEvent[T]]:
        """Return and forget the pending expiry event, if any."""
        self._expire_if_due()
        events: list[UndoEvent[T]] = []
        while not self._events.empty():
            events.append(self._events.get_nowait())
        return events

    async def next_event(self) -> UndoEvent[T]:
        """Wait for the next expiry event."""
        return await self._events.get()

    def close(self) -> None:
        """Cancel the countdown and drop any pending entry."""
        self.clear()

    async def __aenter__(self) -> "UndoController[T]":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _expire_if_due(self) -> None:
        if self._entry is not None and self.remaining_time() == 0:
            self._cancel_countdown()
            self._expire(self._entry)

    def _expire(self, entry: UndoEntry[T]) -> None:
        if self._entry is not entry:
            return
        self._entry = None
        self._handle = None
        _logger.debug("Undo entry expired: %s", entry.action)
        if self._events.full():
            self._events.get_nowait()
        self._events.put_nowait(
            UndoEvent(
                kind=UndoEventKind.EXPIRED,
                action=entry.action,
                timestamp=entry.timestamp,
            )
        )

    def _cancel_countdown(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
