"""Domain types for the undo buffer."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class UndoState(StrEnum):
    """Whether the undo buffer holds a restorable entry."""

    EMPTY = "empty"
    PENDING = "pending"


class UndoEventKind(StrEnum):
    """How a pending entry left the buffer."""

    RESTORED = "restored"
    EXPIRED = "expired"


@dataclass(frozen=True)
class UndoEntry(Generic[T]):
    """Snapshot of a removed entity held for possible restoration."""

    data: T
    action: str
    timestamp: int


@dataclass(frozen=True)
class UndoEvent(Generic[T]):
    """Outcome of a pending entry, returned instead of a callback.

    Only a restore hands the staged data back. An expiry reports which
    action lapsed and when it was staged; its data is gone.
    """

    kind: UndoEventKind
    action: str
    timestamp: int
    data: T | None = None
