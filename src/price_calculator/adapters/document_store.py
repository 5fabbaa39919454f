"""Key-value document store interface."""

from typing import Protocol


class StorageError(RuntimeError):
    """Raised when a document cannot be read, written or removed."""


class DocumentStore(Protocol):
    """Interface for one JSON-serializable document per key."""

    async def get(self, key: str) -> object | None:
        """Return the decoded document for a key, or None if absent."""

    async def set(self, key: str, document: object) -> None:
        """Store a document under a key, replacing any previous one."""

    async def remove(self, key: str) -> None:
        """Remove the document for a key; missing keys are ignored."""
