"""In-memory document store."""

import copy
from dataclasses import dataclass, field

from price_calculator.adapters.document_store import DocumentStore


@dataclass
class InMemoryDocumentStore(DocumentStore):
    """Dict-backed document store for ephemeral sessions."""

    documents: dict[str, object] = field(default_factory=dict)

    async def get(self, key: str) -> object | None:
        """Return a copy of the stored document."""
        return copy.deepcopy(self.documents.get(key))

    async def set(self, key: str, document: object) -> None:
        """Store a copy of the document."""
        self.documents[key] = copy.deepcopy(document)

    async def remove(self, key: str) -> None:
        """Drop the document for a key."""
        self.documents.pop(key, None)
