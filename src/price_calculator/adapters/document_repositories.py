"""Repositories that persist collections as documents."""

import logging
from dataclasses import dataclass

from price_calculator.adapters.document_store import DocumentStore, StorageError
from price_calculator.domain.calculations import Calculation
from price_calculator.domain.items import Item
from price_calculator.domain.migrations import migrate_item_record
from price_calculator.services.history import CalculationRepository
from price_calculator.services.items import ItemRepository
from price_calculator.services.recency import RecentItemsRepository

ITEMS_KEY = "items"
CALCULATIONS_KEY = "calculations"
RECENT_ITEMS_KEY = "recent-items"

_logger = logging.getLogger(__name__)


@dataclass
class DocumentItemRepository(ItemRepository):
    """Item collection stored as one document."""

    store: DocumentStore
    key: str = ITEMS_KEY

    async def load_items(self) -> list[Item] | None:
        """Return migrated items, or None when no document exists."""
        document = await self.store.get(self.key)
        if document is None:
            return None
        if not isinstance(document, list):
            raise StorageError(f"Document {self.key} is not a list")
        items: list[Item] = []
        for raw in document:
            if not isinstance(raw, dict):
                _logger.warning("Skipping non-object item record in %s", self.key)
                continue
            try:
                items.append(Item.from_record(migrate_item_record(raw)))
            except (TypeError, ValueError) as exc:
                _logger.warning("Skipping item record %r: %s", raw.get("id"), exc)
        return items

    async def save_items(self, items: list[Item]) -> None:
        """Replace the stored item collection."""
        await self.store.set(self.key, [item.to_record() for item in items])


@dataclass
class DocumentCalculationRepository(CalculationRepository):
    """Calculation history stored as one newest-first document."""

    store: DocumentStore
    key: str = CALCULATIONS_KEY

    async def load_calculations(self) -> list[Calculation]:
        """Return stored calculations; an absent document is empty.

        Records that do not parse are logged and skipped.
        """
        document = await self.store.get(self.key)
        if document is None:
            return []
        if not isinstance(document, list):
            raise StorageError(f"Document {self.key} is not a list")
        calculations: list[Calculation] = []
        for raw in document:
            if not isinstance(raw, dict):
                _logger.warning("Skipping non-object calculation in %s", self.key)
                continue
            try:
                calculations.append(Calculation.from_record(raw))
            except (KeyError, TypeError, ValueError) as exc:
                _logger.warning("Skipping calculation %r: %s", raw.get("id"), exc)
        return calculations

    async def save_calculations(self, calculations: list[Calculation]) -> None:
        """Replace the stored history."""
        await self.store.set(
            self.key, [calculation.to_record() for calculation in calculations]
        )

    async def clear(self) -> None:
        """Remove the history document entirely."""
        await self.store.remove(self.key)


@dataclass
class DocumentRecentItemsRepository(RecentItemsRepository):
    """Recently used item ids stored as one newest-first document."""

    store: DocumentStore
    key: str = RECENT_ITEMS_KEY

    async def load_ids(self) -> list[str]:
        """Return stored ids; an absent document is empty."""
        document = await self.store.get(self.key)
        if document is None:
            return []
        if not isinstance(document, list):
            raise StorageError(f"Document {self.key} is not a list")
        return [str(item_id) for item_id in document]

    async def save_ids(self, item_ids: list[str]) -> None:
        """Replace the stored id list."""
        await self.store.set(self.key, list(item_ids))
