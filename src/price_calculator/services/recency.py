"""Recently used items tracking."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from price_calculator.adapters.document_store import StorageError
from price_calculator.domain.items import Item
from price_calculator.services.clock import Clock

if TYPE_CHECKING:
    from price_calculator.services.items import ItemService

_logger = logging.getLogger(__name__)


class RecentItemsRepository(Protocol):
    """Persistence interface for the recently used id list."""

    async def load_ids(self) -> list[str]:
        """Return stored ids, most recent first."""

    async def save_ids(self, item_ids: list[str]) -> None:
        """Replace the stored id list."""


@dataclass
class RecencyService:
    """Bounded most-recently-used list of item ids."""

    repository: RecentItemsRepository
    item_service: "ItemService"
    clock: Clock
    limit: int = 5

    async def touch(self, item_id: str) -> None:
        """Mark an item as just used.

        Moves the id to the front of the recent list and also sets the
        item's ``last_used`` timestamp, so this call writes both the recent
        list and the item collection.
        """
        try:
            item_ids = await self.repository.load_ids()
            updated = [item_id, *(entry for entry in item_ids if entry != item_id)]
            await self.repository.save_ids(updated[: self.limit])
        except StorageError:
            _logger.exception("Failed to record recent item %s", item_id)
            return
        await self.item_service.update_item(item_id, {"last_used": self.clock.now_ms()})

    async def recent_ids(self) -> list[str]:
        """Return stored ids, most recent first."""
        try:
            return await self.repository.load_ids()
        except StorageError:
            _logger.exception("Failed to load recent items")
            return []

    async def resolve(self) -> list[Item]:
        """Return recently used items, skipping ids that no longer exist."""
        item_ids = await self.recent_ids()
        items_by_id = {item.id: item for item in await self.item_service.list_items()}
        return [items_by_id[item_id] for item_id in item_ids if item_id in items_by_id]
