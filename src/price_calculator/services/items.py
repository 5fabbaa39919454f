"""Item catalog service."""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Protocol

from price_calculator.adapters.document_store import StorageError
from price_calculator.domain.items import DEFAULT_ITEMS, Category, Item, parse_category
from price_calculator.services.clock import TimestampIdFactory
from price_calculator.services.recency import RecentItemsRepository

_UPDATABLE_FIELDS = frozenset(
    {"name", "price_per_kg", "is_favorite", "category", "last_used"}
)
_RECORD_ALIASES = {
    "pricePerKg": "price_per_kg",
    "isFavorite": "is_favorite",
    "lastUsed": "last_used",
}

_logger = logging.getLogger(__name__)


class ItemRepository(Protocol):
    """Persistence interface for the item collection."""

    async def load_items(self) -> list[Item] | None:
        """Return all items, or None when nothing was ever stored."""

    async def save_items(self, items: list[Item]) -> None:
        """Replace the stored item collection."""


@dataclass(frozen=True)
class ItemsResult:
    """Items read from storage, with whether the read succeeded."""

    items: list[Item]
    ok: bool = True


@dataclass
class ItemService:
    """Application service for the item catalog.

    Storage failures never propagate: reads degrade to an empty result and
    writes are logged and dropped. A mutation whose read failed does not
    write, so a failed read cannot overwrite the stored collection.
    """

    repository: ItemRepository
    recent_repository: RecentItemsRepository
    id_factory: TimestampIdFactory

    async def load_items(self) -> ItemsResult:
        """Read all items, seeding the default catalog on first use."""
        try:
            items = await self.repository.load_items()
        except StorageError:
            _logger.exception("Failed to load items")
            return ItemsResult(items=[], ok=False)
        if items is None:
            items = list(DEFAULT_ITEMS)
            _logger.info("Seeding %s default items", len(items))
            await self._save(items)
        return ItemsResult(items=items)

    async def list_items(self) -> list[Item]:
        """Return all items, or an empty list if they failed to load."""
        return (await self.load_items()).items

    async def add_item(
        self, name: str, price_per_kg: float, category: Category = Category.OTHER
    ) -> Item:
        """Append a new item and return it."""
        result = await self.load_items()
        existing_ids = {item.id for item in result.items}
        item_id = self.id_factory.new_id()
        while item_id in existing_ids:
            item_id = self.id_factory.new_id()
        item = Item(
            id=item_id,
            name=name,
            price_per_kg=price_per_kg,
            category=parse_category(category),
        )
        if result.ok:
            await self._save([*result.items, item])
        return item

    async def update_item(
        self, item_id: str, changes: dict[str, object]
    ) -> Item | None:
        """Merge changes into an item; unknown ids are ignored."""
        result = await self.load_items()
        if not result.ok:
            return None
        updated: Item | None = None
        items: list[Item] = []
        for item in result.items:
            if item.id == item_id:
                item = _apply_changes(item, changes)
                updated = item
            items.append(item)
        if updated is not None:
            await self._save(items)
        return updated

    async def delete_item(self, item_id: str) -> Item | None:
        """Remove an item and drop it from the recently used list.

        Returns the removed snapshot, or None if no item matched.
        """
        result = await self.load_items()
        if not result.ok:
            return None
        removed = next((item for item in result.items if item.id == item_id), None)
        if removed is not None:
            await self._save([item for item in result.items if item.id != item_id])
        await self._forget_recent(item_id)
        return removed

    async def restore_item(self, item: Item) -> bool:
        """Put a removed item back unless its id is already present."""
        result = await self.load_items()
        if not result.ok or any(existing.id == item.id for existing in result.items):
            return False
        return await self._save([*result.items, item])

    async def toggle_favorite(self, item_id: str) -> Item | None:
        """Flip the favorite flag of an item."""
        items = await self.list_items()
        item = next((entry for entry in items if entry.id == item_id), None)
        if item is None:
            return None
        return await self.update_item(item_id, {"is_favorite": not item.is_favorite})

    async def by_category(self, category: Category | str) -> list[Item]:
        """Return items in a category."""
        wanted = parse_category(category)
        return [item for item in await self.list_items() if item.category is wanted]

    async def favorites(self) -> list[Item]:
        """Return favorite items."""
        return [item for item in await self.list_items() if item.is_favorite]

    async def _save(self, items: list[Item]) -> bool:
        try:
            await self.repository.save_items(items)
        except StorageError:
            _logger.exception("Failed to save items")
            return False
        return True

    async def _forget_recent(self, item_id: str) -> None:
        try:
            item_ids = await self.recent_repository.load_ids()
            if item_id in item_ids:
                await self.recent_repository.save_ids(
                    [entry for entry in item_ids if entry != item_id]
                )
        except StorageError:
            _logger.exception("Failed to drop item %s from recent items", item_id)


def _apply_changes(item: Item, changes: dict[str, object]) -> Item:
    """Return a copy of ``item`` with the allowed fields replaced.

    Stored record names such as ``pricePerKg`` are accepted too. The id and
    unknown keys are ignored with a warning.
    """
    fields: dict[str, object] = {}
    for key, value in changes.items():
        name = _RECORD_ALIASES.get(key, key)
        if name in _UPDATABLE_FIELDS:
            fields[name] = value
        else:
            _logger.warning("Ignoring change to %r on item %s", key, item.id)
    if "category" in fields:
        fields["category"] = parse_category(fields["category"])
    return dataclasses.replace(item, **fields)  # type: ignore[arg-type]
