"""Tests for the item service."""

import asyncio
import logging

from price_calculator.adapters.memory_document_store import InMemoryDocumentStore
from price_calculator.config import Settings
from price_calculator.containers import AppContainer, build_container
from price_calculator.domain.items import Category, Item
from tests.conftest import FailingDocumentStore, FakeClock

RICE = {
    "id": "1",
    "name": "Rice",
    "pricePerKg": 75.5,
    "isFavorite": True,
    "category": "groceries",
}


def test_first_read_seeds_defaults_once(
    container: AppContainer, store: InMemoryDocumentStore
) -> None:
    service = container.item_service

    first = asyncio.run(service.list_items())
    assert [item.name for item in first] == [
        "Rice",
        "Wheat Flour",
        "Sugar",
        "Onions",
        "Tomatoes",
        "Potatoes",
    ]
    assert len(store.documents["items"]) == 6

    second = asyncio.run(service.list_items())
    assert second == first
    assert len(store.documents["items"]) == 6


def test_existing_empty_document_is_not_reseeded(
    container: AppContainer, store: InMemoryDocumentStore
) -> None:
    store.documents["items"] = []

    assert asyncio.run(container.item_service.list_items()) == []
    assert store.documents["items"] == []


def test_update_merges_fields(
    container: AppContainer, store: InMemoryDocumentStore
) -> None:
    store.documents["items"] = [dict(RICE)]
    service = container.item_service

    asyncio.run(service.update_item("1", {"price_per_kg": 80}))

    [item] = asyncio.run(service.list_items())
    assert item == Item(
        id="1",
        name="Rice",
        price_per_kg=80,
        is_favorite=True,
        category=Category.GROCERIES,
    )


def test_update_ignores_unknown_id_and_id_changes(
    container: AppContainer, store: InMemoryDocumentStore
) -> None:
    store.documents["items"] = [dict(RICE)]
    service = container.item_service

    assert asyncio.run(service.update_item("missing", {"name": "X"})) is None
    updated = asyncio.run(service.update_item("1", {"id": "2", "name": "Basmati"}))

    assert updated is not None
    assert updated.id == "1"
    assert store.documents["items"][0]["name"] == "Basmati"


class _RecordingHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(logging.WARNING)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


def test_update_accepts_record_names_and_warns_on_unknown_keys(
    container: AppContainer, store: InMemoryDocumentStore
) -> None:
    store.documents["items"] = [dict(RICE)]
    service = container.item_service
    handler = _RecordingHandler()
    logger = logging.getLogger("price_calculator.services.items")
    logger.addHandler(handler)
    try:
        updated = asyncio.run(
            service.update_item("1", {"pricePerKg": 80, "isFavorite": False, "x": 1})
        )
    finally:
        logger.removeHandler(handler)

    assert updated is not None
    assert (updated.price_per_kg, updated.is_favorite) == (80, False)
    assert store.documents["items"][0]["pricePerKg"] == 80
    assert handler.messages == ["Ignoring change to 'x' on item 1"]


def test_add_item_appends_with_unique_ids(
    container: AppContainer, store: InMemoryDocumentStore
) -> None:
    store.documents["items"] = [dict(RICE)]
    service = container.item_service

    first = asyncio.run(service.add_item("Lentils", 90.0, Category.GROCERIES))
    second = asyncio.run(service.add_item("Apples", 120.0))

    assert first.id != second.id
    assert second.category is Category.OTHER
    assert second.is_favorite is False
    assert [record["id"] for record in store.documents["items"]] == [
        "1",
        first.id,
        second.id,
    ]


def test_delete_removes_item_and_recent_entry(
    container: AppContainer, store: InMemoryDocumentStore
) -> None:
    asyncio.run(container.item_service.list_items())
    store.documents["recent-items"] = ["2", "1"]

    removed = asyncio.run(container.item_service.delete_item("1"))

    assert removed is not None
    assert removed.name == "Rice"
    assert store.documents["recent-items"] == ["2"]
    ids = [item.id for item in asyncio.run(container.item_service.list_items())]
    assert "1" not in ids


def test_delete_unknown_id_is_silent(container: AppContainer) -> None:
    asyncio.run(container.item_service.list_items())

    assert asyncio.run(container.item_service.delete_item("missing")) is None
    assert len(asyncio.run(container.item_service.list_items())) == 6


def test_toggle_favorite_flips_flag(container: AppContainer) -> None:
    service = container.item_service

    toggled = asyncio.run(service.toggle_favorite("1"))
    assert toggled is not None
    assert toggled.is_favorite is False

    toggled = asyncio.run(service.toggle_favorite("1"))
    assert toggled is not None
    assert toggled.is_favorite is True
    assert asyncio.run(service.toggle_favorite("missing")) is None


def test_filters_by_category_and_favorite(container: AppContainer) -> None:
    service = container.item_service

    vegetables = asyncio.run(service.by_category("vegetables"))
    favorites = asyncio.run(service.favorites())

    assert [item.name for item in vegetables] == ["Onions", "Tomatoes", "Potatoes"]
    assert [item.name for item in favorites] == ["Rice", "Sugar"]
    assert asyncio.run(service.by_category(Category.DAIRY)) == []


def test_read_migrates_legacy_records(
    container: AppContainer, store: InMemoryDocumentStore
) -> None:
    store.documents["items"] = [
        {"id": "9", "name": "Beans", "pricePerKg": 110},
        {"id": "10", "name": "Broken"},
        "garbage",
    ]

    [item] = asyncio.run(container.item_service.list_items())

    assert item.is_favorite is False
    assert item.category is Category.OTHER
    assert item.last_used is None


def test_restore_item_appends_once(
    container: AppContainer, store: InMemoryDocumentStore
) -> None:
    store.documents["items"] = [dict(RICE)]
    service = container.item_service
    removed = asyncio.run(service.delete_item("1"))
    assert removed is not None

    assert asyncio.run(service.restore_item(removed)) is True
    assert asyncio.run(service.restore_item(removed)) is False
    assert asyncio.run(service.list_items()) == [removed]


def test_read_failure_degrades_to_empty_without_writing(
    settings: Settings, clock: FakeClock
) -> None:
    store = FailingDocumentStore(fail_reads=True)
    service = build_container(settings, document_store=store, clock=clock).item_service

    result = asyncio.run(service.load_items())

    assert result.items == []
    assert result.ok is False
    assert asyncio.run(service.list_items()) == []
    assert asyncio.run(service.update_item("1", {"name": "X"})) is None
    assert asyncio.run(service.delete_item("1")) is None
    assert store.writes == []


def test_write_failure_is_swallowed(settings: Settings, clock: FakeClock) -> None:
    store = FailingDocumentStore(fail_writes=True)
    service = build_container(settings, document_store=store, clock=clock).item_service

    item = asyncio.run(service.add_item("Lentils", 90.0))

    assert item.name == "Lentils"
    assert "items" not in store.documents


def test_item_with_bad_last_used_survives_read_and_save(
    container: AppContainer, store: InMemoryDocumentStore
) -> None:
    store.documents["items"] = [{**RICE, "lastUsed": "yesterday"}]
    service = container.item_service

    async def scenario():
        [item] = await service.list_items()
        await service.toggle_favorite("1")
        return item

    item = asyncio.run(scenario())

    assert item.last_used is None
    assert [record["id"] for record in store.documents["items"]] == ["1"]
    assert "lastUsed" not in store.documents["items"][0]
