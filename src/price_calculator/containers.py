"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from price_calculator.adapters.document_repositories import (
    DocumentCalculationRepository,
    DocumentItemRepository,
    DocumentRecentItemsRepository,
)
from price_calculator.adapters.document_store import DocumentStore
from price_calculator.adapters.json_file_document_store import JsonFileDocumentStore
from price_calculator.adapters.memory_document_store import InMemoryDocumentStore
from price_calculator.app_logging import configure_logging
from price_calculator.config import Settings
from price_calculator.domain.items import Item
from price_calculator.services.calculator import CalculatorService
from price_calculator.services.clock import Clock, SystemClock, TimestampIdFactory
from price_calculator.services.deletions import ItemDeletionService
from price_calculator.services.feedback import FeedbackSink, LoggingFeedbackSink
from price_calculator.services.history import HistoryService
from price_calculator.services.items import ItemService
from price_calculator.services.recency import RecencyService
from price_calculator.services.transfer import DataTransferService
from price_calculator.services.undo import UndoController


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    document_store: DocumentStore
    item_service: ItemService
    history_service: HistoryService
    recency_service: RecencyService
    undo_controller: UndoController[Item]
    deletion_service: ItemDeletionService
    calculator_service: CalculatorService
    transfer_service: DataTransferService
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    *,
    document_store: DocumentStore | None = None,
    clock: Clock | None = None,
    feedback: FeedbackSink | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    store = document_store or _build_document_store(resolved_settings)
    resolved_clock = clock or SystemClock()
    id_factory = TimestampIdFactory(resolved_clock)

    item_repository = DocumentItemRepository(store)
    calculation_repository = DocumentCalculationRepository(store)
    recent_repository = DocumentRecentItemsRepository(store)

    item_service = ItemService(
        repository=item_repository,
        recent_repository=recent_repository,
        id_factory=id_factory,
    )
    history_service = HistoryService(
        repository=calculation_repository,
        clock=resolved_clock,
        id_factory=id_factory,
        limit=resolved_settings.history_limit,
    )
    recency_service = RecencyService(
        repository=recent_repository,
        item_service=item_service,
        clock=resolved_clock,
        limit=resolved_settings.recent_items_limit,
    )
    undo_controller: UndoController[Item] = UndoController(
        clock=resolved_clock, timeout_ms=resolved_settings.undo_timeout_ms
    )
    deletion_service = ItemDeletionService(
        item_service=item_service,
        undo_controller=undo_controller,
        feedback=feedback or LoggingFeedbackSink(),
    )
    calculator_service = CalculatorService(
        history_service=history_service,
        recency_service=recency_service,
    )
    transfer_service = DataTransferService(
        item_service=item_service,
        history_service=history_service,
        item_repository=item_repository,
        calculation_repository=calculation_repository,
    )

    async def close_resources() -> None:
        undo_controller.close()

    return AppContainer(
        settings=resolved_settings,
        document_store=store,
        item_service=item_service,
        history_service=history_service,
        recency_service=recency_service,
        undo_controller=undo_controller,
        deletion_service=deletion_service,
        calculator_service=calculator_service,
        transfer_service=transfer_service,
        close_resources=close_resources,
    )


def _build_document_store(settings: Settings) -> DocumentStore:
    """Create the document store selected in settings."""
    if settings.storage_backend == "memory":
        return InMemoryDocumentStore()
    return JsonFileDocumentStore.create(settings.storage_dir)
