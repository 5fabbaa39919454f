"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from price_calculator.adapters.document_store import StorageError
from price_calculator.adapters.memory_document_store import InMemoryDocumentStore
from price_calculator.config import Settings
from price_calculator.containers import AppContainer, build_container
from price_calculator.domain.calculations import CalculationDraft, CalculationMode
from price_calculator.services.clock import Clock
from price_calculator.services.feedback import FeedbackSink

START_MS = 1_700_000_000_000


@dataclass
class FakeClock(Clock):
    """Manually advanced clock."""

    now: int = START_MS

    def now_ms(self) -> int:
        return self.now

    def advance(self, milliseconds: int) -> None:
        self.now += milliseconds


@dataclass
class FailingDocumentStore(InMemoryDocumentStore):
    """Document store that fails reads and/or writes on demand."""

    fail_reads: bool = False
    fail_writes: bool = False
    writes: list[str] = field(default_factory=list)

    async def get(self, key: str) -> object | None:
        if self.fail_reads:
            raise StorageError(f"read {key} failed")
        return await super().get(key)

    async def set(self, key: str, document: object) -> None:
        self.writes.append(key)
        if self.fail_writes:
            raise StorageError(f"write {key} failed")
        await super().set(key, document)

    async def remove(self, key: str) -> None:
        if self.fail_writes:
            raise StorageError(f"remove {key} failed")
        await super().remove(key)


@dataclass
class RecordingFeedbackSink(FeedbackSink):
    """Feedback sink that records notifications."""

    kinds: list[str] = field(default_factory=list)

    def notify(self, kind: str) -> None:
        self.kinds.append(kind)


def make_draft(value: float = 2.0, item_id: str = "1") -> CalculationDraft:
    """Build a price-mode calculation draft for Rice."""
    return CalculationDraft(
        item_id=item_id,
        item_name="Rice",
        mode=CalculationMode.PRICE,
        input=value,
        result=value * 75.5,
        per_kg_price=75.5,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory", undo_timeout_ms=5000)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def feedback() -> RecordingFeedbackSink:
    return RecordingFeedbackSink()


@pytest.fixture
def container(
    settings: Settings,
    store: InMemoryDocumentStore,
    clock: FakeClock,
    feedback: RecordingFeedbackSink,
) -> AppContainer:
    return build_container(
        settings, document_store=store, clock=clock, feedback=feedback
    )
