"""Calculation history service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from price_calculator.adapters.document_store import StorageError
from price_calculator.domain.calculations import Calculation, CalculationDraft
from price_calculator.services.clock import Clock, TimestampIdFactory

_logger = logging.getLogger(__name__)


class CalculationRepository(Protocol):
    """Persistence interface for calculation history."""

    async def load_calculations(self) -> list[Calculation]:
        """Return stored calculations, newest first."""

    async def save_calculations(self, calculations: list[Calculation]) -> None:
        """Replace stored calculations."""

    async def clear(self) -> None:
        """Remove the stored history."""


@dataclass
class HistoryService:
    """Append-only, bounded log of past calculations."""

    repository: CalculationRepository
    clock: Clock
    id_factory: TimestampIdFactory
    limit: int = 50

    async def record(self, draft: CalculationDraft) -> Calculation:
        """Stamp a calculation and prepend it to the history."""
        calculation = Calculation.from_draft(
            draft,
            calculation_id=self.id_factory.new_id(),
            timestamp=self.clock.now_ms(),
        )
        try:
            calculations = await self.repository.load_calculations()
            await self.repository.save_calculations(
                [calculation, *calculations][: self.limit]
            )
        except StorageError:
            _logger.exception("Failed to record calculation")
        return calculation

    async def list_calculations(self) -> list[Calculation]:
        """Return the history, newest first."""
        try:
            return await self.repository.load_calculations()
        except StorageError:
            _logger.exception("Failed to load calculations")
            return []

    async def clear(self) -> None:
        """Delete the whole history."""
        try:
            await self.repository.clear()
        except StorageError:
            _logger.exception("Failed to clear calculations")
