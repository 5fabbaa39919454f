"""Export and import of the item catalog and history."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime

from price_calculator.adapters.document_store import StorageError
from price_calculator.domain.calculations import Calculation
from price_calculator.domain.items import Item
from price_calculator.domain.migrations import migrate_item_record
from price_calculator.domain.transfer import (
    CalculationPayload,
    ExportData,
    ItemPayload,
)
from price_calculator.services.history import CalculationRepository, HistoryService
from price_calculator.services.items import ItemRepository, ItemService

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportResult:
    """Counts of imported records and whether they were saved."""

    item_count: int
    calculation_count: int
    ok: bool = True


@dataclass
class DataTransferService:
    """Builds export snapshots and replaces collections from imports."""

    item_service: ItemService
    history_service: HistoryService
    item_repository: ItemRepository
    calculation_repository: CalculationRepository

    async def export_data(self) -> ExportData:
        """Return a snapshot of all items and calculations.

        Stored values are exported as they are; only imports are validated.
        """
        items = await self.item_service.list_items()
        calculations = await self.history_service.list_calculations()
        return ExportData(
            exported_at=datetime.now(tz=UTC).isoformat(),
            items=[_item_payload(item) for item in items],
            calculations=[
                _calculation_payload(calculation) for calculation in calculations
            ],
        )

    async def import_data(
        self, payload: Mapping[str, object] | ExportData
    ) -> ImportResult:
        """Replace items and history with the contents of an export.

        Raises ``pydantic.ValidationError`` when the payload is malformed.
        """
        data = (
            payload
            if isinstance(payload, ExportData)
            else ExportData.model_validate(payload)
        )
        items = [
            Item.from_record(
                migrate_item_record(
                    entry.model_dump(by_alias=True, exclude_none=True, mode="json")
                )
            )
            for entry in data.items
        ]
        calculations = [
            Calculation.from_record(entry.model_dump(by_alias=True, mode="json"))
            for entry in data.calculations
        ][: self.history_service.limit]
        try:
            await self.item_repository.save_items(items)
            await self.calculation_repository.save_calculations(calculations)
        except StorageError:
            _logger.exception("Failed to import data")
            return ImportResult(len(items), len(calculations), ok=False)
        _logger.info(
            "Imported %s items and %s calculations", len(items), len(calculations)
        )
        return ImportResult(len(items), len(calculations))


def _item_payload(item: Item) -> ItemPayload:
    return ItemPayload.model_construct(
        id=item.id,
        name=item.name,
        price_per_kg=item.price_per_kg,
        is_favorite=item.is_favorite,
        category=item.category.value,
        last_used=item.last_used,
    )


def _calculation_payload(calculation: Calculation) -> CalculationPayload:
    return CalculationPayload.model_construct(
        id=calculation.id,
        item_id=calculation.item_id,
        item_name=calculation.item_name,
        mode=calculation.mode,
        input=calculation.input,
        result=calculation.result,
        per_kg_price=calculation.per_kg_price,
        timestamp=calculation.timestamp,
    )
