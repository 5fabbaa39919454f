"""Calculator workflow tying history and recency together."""

from dataclasses import dataclass

from price_calculator.domain.calculations import (
    Calculation,
    CalculationDraft,
    CalculationMode,
    compute_result,
)
from price_calculator.domain.items import Item
from price_calculator.services.history import HistoryService
from price_calculator.services.recency import RecencyService


@dataclass
class CalculatorService:
    """Service behind the calculator screen."""

    history_service: HistoryService
    recency_service: RecencyService

    async def select_item(self, item_id: str) -> None:
        """Mark an item as selected for calculation."""
        await self.recency_service.touch(item_id)

    async def save_calculation(
        self, item: Item, mode: CalculationMode, value: float
    ) -> Calculation:
        """Compute a result for an item, record it and mark the item used."""
        draft = CalculationDraft(
            item_id=item.id,
            item_name=item.name,
            mode=mode,
            input=value,
            result=compute_result(mode, value, item.price_per_kg),
            per_kg_price=item.price_per_kg,
        )
        calculation = await self.history_service.record(draft)
        await self.recency_service.touch(item.id)
        return calculation
