"""Domain models for calculation history."""

from dataclasses import dataclass
from enum import StrEnum


class CalculationMode(StrEnum):
    """Direction of a price-per-weight calculation."""

    PRICE = "price"
    WEIGHT = "weight"


@dataclass(frozen=True)
class CalculationDraft:
    """A calculation before it is stamped with an id and timestamp."""

    item_id: str
    item_name: str
    mode: CalculationMode
    input: float
    result: float
    per_kg_price: float


@dataclass(frozen=True)
class Calculation:
    """Represents a recorded calculation."""

    id: str
    item_id: str
    item_name: str
    mode: CalculationMode
    input: float
    result: float
    per_kg_price: float
    timestamp: int

    @classmethod
    def from_draft(
        cls, draft: CalculationDraft, calculation_id: str, timestamp: int
    ) -> "Calculation":
        """Stamp a draft with its id and timestamp."""
        return cls(
            id=calculation_id,
            item_id=draft.item_id,
            item_name=draft.item_name,
            mode=draft.mode,
            input=draft.input,
            result=draft.result,
            per_kg_price=draft.per_kg_price,
            timestamp=timestamp,
        )

    @classmethod
    def from_record(cls, record: dict[str, object]) -> "Calculation":
        """Build a calculation from its stored record."""
        return cls(
            id=str(record["id"]),
            item_id=str(record["itemId"]),
            item_name=str(record["itemName"]),
            mode=CalculationMode(record["mode"]),
            input=record["input"],  # type: ignore[arg-type]
            result=record["result"],  # type: ignore[arg-type]
            per_kg_price=record["perKgPrice"],  # type: ignore[arg-type]
            timestamp=record["timestamp"],  # type: ignore[arg-type]
        )

    def to_record(self) -> dict[str, object]:
        """Serialize the calculation into its stored record shape."""
        return {
            "id": self.id,
            "itemId": self.item_id,
            "itemName": self.item_name,
            "mode": self.mode.value,
            "input": self.input,
            "result": self.result,
            "perKgPrice": self.per_kg_price,
            "timestamp": self.timestamp,
        }


def compute_result(mode: CalculationMode, value: float, price_per_kg: float) -> float:
    """Convert a weight to a price, or an amount of money to a weight in kg."""
    if mode is CalculationMode.PRICE:
        return value * price_per_kg
    return value / price_per_kg
