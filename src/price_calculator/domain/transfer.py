"""Pydantic models for exported and imported data."""

from pydantic import BaseModel, ConfigDict, Field

from price_calculator.domain.calculations import CalculationMode

EXPORT_VERSION = "1.0"


class ItemPayload(BaseModel):
    """Item record as it appears in an export file."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    price_per_kg: float = Field(alias="pricePerKg", gt=0)
    is_favorite: bool | None = Field(default=None, alias="isFavorite")
    category: str | None = None
    last_used: int | None = Field(default=None, alias="lastUsed")


class CalculationPayload(BaseModel):
    """Calculation record as it appears in an export file."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    item_id: str = Field(alias="itemId")
    item_name: str = Field(alias="itemName")
    mode: CalculationMode
    input: float
    result: float
    per_kg_price: float = Field(alias="perKgPrice")
    timestamp: int


class ExportData(BaseModel):
    """Full snapshot of items and calculation history."""

    model_config = ConfigDict(populate_by_name=True)

    version: str = EXPORT_VERSION
    exported_at: str = Field(alias="exportedAt")
    items: list[ItemPayload]
    calculations: list[CalculationPayload] = Field(default_factory=list)
