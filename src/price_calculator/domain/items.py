"""Domain models for priced catalog items."""

from dataclasses import dataclass
from enum import StrEnum


class Category(StrEnum):
    """Catalog category of an item."""

    GROCERIES = "groceries"
    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    DAIRY = "dairy"
    MEAT = "meat"
    SPICES = "spices"
    BEVERAGES = "beverages"
    OTHER = "other"


CATEGORIES: dict[Category, str] = {
    Category.GROCERIES: "Groceries",
    Category.VEGETABLES: "Vegetables",
    Category.FRUITS: "Fruits",
    Category.DAIRY: "Dairy",
    Category.MEAT: "Meat",
    Category.SPICES: "Spices",
    Category.BEVERAGES: "Beverages",
    Category.OTHER: "Other",
}

_CATEGORY_VALUES = {category.value for category in Category}


def parse_category(value: object) -> Category:
    """Return the matching category, or OTHER when unrecognized."""
    if isinstance(value, str) and value in _CATEGORY_VALUES:
        return Category(value)
    return Category.OTHER


def category_label(category: object) -> str:
    """Return the display label for a category."""
    return CATEGORIES.get(parse_category(category), "Other")


@dataclass(frozen=True)
class Item:
    """Represents a priced-per-weight catalog entry."""

    id: str
    name: str
    price_per_kg: float
    is_favorite: bool = False
    category: Category = Category.OTHER
    last_used: int | None = None

    @classmethod
    def from_record(cls, record: dict[str, object]) -> "Item":
        """Build an item from a current-shape stored record."""
        last_used = record.get("lastUsed")
        return cls(
            id=str(record["id"]),
            name=str(record["name"]),
            price_per_kg=float(record["pricePerKg"]),  # type: ignore[arg-type]
            is_favorite=bool(record.get("isFavorite", False)),
            category=parse_category(record.get("category")),
            last_used=None if last_used is None else int(last_used),  # type: ignore[arg-type]
        )

    def to_record(self) -> dict[str, object]:
        """Serialize the item into its stored record shape."""
        record: dict[str, object] = {
            "id": self.id,
            "name": self.name,
            "pricePerKg": self.price_per_kg,
            "isFavorite": self.is_favorite,
            "category": self.category.value,
        }
        if self.last_used is not None:
            record["lastUsed"] = self.last_used
        return record


DEFAULT_ITEMS: tuple[Item, ...] = (
    Item("1", "Rice", 75.50, is_favorite=True, category=Category.GROCERIES),
    Item("2", "Wheat Flour", 45.80, category=Category.GROCERIES),
    Item("3", "Sugar", 55.20, is_favorite=True, category=Category.GROCERIES),
    Item("4", "Onions", 35.00, category=Category.VEGETABLES),
    Item("5", "Tomatoes", 40.00, category=Category.VEGETABLES),
    Item("6", "Potatoes", 25.00, category=Category.VEGETABLES),
)
