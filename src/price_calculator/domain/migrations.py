"""Normalization of stored item records to the current schema."""

import math
from collections.abc import Mapping

from price_calculator.domain.items import parse_category

_REQUIRED_FIELDS = ("id", "name", "pricePerKg")


class InvalidRecordError(ValueError):
    """Raised when a stored record cannot be turned into an item."""


def migrate_item_record(raw: Mapping[str, object]) -> dict[str, object]:
    """Return ``raw`` in the current item shape.

    Fields added after the first schema get their defaults: ``isFavorite``
    becomes ``False`` and ``category`` becomes ``"other"`` when missing or
    unrecognized. ``lastUsed`` stays absent when it was never set, so a
    never-used item is distinguishable from one used at epoch 0. A
    ``lastUsed`` that is not a finite number is treated as never set.
    Unknown keys are dropped. Migrating a current record returns an equal record.
    """
    missing = [name for name in _REQUIRED_FIELDS if raw.get(name) is None]
    if missing:
        raise InvalidRecordError(f"Item record missing {', '.join(missing)}")

    is_favorite = raw.get("isFavorite")
    record: dict[str, object] = {
        "id": raw["id"],
        "name": raw["name"],
        "pricePerKg": raw["pricePerKg"],
        "isFavorite": is_favorite if isinstance(is_favorite, bool) else False,
        "category": parse_category(raw.get("category")).value,
    }
    last_used = raw.get("lastUsed")
    if _is_timestamp(last_used):
        record["lastUsed"] = last_used
    return record


def _is_timestamp(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)
