"""Append-if-absent list update."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ArrayUnion:
    """Field update that appends values not already present in a list."""

    values: tuple[Any, ...]

    def __init__(self, *values: Any) -> None:
        object.__setattr__(self, "values", tuple(values))

    def apply(self, current: Any) -> list[Any]:
        """Merge into the current field value (missing or non-list counts as empty)."""
        merged = list(current) if isinstance(current, list) else []
        for value in self.values:
            if value not in merged:
                merged.append(value)
        return merged


def apply_field_updates(data: dict[str, Any], fields: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``data`` with top-level ``fields`` written over it."""
    merged = dict(data)
    for key, value in fields.items():
        if isinstance(value, ArrayUnion):
            merged[key] = value.apply(merged.get(key))
        else:
            merged[key] = value
    return merged
