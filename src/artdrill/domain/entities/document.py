"""Document snapshot entity."""

from dataclasses import dataclass
from typing import Any

from artdrill.domain.value_objects import DocumentReference


@dataclass
class DocumentSnapshot:
    """Document read from the store. ``data`` is None when it does not exist."""

    reference: DocumentReference
    data: dict[str, Any] | None

    @property
    def id(self) -> str:
        return self.reference.id

    @property
    def exists(self) -> bool:
        return self.data is not None

    def to_dict(self, id_key: str = "id") -> dict[str, Any]:
        """Flatten to a JSON object with the document id under ``id_key``."""
        return {id_key: self.id, **(self.data or {})}
