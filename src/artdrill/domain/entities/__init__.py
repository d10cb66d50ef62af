"""Domain entities."""

from artdrill.domain.entities.document import DocumentSnapshot

__all__ = [
    "DocumentSnapshot",
]
