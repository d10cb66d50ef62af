"""Domain exceptions."""


class ArtDrillError(Exception):
    """Base exception for ArtDrill."""

    pass


class NotFound(ArtDrillError):
    """Requested resource was not found."""

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class AlreadyExists(ArtDrillError):
    """Document with the requested id already exists."""

    pass


class ValidationError(ArtDrillError):
    """Validation failed for input data."""

    pass


class InvalidReference(ArtDrillError):
    """Collection or document path is malformed or not accessible."""

    pass


class StoreUnavailable(ArtDrillError):
    """Document store read or commit could not complete."""

    pass


class PurgeCancelled(ArtDrillError):
    """Purge stopped by the caller before the collection was empty."""

    pass


class ChatUnavailable(ArtDrillError):
    """Chat provider failed to produce a reply."""

    pass
