"""Challenge difficulty levels."""

from enum import StrEnum


class DifficultyLevel(StrEnum):
    """Difficulty level - also the document id of its gallery."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
