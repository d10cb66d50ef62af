"""Chat DTOs."""

from dataclasses import dataclass
from typing import Any, Literal

from artdrill.domain.exceptions import ValidationError

ChatRole = Literal["user", "model"]


@dataclass(frozen=True)
class ChatMessage:
    """One conversation turn, stored as ``{role, parts: [{text}]}``."""

    role: ChatRole
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "parts": [{"text": self.text}]}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ChatMessage":
        role = raw.get("role")
        if role not in ("user", "model"):
            raise ValidationError(f"Invalid chat role: {role!r}")
        parts = raw.get("parts") or []
        text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
        return cls(role=role, text=text)


@dataclass
class ChatReply:
    """Result of sending a prompt."""

    thread_id: str
    message: ChatMessage


@dataclass
class ChatThreadSummary:
    """Thread listing entry."""

    id: str
    title: str
    time_created: str | None
