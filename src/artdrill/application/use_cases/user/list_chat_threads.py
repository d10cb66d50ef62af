"""List chat threads use case."""

from artdrill.application.dto.chat_dto import ChatThreadSummary
from artdrill.application.ports import DocumentStore
from artdrill.domain.value_objects import DocumentReference, UserRecordKind

_TITLE_MAX = 50


def thread_title(prompt_thread: list | None) -> str:
    """First message text, shortened for display."""
    first = ""
    if prompt_thread and isinstance(prompt_thread[0], dict):
        parts = prompt_thread[0].get("parts") or []
        if parts and isinstance(parts[0], dict):
            first = parts[0].get("text") or ""
    if not first:
        return "New Chat"
    return first[: _TITLE_MAX - 3] + "..." if len(first) > _TITLE_MAX else first


class ListChatThreadsUseCase:
    """List a user's prompt threads, newest first."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def execute(self, user_id: str) -> list[ChatThreadSummary]:
        threads = DocumentReference(("users", user_id)).collection(UserRecordKind.PROMPTS.value)
        snapshots = await self._store.list(threads, order_by="timeCreated", descending=True)
        return [
            ChatThreadSummary(
                id=s.id,
                title=thread_title((s.data or {}).get("promptThread")),
                time_created=(s.data or {}).get("timeCreated"),
            )
            for s in snapshots
        ]
