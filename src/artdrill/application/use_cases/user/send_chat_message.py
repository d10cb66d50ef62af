"""Send chat message use case."""

import logging
from datetime import UTC, datetime

from artdrill.application.dto.chat_dto import ChatMessage, ChatReply
from artdrill.application.ports import ChatProvider, DocumentStore
from artdrill.domain.exceptions import ChatUnavailable, NotFound, ValidationError
from artdrill.domain.value_objects import ArrayUnion, DocumentReference, UserRecordKind

logger = logging.getLogger(__name__)


class SendChatMessageUseCase:
    """Store a user prompt in a thread, ask the model, store its reply."""

    def __init__(
        self,
        store: DocumentStore,
        chat_provider: ChatProvider,
        model_name: str,
    ) -> None:
        self._store = store
        self._chat_provider = chat_provider
        self._model_name = model_name

    async def execute(self, user_id: str, prompt: str, thread_id: str | None = None) -> ChatReply:
        """Send ``prompt``; a new thread is started when ``thread_id`` is None."""
        prompt = prompt.strip() if isinstance(prompt, str) else ""
        if not prompt:
            raise ValidationError("prompt is required")

        threads = DocumentReference(("users", user_id)).collection(UserRecordKind.PROMPTS.value)
        user_message = ChatMessage(role="user", text=prompt)

        if thread_id is None:
            history: list[ChatMessage] = []
            ref = await self._store.add(
                threads,
                {
                    "aiModel": self._model_name,
                    "isActive": True,
                    "promptThread": [user_message.to_dict()],
                    "timeCreated": datetime.now(UTC).isoformat(),
                },
            )
        else:
            ref = threads.document(thread_id)
            snapshot = await self._store.get(ref)
            if not snapshot.exists:
                raise NotFound("Chat thread", thread_id)
            history = [
                ChatMessage.from_dict(m)
                for m in (snapshot.data or {}).get("promptThread") or []
                if isinstance(m, dict)
            ]
            await self._store.update(ref, {"promptThread": ArrayUnion(user_message.to_dict())})

        try:
            text = await self._chat_provider.reply(history, prompt)
        except ChatUnavailable:
            raise
        except Exception as e:
            logger.warning("Chat provider failed for thread %s: %s", ref.id, e)
            raise ChatUnavailable("Failed to generate prompt") from e

        model_message = ChatMessage(role="model", text=text)
        await self._store.update(ref, {"promptThread": ArrayUnion(model_message.to_dict())})
        return ChatReply(thread_id=ref.id, message=model_message)
