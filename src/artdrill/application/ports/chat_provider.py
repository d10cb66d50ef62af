"""Chat provider port - OpenAI compatible API."""

from typing import Protocol

from artdrill.application.dto.chat_dto import ChatMessage


class ChatProvider(Protocol):
    """Port for generating the next model turn of a conversation."""

    async def reply(self, history: list[ChatMessage], prompt: str) -> str: ...
