"""OpenAI-compatible chat provider."""

from openai import AsyncOpenAI, OpenAIError

from artdrill.application.dto.chat_dto import ChatMessage
from artdrill.domain.exceptions import ChatUnavailable

# stored role -> chat completions role
_ROLES = {"user": "user", "model": "assistant"}


class OpenAIChatProvider:
    """Chat provider using an OpenAI-compatible chat completions API.

    The default endpoint is Gemini's OpenAI-compatible surface, so stored
    ``model`` turns are sent as ``assistant``.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        max_output_tokens: int = 200,
    ) -> None:
        self._client = AsyncOpenAI(base_url=base_url, api_key=api_key)
        self._model = model
        self._max_output_tokens = max_output_tokens

    async def reply(self, history: list[ChatMessage], prompt: str) -> str:
        """Generate the model's reply to ``prompt`` given the prior turns."""
        messages = [{"role": _ROLES[m.role], "content": m.text} for m in history]
        messages.append({"role": "user", "content": prompt})
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                max_tokens=self._max_output_tokens,
            )
        except OpenAIError as e:
            raise ChatUnavailable(f"Chat completion failed: {e}") from e
        if not response.choices:
            raise ChatUnavailable("Chat completion returned no choices")
        return response.choices[0].message.content or ""
