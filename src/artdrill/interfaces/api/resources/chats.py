"""Prompt chat API resources."""

import falcon.asgi

from artdrill.application.dto.chat_dto import ChatReply
from artdrill.application.use_cases.user.list_chat_threads import ListChatThreadsUseCase
from artdrill.application.use_cases.user.send_chat_message import SendChatMessageUseCase
from artdrill.domain.exceptions import InvalidReference, NotFound, ValidationError
from artdrill.interfaces.api.media import read_object


def _reply_to_dict(reply: ChatReply) -> dict:
    return {"thread_id": reply.thread_id, "message": reply.message.to_dict()}


class ChatsResource:
    """GET/POST /v1/users/{user_id}/chats - list threads, start a thread."""

    def __init__(
        self,
        list_threads: ListChatThreadsUseCase,
        send_message: SendChatMessageUseCase,
    ) -> None:
        self._list_threads = list_threads
        self._send_message = send_message

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        """List threads, newest first."""
        try:
            threads = await self._list_threads.execute(user_id)
        except InvalidReference as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = [
            {"id": t.id, "title": t.title, "timeCreated": t.time_created} for t in threads
        ]
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        """Start a thread with the first prompt; responds with the model's reply."""
        try:
            body = await read_object(req)
            reply = await self._send_message.execute(user_id, body.get("prompt"))
        except (InvalidReference, ValidationError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = _reply_to_dict(reply)
        resp.status = falcon.HTTP_201


class ChatMessagesResource:
    """POST /v1/users/{user_id}/chats/{thread_id}/messages - continue a thread."""

    def __init__(self, send_message: SendChatMessageUseCase) -> None:
        self._send_message = send_message

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
        thread_id: str,
    ) -> None:
        """Append a prompt to the thread and return the model's reply."""
        try:
            body = await read_object(req)
            reply = await self._send_message.execute(
                user_id, body.get("prompt"), thread_id=thread_id
            )
        except (InvalidReference, ValidationError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
            return

        resp.media = _reply_to_dict(reply)
        resp.status = falcon.HTTP_200
