"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from artdrill.application.ports import ChatProvider, DocumentStore
from artdrill.application.use_cases.challenge.add_challenge_item import AddChallengeItemUseCase
from artdrill.application.use_cases.purge.delete_document_tree import DeleteDocumentTreeUseCase
from artdrill.application.use_cases.purge.purge_collection import (
    DEFAULT_BATCH_SIZE,
    PurgeCollectionUseCase,
)
from artdrill.application.use_cases.user.clear_user_record import ClearUserRecordUseCase
from artdrill.application.use_cases.user.list_chat_threads import ListChatThreadsUseCase
from artdrill.application.use_cases.user.send_chat_message import SendChatMessageUseCase
from artdrill.application.use_cases.user.update_user_record import UpdateUserRecordUseCase
from artdrill.interfaces.api.errors import register_error_handlers
from artdrill.interfaces.api.middleware.auth import AuthMiddleware
from artdrill.interfaces.api.middleware.cors import CORSMiddleware
from artdrill.interfaces.api.middleware.store_lifespan import StoreLifespanMiddleware
from artdrill.interfaces.api.resources.auth import MeResource, ValidationResource
from artdrill.interfaces.api.resources.badges import BadgeResource, BadgesResource
from artdrill.interfaces.api.resources.challenges import (
    ChallengeItemResource,
    ChallengeItemsResource,
    ChallengeResource,
    ChallengesResource,
)
from artdrill.interfaces.api.resources.chats import ChatMessagesResource, ChatsResource
from artdrill.interfaces.api.resources.difficulty import DifficultyLevelResource, DifficultyResource
from artdrill.interfaces.api.resources.health import HealthResource
from artdrill.interfaces.api.resources.modules import (
    ModuleItemResource,
    ModuleItemsResource,
    ModuleResource,
    ModulesResource,
)
from artdrill.interfaces.api.resources.users import UserRecordResource, UserResource


def create_app(
    store: DocumentStore,
    chat_provider: ChatProvider,
    *,
    keycloak_provider=None,
    cors_origins: list[str] | None = None,
    purge_batch_size: int = DEFAULT_BATCH_SIZE,
    chat_model: str = "default_model",
) -> App:
    """Create Falcon ASGI app with routes, middleware and error handlers."""
    purge = PurgeCollectionUseCase(store, batch_size=purge_batch_size)
    delete_tree = DeleteDocumentTreeUseCase(store, purge)
    send_message = SendChatMessageUseCase(store, chat_provider, chat_model)

    app = falcon.asgi.App(
        middleware=[
            CORSMiddleware(cors_origins or []),
            StoreLifespanMiddleware(store),
            AuthMiddleware(keycloak_provider),
        ],
    )
    register_error_handlers(app)

    health = HealthResource(store)
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")

    app.add_route("/v1/badges", BadgesResource(store))
    app.add_route("/v1/badges/{badge_id}", BadgeResource(store, delete_tree))

    app.add_route("/v1/challenges", ChallengesResource(store))
    app.add_route("/v1/challenges/{category_id}", ChallengeResource(store, delete_tree))
    app.add_route(
        "/v1/challenges/{category_id}/items",
        ChallengeItemsResource(store, AddChallengeItemUseCase(store)),
    )
    app.add_route(
        "/v1/challenges/{category_id}/items/{item_id}",
        ChallengeItemResource(store, delete_tree),
    )
    app.add_route(
        "/v1/challenges/{category_id}/items/{item_id}/difficulty",
        DifficultyResource(store),
    )
    app.add_route(
        "/v1/challenges/{category_id}/items/{item_id}/difficulty/{level}",
        DifficultyLevelResource(store, delete_tree),
    )

    app.add_route("/v1/modules", ModulesResource(store))
    app.add_route("/v1/modules/{module_id}", ModuleResource(store, delete_tree))
    app.add_route("/v1/modules/{module_id}/items", ModuleItemsResource(store))
    app.add_route("/v1/modules/{module_id}/items/{item_id}", ModuleItemResource(store, delete_tree))

    app.add_route("/v1/users/{user_id}", UserResource(store, delete_tree))
    app.add_route(
        "/v1/users/{user_id}/chats",
        ChatsResource(ListChatThreadsUseCase(store), send_message),
    )
    app.add_route(
        "/v1/users/{user_id}/chats/{thread_id}/messages",
        ChatMessagesResource(send_message),
    )
    app.add_route(
        "/v1/users/{user_id}/{kind}",
        UserRecordResource(
            store,
            UpdateUserRecordUseCase(store),
            ClearUserRecordUseCase(store),
        ),
    )

    app.add_route("/v1/validation", ValidationResource())
    app.add_route("/v1/me", MeResource(store))
    return app
