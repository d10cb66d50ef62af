"""Application entry point and composition root."""

import logging

from falcon.asgi import App

from artdrill import __version__
from artdrill.config import Settings, get_settings
from artdrill.infrastructure.auth.keycloak_provider import KeycloakProvider
from artdrill.infrastructure.chat.openai_provider import OpenAIChatProvider
from artdrill.interfaces.api.app import create_app
from artdrill.interfaces.api.middleware.cors import parse_origins
from artdrill.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entry point."""
    print(f"ArtDrill v{__version__}")


def create_document_store(settings: Settings):
    """Document store for the configured backend (not yet opened)."""
    if settings.document_backend == "firestore":
        from google.cloud import firestore

        from artdrill.infrastructure.persistence.firestore.document_store import (
            FirestoreDocumentStore,
        )

        return FirestoreDocumentStore(firestore.AsyncClient(project=settings.firestore_project))

    from artdrill.infrastructure.persistence.postgres.connection import create_pool
    from artdrill.infrastructure.persistence.postgres.document_store import (
        PostgresDocumentStore,
    )

    return PostgresDocumentStore(create_pool(settings.database_url))


def create_artdrill_app() -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    setup_logging(settings.log_level, debug=settings.debug)

    store = create_document_store(settings)
    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("KEYCLOAK_CLIENT_SECRET not set; bearer tokens will be rejected")

    chat_provider = OpenAIChatProvider(
        base_url=settings.chat_api_url,
        api_key=settings.chat_api_key,
        model=settings.chat_model,
        max_output_tokens=settings.chat_max_output_tokens,
    )

    logger.info(
        "Starting ArtDrill v%s (%s, %s backend)",
        __version__,
        settings.environment,
        settings.document_backend,
    )
    return create_app(
        store,
        chat_provider,
        keycloak_provider=keycloak,
        cors_origins=parse_origins(settings.cors_origins),
        purge_batch_size=settings.purge_batch_size,
        chat_model=settings.chat_model,
    )


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    uvicorn.run(create_artdrill_app(), host="0.0.0.0", port=8000)
