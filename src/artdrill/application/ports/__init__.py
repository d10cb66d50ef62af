"""Application ports - interfaces for external adapters."""

from artdrill.application.ports.chat_provider import ChatProvider
from artdrill.application.ports.document_store import DocumentStore, WriteBatch

__all__ = [
    "ChatProvider",
    "DocumentStore",
    "WriteBatch",
]
