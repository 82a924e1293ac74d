# src/chat_session/__init__.py
from .domains import ChatSession, ChatMessage
from .service import ChatSessionService
from .settings import ChatSessionSettings
from .container import create_chat_session_container

__all__ = [
    "ChatSession",
    "ChatMessage",
    "ChatSessionService",
    "ChatSessionSettings",
    "create_chat_session_container"
]
