# src/chatbot/__init__.py
from .domains import ChatReply, RagAnswer
from .service import ChatbotService
from .settings import ChatbotSettings
from .container import create_chatbot_container

__all__ = [
    "ChatReply",
    "RagAnswer",
    "ChatbotService",
    "ChatbotSettings",
    "create_chatbot_container"
]
