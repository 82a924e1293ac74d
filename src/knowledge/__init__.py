# src/knowledge/__init__.py
from .domains import KnowledgeEntry, RetrievalResult
from .service import KnowledgeService
from .container import create_knowledge_container

__all__ = [
    "KnowledgeEntry",
    "RetrievalResult",
    "KnowledgeService",
    "create_knowledge_container"
]
