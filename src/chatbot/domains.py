# src/chatbot/domains.py
from dataclasses import dataclass, field
from typing import Any, Dict, List

from src.knowledge.domains import RetrievalResult

NO_RELEVANT_INFORMATION = (
    "No relevant information was found in the Sayonara knowledge base for this question."
)

@dataclass
class ChatReply:
    """일괄 응답 결과"""
    message_id: str
    text: str
    conversation_id: str
    metadata: Dict[str, Any] = field(default_factory=dict)

@dataclass
class RagAnswer:
    """지식 베이스 질의 결과 - 검색 결과가 없으면 sources가 비어 있음"""
    answer: str
    sources: List[RetrievalResult] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.sources)
