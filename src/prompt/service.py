# src/prompt/service.py
import logging
from typing import List, Optional, Sequence

from src.chat_session.domains import ChatMessage
from src.knowledge.domains import RetrievalResult
from src.knowledge.service import KnowledgeService
from .templates import (
    PERSONA_INSTRUCTION,
    KNOWLEDGE_HEADER,
    KNOWLEDGE_INSTRUCTION,
    HISTORY_HEADER,
    QUESTION_LABEL,
    ROLE_LABELS,
)

logger = logging.getLogger(__name__)

class PromptAssembler:
    """페르소나 + 검색 지식 + 대화 이력 + 사용자 메시지를 하나의 프롬프트로 조립"""

    def __init__(self, knowledge_service: KnowledgeService, persona: str = PERSONA_INSTRUCTION):
        self._knowledge_service = knowledge_service
        self._persona = persona

    @property
    def persona(self) -> str:
        return self._persona

    def assemble(
        self,
        user_message: str,
        history: Optional[Sequence[ChatMessage]] = None,
        rag_enabled: bool = False
    ) -> str:
        """최종 프롬프트 텍스트 생성"""
        results: List[RetrievalResult] = []
        if rag_enabled:
            results = self._knowledge_service.search(user_message)
            logger.debug(f"RAG lookup returned {len(results)} results")
        return self._compose(user_message, history or [], results)

    def assemble_grounded(self, query: str, results: Sequence[RetrievalResult]) -> str:
        """이미 검색된 결과로 프롬프트 조립 - RAG 응답용, 재검색하지 않음"""
        return self._compose(query, [], results)

    def _compose(
        self,
        user_message: str,
        history: Sequence[ChatMessage],
        results: Sequence[RetrievalResult]
    ) -> str:
        sections = [self._persona]

        if history:
            sections.append(self._format_history(history))

        if results:
            sections.append(self._format_knowledge(results))
            sections.append(KNOWLEDGE_INSTRUCTION)
            sections.append(f"{QUESTION_LABEL} {user_message}")
        else:
            sections.append(user_message)

        return "\n\n".join(sections)

    def _format_history(self, history: Sequence[ChatMessage]) -> str:
        lines = [HISTORY_HEADER]
        for message in history:
            label = ROLE_LABELS.get(message.role, message.role)
            lines.append(f"{label}: {message.text}")
        return "\n".join(lines)

    def _format_knowledge(self, results: Sequence[RetrievalResult]) -> str:
        blocks = [KNOWLEDGE_HEADER]
        for result in results:
            blocks.append(f"[{result.topic}]\n{result.content}")
        return "\n\n".join(blocks)
