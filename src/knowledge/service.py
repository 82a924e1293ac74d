# src/knowledge/service.py
import logging
from typing import List, Optional

from .domains import KnowledgeEntry, RetrievalResult, MAX_RESULTS
from .repository import KnowledgeRepository

logger = logging.getLogger(__name__)

class KnowledgeService:
    """지식 베이스 검색 서비스 - 키워드/토픽 관련도 기반 (임베딩 검색 아님)"""

    def __init__(self, repository: KnowledgeRepository, max_results: int = MAX_RESULTS):
        self._repository = repository
        self._max_results = max_results

    def search(self, query: str) -> List[RetrievalResult]:
        """관련도 내림차순 상위 결과 반환 - 일치 항목이 없으면 빈 리스트"""
        if not query or not query.strip():
            return []

        results = []
        for entry in self._repository.find_all():
            relevance = entry.score(query)
            if relevance == 0:
                continue
            results.append(RetrievalResult(
                topic=entry.topic,
                content=entry.content,
                relevance=relevance,
            ))

        # sorted는 안정 정렬 - 동점이면 원래 삽입 순서 유지
        ranked = sorted(results, key=lambda r: r.relevance, reverse=True)[:self._max_results]
        logger.debug(f"Knowledge search matched {len(results)} entries, returning {len(ranked)}")
        return ranked

    def list_topics(self) -> List[str]:
        """토픽 목록"""
        return [entry.topic for entry in self._repository.find_all()]

    def get_entry(self, topic: str) -> Optional[KnowledgeEntry]:
        """토픽 항목 조회"""
        return self._repository.find_by_topic(topic)
