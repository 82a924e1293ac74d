# src/knowledge/domains.py
from dataclasses import dataclass, field
from typing import FrozenSet

TOPIC_MATCH_BONUS = 5
MAX_RESULTS = 3

@dataclass(frozen=True)
class KnowledgeEntry:
    """지식 베이스 항목 (기동 시 로드, 읽기 전용)"""
    topic: str
    content: str
    keywords: FrozenSet[str] = field(default_factory=frozenset)

    def score(self, query: str) -> int:
        """질의 관련도 점수 - 키워드 부분 문자열 일치 수 + 토픽명 일치 보너스"""
        lowered = query.lower()
        matched = sum(1 for keyword in self.keywords if keyword in lowered)
        if self.topic.lower() in lowered:
            matched += TOPIC_MATCH_BONUS
        return matched

@dataclass(frozen=True)
class RetrievalResult:
    """검색 결과 (프롬프트 조립 후 폐기)"""
    topic: str
    content: str
    relevance: int
