# tests/knowledge/test_knowledge.py
import pytest

from src.knowledge.domains import KnowledgeEntry, TOPIC_MATCH_BONUS
from src.knowledge.repository import KnowledgeRepository
from src.knowledge.service import KnowledgeService


class TestKnowledgeEntry:
    """KnowledgeEntry 관련도 계산 테스트"""

    def test_score_counts_keywords_and_topic_bonus(self):
        # given
        entry = KnowledgeEntry(topic="Alpha", content="...", keywords=frozenset({"foo", "bar"}))

        # when
        score = entry.score("FOO and bar about alpha")

        # then
        assert score == 2 + TOPIC_MATCH_BONUS

    def test_score_is_zero_without_match(self):
        entry = KnowledgeEntry(topic="Alpha", content="...", keywords=frozenset({"foo"}))
        assert entry.score("nothing here") == 0


class TestKnowledgeService:
    """KnowledgeService 검색 테스트"""

    def test_blockchain_query_returns_single_ranked_result(self, knowledge_service: KnowledgeService, blockchain_query):
        # when
        results = knowledge_service.search(blockchain_query)

        # then
        assert [r.topic for r in results] == ["Blockchain Verification"]
        assert results[0].relevance == 6
        assert "Sepolia" in results[0].content

    def test_empty_query_returns_nothing(self, knowledge_service: KnowledgeService):
        assert knowledge_service.search("") == []
        assert knowledge_service.search("   ") == []

    def test_unrelated_query_returns_nothing(self, knowledge_service: KnowledgeService):
        assert knowledge_service.search("zzz qqq") == []

    def test_results_are_sorted_and_limited(self):
        # given
        repository = KnowledgeRepository(entries=[
            KnowledgeEntry(topic="One", content="1", keywords=frozenset({"a1"})),
            KnowledgeEntry(topic="Two", content="2", keywords=frozenset({"a1", "b2"})),
            KnowledgeEntry(topic="Three", content="3", keywords=frozenset({"a1", "b2", "c3"})),
            KnowledgeEntry(topic="Four", content="4", keywords=frozenset({"a1", "b2"})),
        ])
        service = KnowledgeService(repository=repository)

        # when
        results = service.search("a1 b2 c3")

        # then
        assert len(results) == 3
        assert [r.relevance for r in results] == [3, 2, 2]
        # 동점은 삽입 순서 유지
        assert [r.topic for r in results] == ["Three", "Two", "Four"]

    def test_list_topics_and_get_entry(self, knowledge_service: KnowledgeService):
        topics = knowledge_service.list_topics()

        assert topics[0] == "Secure Data Wiping"
        assert "RAG System" in topics
        assert knowledge_service.get_entry("RAG System").topic == "RAG System"
        assert knowledge_service.get_entry("missing") is None

    @pytest.mark.parametrize("query, topic", [
        ("How does SSD erasure work?", "Secure Data Wiping"),
        ("Tell me about the CSR dashboard", "CSR Dashboard"),
        ("what is the resale value", "Resale Valuation"),
    ])
    def test_top_result_by_topic(self, knowledge_service: KnowledgeService, query, topic):
        results = knowledge_service.search(query)
        assert results[0].topic == topic
