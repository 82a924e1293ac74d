# src/knowledge/container.py
from dependency_injector import containers, providers
from .repository import KnowledgeRepository
from .service import KnowledgeService

class KnowledgeContainer(containers.DeclarativeContainer):
    """Knowledge 모듈 DI Container"""

    # === Repository 계층 (외부 노출 금지) ===
    repository = providers.Singleton(KnowledgeRepository)

    # === Service 계층 ===
    service = providers.Singleton(
        KnowledgeService,
        repository=repository
    )

def create_knowledge_container() -> KnowledgeContainer:
    """Knowledge Container 생성"""
    return KnowledgeContainer()
