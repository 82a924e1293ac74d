# src/prompt/container.py
from dependency_injector import containers, providers
from .service import PromptAssembler

class PromptContainer(containers.DeclarativeContainer):
    """Prompt 모듈 DI Container"""

    # === 외부 의존성 ===
    knowledge_service = providers.Dependency()

    assembler = providers.Singleton(
        PromptAssembler,
        knowledge_service=knowledge_service
    )

def create_prompt_container() -> PromptContainer:
    return PromptContainer()
