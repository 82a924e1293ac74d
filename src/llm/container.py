# src/llm/container.py
from dependency_injector import containers, providers
from .service import LLMService
from .settings import LLMSettings

class LLMContainer(containers.DeclarativeContainer):
    """LLM 모듈 DI Container"""

    # === Settings ===
    settings = providers.Singleton(LLMSettings)

    # === 테스트 등에서 채팅 모델을 직접 주입할 때 override ===
    chat_model = providers.Object(None)

    # === Main Service ===
    service = providers.Singleton(
        LLMService,
        settings=settings,
        chat_model=chat_model
    )

def create_llm_container() -> LLMContainer:
    return LLMContainer()
