# webapp/container.py
from typing import Optional

from dependency_injector import containers, providers
from langchain_core.language_models.chat_models import BaseChatModel

# 모듈별 Container import만
from src.knowledge.container import create_knowledge_container
from src.prompt.container import create_prompt_container
from src.llm.container import create_llm_container
from src.llm.settings import LLMSettings
from src.chat_session.container import create_chat_session_container
from src.chat_session.settings import ChatSessionSettings
from src.chatbot.container import create_chatbot_container
from src.chatbot.settings import ChatbotSettings


class SayonaraContainer(containers.DeclarativeContainer):
    """Sayonara 챗봇 애플리케이션 컨테이너"""

    # === Module Containers ===
    knowledge_container = providers.DependenciesContainer()
    prompt_container = providers.DependenciesContainer()
    llm_container = providers.DependenciesContainer()
    chat_session_container = providers.DependenciesContainer()
    chatbot_container = providers.DependenciesContainer()

    # === Service Layer ===
    llm_service = providers.Singleton(
        lambda container: container.service(),
        container=llm_container
    )

    llm_settings = providers.Singleton(
        lambda container: container.settings(),
        container=llm_container
    )

    chat_session_service = providers.Singleton(
        lambda container: container.service(),
        container=chat_session_container
    )

    chatbot_service = providers.Singleton(
        lambda container: container.service(),
        container=chatbot_container
    )

    chatbot_settings = providers.Singleton(
        lambda container: container.settings(),
        container=chatbot_container
    )

def create_container(
    llm_settings: Optional[LLMSettings] = None,
    chatbot_settings: Optional[ChatbotSettings] = None,
    session_settings: Optional[ChatSessionSettings] = None,
    chat_model: Optional[BaseChatModel] = None
) -> SayonaraContainer:
    """컨테이너 생성 및 초기화 - 설정/모델 override는 테스트와 실행 스크립트용"""
    container = SayonaraContainer()

    # 모듈별 Container 생성
    knowledge_container = create_knowledge_container()
    prompt_container = create_prompt_container()
    llm_container = create_llm_container()
    chat_session_container = create_chat_session_container()
    chatbot_container = create_chatbot_container()

    # 설정 override
    if llm_settings is not None:
        llm_container.settings.override(providers.Object(llm_settings))
    if chatbot_settings is not None:
        chatbot_container.settings.override(providers.Object(chatbot_settings))
    if session_settings is not None:
        chat_session_container.settings.override(providers.Object(session_settings))
    if chat_model is not None:
        llm_container.chat_model.override(providers.Object(chat_model))

    # Container 간 의존성 주입
    prompt_container.knowledge_service.override(knowledge_container.service)
    chatbot_container.chat_session_service.override(chat_session_container.service)
    chatbot_container.prompt_assembler.override(prompt_container.assembler)
    chatbot_container.knowledge_service.override(knowledge_container.service)
    chatbot_container.llm_service.override(llm_container.service)

    # Container 등록
    container.knowledge_container.override(knowledge_container)
    container.prompt_container.override(prompt_container)
    container.llm_container.override(llm_container)
    container.chat_session_container.override(chat_session_container)
    container.chatbot_container.override(chatbot_container)

    return container
