# src/chatbot/container.py
from dependency_injector import containers, providers
from .demo import DemoResponder
from .service import ChatbotService
from .settings import ChatbotSettings

class ChatbotContainer(containers.DeclarativeContainer):
    """Chatbot 모듈 DI Container"""

    # === 외부 의존성 ===
    chat_session_service = providers.Dependency()
    prompt_assembler = providers.Dependency()
    knowledge_service = providers.Dependency()
    llm_service = providers.Dependency()

    # === Settings ===
    settings = providers.Singleton(ChatbotSettings)

    demo_responder = providers.Singleton(DemoResponder)

    # === Service 계층 ===
    service = providers.Singleton(
        ChatbotService,
        chat_session_service=chat_session_service,
        prompt_assembler=prompt_assembler,
        knowledge_service=knowledge_service,
        llm_service=llm_service,
        settings=settings,
        demo_responder=demo_responder
    )

def create_chatbot_container() -> ChatbotContainer:
    """Chatbot Container 생성"""
    return ChatbotContainer()
