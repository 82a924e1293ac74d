# tests/conftest.py
import pytest
import logging

from langchain_core.language_models.fake_chat_models import FakeListChatModel

# 현재 프로젝트 모듈들
from src.knowledge.repository import KnowledgeRepository
from src.knowledge.service import KnowledgeService
from src.prompt.service import PromptAssembler
from src.llm.service import LLMService
from src.llm.settings import LLMSettings
from src.chat_session.repository import ChatSessionRepository
from src.chat_session.service import ChatSessionService
from src.chat_session.settings import ChatSessionSettings
from src.chatbot.demo import DemoResponder
from src.chatbot.service import ChatbotService
from src.chatbot.settings import ChatbotSettings


@pytest.fixture(scope="session", autouse=True)
def initialize_test_logger():
    """테스트 로거 초기화"""
    logger = logging.getLogger()
    logger.setLevel("INFO")
    logger.propagate = False
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="[%(levelname)5s][%(filename)s:%(lineno)s] %(message)s",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def pytest_collection_modifyitems(items):
    """비동기 테스트에 session 스코프 마커 추가"""
    from pytest_asyncio import is_async_test

    pytest_asyncio_tests = (item for item in items if is_async_test(item))
    session_scope_marker = pytest.mark.asyncio(loop_scope="session")
    for async_test in pytest_asyncio_tests:
        async_test.add_marker(session_scope_marker, append=False)


# === Settings Fixtures ===
@pytest.fixture
def llm_settings():
    """실제 키가 설정된 LLM 설정 (모델은 fake로 주입)"""
    return LLMSettings(GEMINI_API_KEY="test-key", LLM_DEMO_MODE=False)


@pytest.fixture
def demo_llm_settings():
    """데모 모드 LLM 설정"""
    return LLMSettings(GEMINI_API_KEY="", OPENAI_API_KEY="", LLM_DEMO_MODE=True)


@pytest.fixture
def chatbot_settings():
    """테스트용 챗봇 설정 - 시뮬레이션 간격 0"""
    return ChatbotSettings(ENABLE_STREAMING=True, RAG_ENABLED=True, STREAM_CHUNK_INTERVAL=0)


@pytest.fixture
def session_settings():
    """세션 만료 설정"""
    return ChatSessionSettings(SESSION_TIMEOUT_SECONDS=1800, SESSION_SWEEP_INTERVAL_SECONDS=300)


# === Repository Fixtures ===
@pytest.fixture
def knowledge_repository():
    """Knowledge Repository"""
    return KnowledgeRepository()


@pytest.fixture
def chat_session_repository():
    """ChatSession Repository"""
    return ChatSessionRepository()


# === Fake 모델 ===
@pytest.fixture
def fake_chat_model():
    """고정 응답을 돌려주는 LangChain fake 채팅 모델"""
    return FakeListChatModel(responses=["Sayonara wipes drives securely."])


# === Service Fixtures ===
@pytest.fixture
def knowledge_service(knowledge_repository):
    """Knowledge Service"""
    return KnowledgeService(repository=knowledge_repository)


@pytest.fixture
def prompt_assembler(knowledge_service):
    """Prompt Assembler"""
    return PromptAssembler(knowledge_service=knowledge_service)


@pytest.fixture
def llm_service(llm_settings, fake_chat_model):
    """LLM Service (fake 모델 주입)"""
    return LLMService(settings=llm_settings, chat_model=fake_chat_model)


@pytest.fixture
def chat_session_service(chat_session_repository, session_settings):
    """ChatSession Service"""
    return ChatSessionService(repository=chat_session_repository, settings=session_settings)


@pytest.fixture
def chatbot_service(chat_session_service, prompt_assembler, knowledge_service, llm_service, chatbot_settings):
    """Chatbot Service"""
    return ChatbotService(
        chat_session_service=chat_session_service,
        prompt_assembler=prompt_assembler,
        knowledge_service=knowledge_service,
        llm_service=llm_service,
        settings=chatbot_settings,
        demo_responder=DemoResponder()
    )


@pytest.fixture
def demo_chatbot_service(chat_session_service, prompt_assembler, knowledge_service, demo_llm_settings, chatbot_settings):
    """데모 모드 Chatbot Service"""
    return ChatbotService(
        chat_session_service=chat_session_service,
        prompt_assembler=prompt_assembler,
        knowledge_service=knowledge_service,
        llm_service=LLMService(settings=demo_llm_settings),
        settings=chatbot_settings,
        demo_responder=DemoResponder()
    )


# === 테스트 데이터 ===
@pytest.fixture
def test_session_id():
    """테스트용 세션 ID"""
    return "test_session_123"


@pytest.fixture
def blockchain_query():
    """지식 베이스 샘플 질의"""
    return "What does blockchain verification provide?"


@pytest.fixture(autouse=True)
def test_info(request):
    """테스트 정보 출력"""
    logger = logging.getLogger()
    logger.info(f"테스트 시작: {request.node.name}")
    yield
    logger.info(f"테스트 완료: {request.node.name}")
