# tests/webapp/test_routers.py
import json
import pytest

from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from src.chatbot.demo import DEMO_RESPONSES
from src.chatbot.settings import ChatbotSettings
from src.exceptions import ConfigurationException
from src.llm.settings import LLMSettings
from webapp.container import create_container
from webapp.main import create_app


def _frames(body: str):
    """SSE 본문에서 data 프레임 추출"""
    return [
        json.loads(line[len("data:"):].strip())
        for line in body.splitlines()
        if line.startswith("data:")
    ]


@pytest.fixture
def demo_client():
    """데모 모드 앱 (원격 API 호출 없음)"""
    container = create_container(
        llm_settings=LLMSettings(GEMINI_API_KEY="", LLM_DEMO_MODE=True),
        chatbot_settings=ChatbotSettings(STREAM_CHUNK_INTERVAL=0),
    )
    with TestClient(create_app(container)) as client:
        yield client


@pytest.fixture
def model_client():
    """fake 모델을 주입한 앱"""
    container = create_container(
        llm_settings=LLMSettings(GEMINI_API_KEY="test-key", LLM_DEMO_MODE=False),
        chatbot_settings=ChatbotSettings(STREAM_CHUNK_INTERVAL=0),
        chat_model=FakeListChatModel(responses=["Certificates are anchored on Sepolia."]),
    )
    with TestClient(create_app(container)) as client:
        yield client


class TestStartup:
    """기동 시 자격 증명 정책 테스트"""

    def test_missing_credential_aborts_startup(self):
        container = create_container(llm_settings=LLMSettings(GEMINI_API_KEY="", LLM_DEMO_MODE=False))
        app = create_app(container)

        with pytest.raises(ConfigurationException):
            with TestClient(app):
                pass


class TestChatRouter:
    """채팅 API 테스트"""

    def test_chat_returns_model_reply(self, model_client: TestClient):
        # when
        response = model_client.post("/api/chat", json={
            "message": "What does blockchain verification provide?",
            "conversationId": "conv_1",
            "config": {"temperature": 0.3, "maxTokens": 512},
        })

        # then
        assert response.status_code == 200
        body = response.json()
        assert body["text"] == "Certificates are anchored on Sepolia."
        assert body["content"] == body["text"]
        assert body["done"] is True
        assert body["conversationId"] == "conv_1"
        assert body["messageId"]

    def test_chat_accepts_gemini_style_history(self, model_client: TestClient):
        response = model_client.post("/api/chat", json={
            "chatHistory": [
                {"role": "user", "parts": [{"text": "Hi"}]},
                {"role": "model", "parts": [{"text": "Hello!"}]},
                {"role": "user", "parts": [{"text": "What is Sayonara?"}]},
            ],
            "conversationId": "conv_history",
        })

        assert response.status_code == 200
        session = model_client.get("/api/sessions/conv_history").json()
        assert session["messageCount"] == 4

    def test_empty_contents_are_rejected(self, model_client: TestClient):
        response = model_client.post("/api/chat", json={"chatHistory": []})

        assert response.status_code == 400
        assert response.json()["error"] == "InvalidRequestException"
        assert response.json()["message"] == "contents are required"
        assert "trace_id" in response.json()

    def test_invalid_generation_config_is_422(self, model_client: TestClient):
        response = model_client.post("/api/chat", json={"message": "hi", "config": {"temperature": 5}})

        assert response.status_code == 422
        assert response.json()["error"] == "RequestValidationError"

    def test_session_header_is_used_without_conversation_id(self, demo_client: TestClient):
        response = demo_client.post("/api/chat", json={"message": "hello"}, headers={"X-Session-Id": "header_session"})

        assert response.json()["conversationId"] == "header_session"
        assert response.json()["text"] == DEMO_RESPONSES["default"]

    def test_generated_session_id_when_none_given(self, demo_client: TestClient):
        first = demo_client.post("/api/chat", json={"message": "hello"}).json()
        second = demo_client.post("/api/chat", json={"message": "hello"}).json()

        assert first["conversationId"] != second["conversationId"]


class TestStreamRouter:
    """SSE 스트리밍 API 테스트"""

    def test_stream_frames_end_with_done(self, demo_client: TestClient):
        # when
        response = demo_client.get("/api/chat/stream", params={
            "message": "Tell me about blockchain",
            "conversationId": "stream_1",
        })

        # then
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["x-session-id"] == "stream_1"
        frames = _frames(response.text)
        assert frames[0] == {"content": "Each", "done": False}
        assert frames[-1] == {"content": DEMO_RESPONSES["blockchain"], "done": True}
        assert sum(1 for f in frames if f["done"]) == 1

    def test_stream_commits_model_turn(self, model_client: TestClient):
        model_client.get("/api/chat/stream", params={"message": "hi", "sessionId": "stream_2"})

        session = model_client.get("/api/sessions/stream_2").json()
        assert session["messageCount"] == 2

    def test_stream_without_message_is_400(self, demo_client: TestClient):
        response = demo_client.get("/api/chat/stream", params={"conversationId": "stream_3"})

        assert response.status_code == 400


class TestRagRouter:
    """지식 베이스 API 테스트"""

    def test_rag_returns_sources(self, demo_client: TestClient):
        response = demo_client.post("/api/rag", json={"query": "What does blockchain verification provide?"})

        assert response.status_code == 200
        body = response.json()
        assert body["sources"] == [{"topic": "Blockchain Verification", "relevance": 6}]
        assert "Sepolia" in body["answer"]

    def test_rag_without_match(self, demo_client: TestClient):
        body = demo_client.post("/api/rag", json={"query": "zzz qqq"}).json()

        assert body["sources"] == []
        assert "No relevant information" in body["answer"]

    def test_rag_empty_query_is_400(self, demo_client: TestClient):
        assert demo_client.post("/api/rag", json={"query": " "}).status_code == 400


class TestSystemRouter:
    """상태/설정/세션 API 테스트"""

    def test_health(self, demo_client: TestClient):
        body = demo_client.get("/health").json()

        assert body["status"] == "ok"
        assert body["demoMode"] is True
        assert body["apiKeyConfigured"] is False
        assert body["model"] == "gemini-2.5-flash"

    def test_client_config(self, demo_client: TestClient):
        body = demo_client.get("/api/config").json()

        assert body["streaming"] is True
        assert body["ragEnabled"] is True
        assert body["fileUpload"] is False

    def test_session_lifecycle(self, demo_client: TestClient):
        # given
        demo_client.post("/api/chat", json={"message": "hello", "conversationId": "life_1"})

        # when
        listed = demo_client.get("/api/sessions").json()
        deleted = demo_client.delete("/api/sessions/life_1")

        # then
        assert listed["totalCount"] == 1
        assert listed["sessions"][0]["sessionId"] == "life_1"
        assert deleted.status_code == 200
        assert demo_client.get("/api/sessions/life_1").status_code == 404
        assert demo_client.delete("/api/sessions/life_1").status_code == 404
