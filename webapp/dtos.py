# webapp/dtos.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.chat_session.domains import ChatMessage, ChatSession
from src.chatbot.domains import ChatReply, RagAnswer
from src.llm.domains import GenerationConfig

class CamelModel(BaseModel):
    """FastAPI의 모든 Request, Response 모델에 CamelCase를 적용"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# ===== 채팅 관련 DTO =====
class GenerationConfigDTO(CamelModel):
    """클라이언트 생성 설정"""
    model: Optional[str] = Field(None, description="요청 모델 (서버 설정이 우선)", examples=["gemini-2.5-flash"])
    max_tokens: Optional[int] = Field(None, gt=0, examples=[2048])
    temperature: Optional[float] = Field(None, ge=0.0, le=1.0, examples=[0.7])
    top_p: Optional[float] = Field(None, ge=0.0, le=1.0)
    top_k: Optional[int] = Field(None, gt=0)
    rag_enabled: Optional[bool] = Field(None, description="지식 베이스 사용 여부")

    def to_domain(self, defaults: GenerationConfig) -> GenerationConfig:
        """지정하지 않은 값은 서버 기본값 사용"""
        values = self.model_dump(include={"max_tokens", "temperature", "top_p", "top_k"}, exclude_none=True)
        return defaults.model_copy(update=values)

class HistoryPartDTO(BaseModel):
    text: str = ""

class HistoryItemDTO(CamelModel):
    """대화 이력 항목 - Gemini content 형식 또는 단순 text/content 형식"""
    role: str = Field(description="user 또는 model", examples=["user"])
    parts: Optional[List[HistoryPartDTO]] = None
    text: Optional[str] = None
    content: Optional[str] = None

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        role = v.strip().lower()
        if role == "assistant":
            return "model"
        if role not in ("user", "model"):
            raise ValueError("role must be 'user' or 'model'")
        return role

    def joined_text(self) -> str:
        if self.parts:
            return "".join(part.text for part in self.parts)
        return self.text or self.content or ""

    def to_domain(self) -> ChatMessage:
        if self.role == "user":
            return ChatMessage.user(self.joined_text())
        return ChatMessage.model(self.joined_text())

class ChatRequest(CamelModel):
    """채팅 요청 DTO"""
    message: Optional[str] = Field(None, description="사용자 메시지", examples=["What does blockchain verification provide?"])
    chat_history: List[HistoryItemDTO] = Field(default_factory=list, description="클라이언트 측 대화 이력")
    conversation_id: Optional[str] = Field(None, description="대화 ID", examples=["conv_123"])
    config: Optional[GenerationConfigDTO] = None

    def history(self) -> List[ChatMessage]:
        return [item.to_domain() for item in self.chat_history]

class ChatResponse(CamelModel):
    """채팅 응답 DTO"""
    message_id: str
    text: str
    content: str
    done: bool = True
    conversation_id: str
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @staticmethod
    def from_domain(reply: ChatReply) -> "ChatResponse":
        return ChatResponse(
            message_id=reply.message_id,
            text=reply.text,
            content=reply.text,
            conversation_id=reply.conversation_id,
            metadata=reply.metadata,
        )

# ===== RAG 관련 DTO =====
class RagRequest(CamelModel):
    """지식 베이스 질의 DTO"""
    query: str = Field(description="질문", examples=["What does blockchain verification provide?"])
    config: Optional[GenerationConfigDTO] = None

class RagSourceDTO(CamelModel):
    topic: str
    relevance: int = Field(ge=0)

class RagResponse(CamelModel):
    """지식 베이스 응답 DTO"""
    answer: str
    sources: List[RagSourceDTO] = Field(default_factory=list)

    @staticmethod
    def from_domain(answer: RagAnswer) -> "RagResponse":
        return RagResponse(
            answer=answer.answer,
            sources=[RagSourceDTO(topic=s.topic, relevance=s.relevance) for s in answer.sources],
        )

# ===== 시스템 관련 DTO =====
class HealthResponse(CamelModel):
    status: str = "ok"
    model: str
    demo_mode: bool
    api_key_configured: bool
    streaming: bool
    rag_enabled: bool
    active_sessions: int = Field(ge=0)

class ClientConfigDTO(CamelModel):
    """UI 기능 플래그"""
    streaming: bool
    rag_enabled: bool
    markdown: bool
    file_upload: bool
    model: str
    demo_mode: bool

# ===== 세션 관련 DTO =====
class SessionInfoDTO(CamelModel):
    """세션 정보 DTO"""
    session_id: str = Field(description="세션 ID", examples=["conv_123"])
    created_at: str = Field(description="생성 시간", examples=["2024-01-01T00:00:00"])
    last_activity_at: str = Field(description="마지막 활동 시간", examples=["2024-01-01T01:00:00"])
    message_count: int = Field(description="메시지 수", examples=[5], ge=0)

    @staticmethod
    def from_domain(session: ChatSession) -> "SessionInfoDTO":
        return SessionInfoDTO(**session.to_info())

class SessionResponseDTO(CamelModel):
    """세션 응답 DTO"""
    message: str = Field(description="응답 메시지", examples=["Session closed"])
    session_id: Optional[str] = Field(None, description="세션 ID")

class ActiveSessionsDTO(CamelModel):
    """활성 세션 목록 DTO"""
    sessions: List[SessionInfoDTO] = Field(default_factory=list)
    total_count: int = Field(ge=0)

    @staticmethod
    def from_domain(sessions: List[ChatSession]) -> "ActiveSessionsDTO":
        return ActiveSessionsDTO(
            sessions=[SessionInfoDTO.from_domain(s) for s in sessions],
            total_count=len(sessions),
        )
