# src/chat_session/domains.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
import uuid

MessageRole = Literal["user", "model"]

@dataclass(frozen=True)
class ChatMessage:
    """채팅 메시지 - 생성 후 불변"""
    role: MessageRole
    text: str
    timestamp: datetime = field(default_factory=datetime.now)
    message_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @staticmethod
    def user(text: str) -> "ChatMessage":
        return ChatMessage(role="user", text=text)

    @staticmethod
    def model(text: str) -> "ChatMessage":
        return ChatMessage(role="model", text=text)

    def to_content(self) -> Dict[str, Any]:
        """Gemini contents 형식으로 변환"""
        return {"role": self.role, "parts": [{"text": self.text}]}

@dataclass
class ChatSession:
    """대화 하나의 서버 측 기록 - 유휴 시간 초과 시 정리됨"""
    session_id: str
    created_at: datetime
    last_activity_at: datetime
    messages: List[ChatMessage] = field(default_factory=list)

    @staticmethod
    def new(session_id: Optional[str] = None) -> "ChatSession":
        """새 세션 생성"""
        now = datetime.now()
        return ChatSession(
            session_id=session_id or str(uuid.uuid4()),
            created_at=now,
            last_activity_at=now,
        )

    @property
    def message_count(self) -> int:
        return len(self.messages)

    def touch(self, now: Optional[datetime] = None):
        """마지막 활동 시간 갱신"""
        self.last_activity_at = now or datetime.now()

    def append(self, message: ChatMessage):
        """메시지 추가 - 호출자는 세션 락을 잡고 있어야 함"""
        self.messages.append(message)
        self.touch()

    def is_expired(self, timeout_seconds: float, now: Optional[datetime] = None) -> bool:
        """만료 여부"""
        now = now or datetime.now()
        return (now - self.last_activity_at).total_seconds() > timeout_seconds

    def to_info(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "created_at": self.created_at.isoformat(),
            "last_activity_at": self.last_activity_at.isoformat(),
            "message_count": self.message_count,
        }
