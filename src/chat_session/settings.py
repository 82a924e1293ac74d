# src/chat_session/settings.py
from pydantic import Field
from pydantic_settings import BaseSettings

class ChatSessionSettings(BaseSettings):
    """세션 만료 정책 설정"""

    SESSION_TIMEOUT_SECONDS: float = Field(default=1800, gt=0, description="유휴 세션 만료 시간 (30분)")
    SESSION_SWEEP_INTERVAL_SECONDS: float = Field(default=300, gt=0, description="만료 세션 정리 주기 (5분)")

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"
