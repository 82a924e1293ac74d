# src/chatbot/settings.py
from pydantic import Field
from pydantic_settings import BaseSettings

class ChatbotSettings(BaseSettings):
    """챗봇 기능 토글 및 전달 설정"""

    # === 기능 토글 ===
    ENABLE_STREAMING: bool = Field(default=True, description="실제 토큰 스트리밍 사용 (False면 단어 단위 시뮬레이션)")
    RAG_ENABLED: bool = Field(default=True, description="지식 베이스 검색 사용")
    ENABLE_MARKDOWN: bool = Field(default=True, description="UI 마크다운 렌더링")
    ENABLE_FILE_UPLOAD: bool = Field(default=False, description="UI 파일 업로드")
    DEBUG: bool = Field(default=False, description="디버그 로깅")

    # === 전달 설정 ===
    STREAM_CHUNK_INTERVAL: float = Field(default=0.1, ge=0.0, description="시뮬레이션 스트리밍 단어 간격 (초)")
    MAX_MESSAGE_LENGTH: int = Field(default=4000, gt=0)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"
