# src/llm/settings.py
from typing import Literal, Optional
from pydantic import Field
from pydantic_settings import BaseSettings

from src.exceptions import ConfigurationException
from .domains import GenerationConfig

PLACEHOLDER_API_KEYS = {"YOUR_GEMINI_API_KEY_HERE", "YOUR_OPENAI_API_KEY_HERE"}

class LLMSettings(BaseSettings):
    """LLM 관련 설정 - 중앙화된 설정 관리"""

    # === 벤더 설정 ===
    LLM_PROVIDER: Literal["google", "openai"] = "google"
    LLM_MODEL: str = "gemini-2.5-flash"

    # === API 키 ===
    GEMINI_API_KEY: str = ""
    OPENAI_API_KEY: str = ""

    # === 키 누락 정책: False면 기동 실패, True면 원격 API를 호출하지 않는 데모 모드 ===
    LLM_DEMO_MODE: bool = False

    # === 기본 생성 파라미터 ===
    DEFAULT_MAX_TOKENS: int = Field(default=2048, gt=0)
    DEFAULT_TEMPERATURE: float = Field(default=0.7, ge=0.0, le=1.0)
    DEFAULT_TOP_P: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    DEFAULT_TOP_K: Optional[int] = Field(default=None, gt=0)

    # === 런타임 옵션 ===
    LLM_REQUEST_TIMEOUT: float = Field(default=60.0, gt=0)
    LLM_MAX_RETRIES: int = Field(default=2, ge=0)

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # 추가 필드 무시 (오류 방지)

    @property
    def api_key(self) -> str:
        """현재 벤더의 API 키 (플레이스홀더는 빈 값으로 취급)"""
        key = self.GEMINI_API_KEY if self.LLM_PROVIDER == "google" else self.OPENAI_API_KEY
        key = (key or "").strip()
        return "" if key in PLACEHOLDER_API_KEYS else key

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    @property
    def demo_mode(self) -> bool:
        return self.LLM_DEMO_MODE

    def validate_credentials(self) -> None:
        """기동 시 자격 증명 확인 - 데모 모드가 아니면 키 누락은 치명적"""
        if self.demo_mode or self.has_credential:
            return
        key_name = "GEMINI_API_KEY" if self.LLM_PROVIDER == "google" else "OPENAI_API_KEY"
        raise ConfigurationException(
            f"{key_name} is not set. Configure the key or enable LLM_DEMO_MODE explicitly."
        )

    def default_generation_config(self) -> GenerationConfig:
        return GenerationConfig(
            max_tokens=self.DEFAULT_MAX_TOKENS,
            temperature=self.DEFAULT_TEMPERATURE,
            top_p=self.DEFAULT_TOP_P,
            top_k=self.DEFAULT_TOP_K,
        )
