# src/llm/service.py
import logging
from collections import OrderedDict
from typing import Any, AsyncIterator, Dict, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from src.exceptions import ConfigurationException, UpstreamException
from .domains import GenerationConfig, LLMResult
from .settings import LLMSettings

logger = logging.getLogger(__name__)

# 생성 설정별 모델 캐시 상한 (LRU)
MAX_CACHED_MODELS = 8

EMPTY_RESPONSE_MESSAGE = "I was unable to generate a response."
UPSTREAM_FAILURE_MESSAGE = (
    "Sorry, I couldn't reach the Gemini API right now. Please try again in a moment."
)

class LLMService:
    """LLM 호출 게이트웨이 - 프롬프트를 받아 전체 텍스트 또는 토큰 스트림 반환"""

    def __init__(self, settings: LLMSettings, chat_model: Optional[BaseChatModel] = None):
        self._settings = settings
        # 주입된 모델이 있으면 생성 설정과 무관하게 그대로 사용
        self._chat_model = chat_model
        self._models_cache: "OrderedDict[tuple, BaseChatModel]" = OrderedDict()
        logger.info(
            f"LLM service initialised: {settings.LLM_PROVIDER}/{settings.LLM_MODEL} "
            f"(demo_mode={settings.demo_mode})"
        )

    @property
    def model_name(self) -> str:
        return self._settings.LLM_MODEL

    @property
    def demo_mode(self) -> bool:
        return self._settings.demo_mode

    def resolve_config(self, config: Optional[GenerationConfig] = None) -> GenerationConfig:
        return config or self._settings.default_generation_config()

    async def generate(
        self,
        prompt: str,
        config: Optional[GenerationConfig] = None,
        surface_errors: bool = False
    ) -> LLMResult:
        """LLM 응답 생성 (비스트리밍) - 실패 시 기본적으로 대체 문구 반환"""
        model = self._get_model(self.resolve_config(config))
        try:
            response = await model.ainvoke([HumanMessage(content=prompt)])
            text = self._content_text(getattr(response, "content", None))
        except Exception as e:
            error = UpstreamException(f"Failed to communicate with the model API: {e}")
            if surface_errors:
                raise error from e
            logger.error(f"LLM generation failed: {e}", exc_info=True)
            return LLMResult(text=UPSTREAM_FAILURE_MESSAGE, model=self.model_name, fallback=True)

        if not text.strip():
            logger.warning("Empty or filtered response from model")
            return LLMResult(text=EMPTY_RESPONSE_MESSAGE, model=self.model_name, fallback=True)

        return LLMResult(
            text=text,
            model=self.model_name,
            usage=getattr(response, "usage_metadata", None),
        )

    async def stream(
        self,
        prompt: str,
        config: Optional[GenerationConfig] = None
    ) -> AsyncIterator[str]:
        """실시간 토큰 스트리밍 - 누적 텍스트 스냅샷을 순서대로 반환"""
        model = self._get_model(self.resolve_config(config))
        text = ""
        try:
            async for chunk in model.astream([HumanMessage(content=prompt)]):
                piece = self._content_text(getattr(chunk, "content", None))
                if not piece:
                    continue
                text += piece
                yield text
        except Exception as e:
            logger.warning(f"LLM streaming failed after {len(text)} chars: {e}")
            raise UpstreamException(f"Model stream interrupted: {e}") from e

    def get_model_info(self) -> Dict[str, Any]:
        """모델 정보 반환"""
        config = self.resolve_config()
        return {
            "provider": self._settings.LLM_PROVIDER,
            "model_name": self.model_name,
            "demo_mode": self.demo_mode,
            "api_key_configured": self._settings.has_credential,
            "max_tokens": config.max_tokens,
            "temperature": config.temperature,
        }

    # === 내부 Helper 메서드들 ===
    def _get_model(self, config: GenerationConfig) -> BaseChatModel:
        if self._chat_model is not None:
            return self._chat_model

        key = config.cache_key()
        model = self._models_cache.get(key)
        if model is not None:
            self._models_cache.move_to_end(key)
            return model

        model = self._create_model(config)
        self._models_cache[key] = model
        if len(self._models_cache) > MAX_CACHED_MODELS:
            evicted_key, _ = self._models_cache.popitem(last=False)
            logger.debug(f"Chat model evicted from cache: {evicted_key}")
        return model

    def _create_model(self, config: GenerationConfig) -> BaseChatModel:
        """벤더별 LangChain 채팅 모델 생성"""
        if self.demo_mode:
            raise ConfigurationException("Remote model is disabled in demo mode")
        if not self._settings.has_credential:
            raise ConfigurationException("Model API credential is missing")

        if self._settings.LLM_PROVIDER == "google":
            kwargs = {
                "model": self._settings.LLM_MODEL,
                "google_api_key": self._settings.api_key,
                "temperature": config.temperature,
                "max_tokens": config.max_tokens,
                "timeout": self._settings.LLM_REQUEST_TIMEOUT,
                "max_retries": self._settings.LLM_MAX_RETRIES,
            }
            if config.top_p is not None:
                kwargs["top_p"] = config.top_p
            if config.top_k is not None:
                kwargs["top_k"] = config.top_k
            model = ChatGoogleGenerativeAI(**kwargs)
        else:
            kwargs = {
                "model": self._settings.LLM_MODEL,
                "openai_api_key": self._settings.api_key,
                "temperature": config.temperature,
                "max_tokens": config.max_tokens,
                "timeout": self._settings.LLM_REQUEST_TIMEOUT,
                "max_retries": self._settings.LLM_MAX_RETRIES,
            }
            # OpenAI는 top_k를 지원하지 않음
            if config.top_p is not None:
                kwargs["top_p"] = config.top_p
            model = ChatOpenAI(**kwargs)

        logger.info(f"Chat model created: {self._settings.LLM_PROVIDER}/{self._settings.LLM_MODEL} {config.cache_key()}")
        return model

    @staticmethod
    def _content_text(content) -> str:
        """메시지 content에서 텍스트 추출 (문자열 또는 파트 리스트)"""
        if content is None:
            return ""
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            parts = []
            for part in content:
                if isinstance(part, str):
                    parts.append(part)
                elif isinstance(part, dict) and part.get("type", "text") == "text":
                    parts.append(part.get("text", ""))
            return "".join(parts)
        raise UpstreamException(f"Malformed model response content: {type(content).__name__}")
