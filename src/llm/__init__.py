# src/llm/__init__.py
from .domains import GenerationConfig, LLMResult
from .service import LLMService
from .settings import LLMSettings
from .container import create_llm_container

__all__ = ["GenerationConfig", "LLMResult", "LLMService", "LLMSettings", "create_llm_container"]
