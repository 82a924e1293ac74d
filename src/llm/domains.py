# src/llm/domains.py
from dataclasses import dataclass
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

class GenerationConfig(BaseModel):
    """모델 생성 파라미터"""
    model_config = ConfigDict(frozen=True)

    max_tokens: int = Field(default=2048, gt=0)
    temperature: float = Field(default=0.7, ge=0.0, le=1.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    top_k: Optional[int] = Field(default=None, gt=0)

    def cache_key(self) -> tuple:
        return (self.max_tokens, self.temperature, self.top_p, self.top_k)

@dataclass
class LLMResult:
    """LLM 응답 데이터"""
    text: str
    model: str
    fallback: bool = False
    usage: Optional[Dict[str, Any]] = None
