# src/streaming/domains.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator, Callable, Dict, Optional, Union

DEFAULT_CHUNK_INTERVAL = 0.1

class StreamState(str, Enum):
    """스트림 상태"""
    IDLE = "idle"
    STREAMING = "streaming"
    DONE = "done"

@dataclass(frozen=True)
class StreamEvent:
    """부분 응답 이벤트 - 요청 수명 동안만 존재"""
    content: str
    is_final: bool = False
    error: Optional[str] = None

    def to_frame(self) -> Dict[str, Any]:
        """SSE 프레임 데이터"""
        frame = {"content": self.content, "done": self.is_final}
        if self.error:
            frame["error"] = self.error
        return frame

@dataclass(frozen=True)
class RealStream:
    """업스트림 토큰 스트림 전달 모드

    upstream은 누적 텍스트 스냅샷을 순서대로 내보내야 함.
    업스트림 오류 시 fallback_text로 시뮬레이션 재생.
    """
    upstream: AsyncIterator[str]
    fallback_text: Callable[[], str]

@dataclass(frozen=True)
class SimulatedStream:
    """완성된 응답을 단어 단위로 나눠 재생하는 모드"""
    text: str

StreamSource = Union[RealStream, SimulatedStream]
