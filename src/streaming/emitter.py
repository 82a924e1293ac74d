# src/streaming/emitter.py
import asyncio
import contextlib
import logging
from typing import AsyncGenerator, Optional

from .domains import (
    DEFAULT_CHUNK_INTERVAL,
    RealStream,
    SimulatedStream,
    StreamEvent,
    StreamSource,
    StreamState,
)

logger = logging.getLogger(__name__)

class StreamEmitter:
    """응답 텍스트를 순서가 보장된 StreamEvent 시퀀스로 전달

    IDLE -> STREAMING -> DONE. 이벤트 생성은 별도 Task에서 실행되며
    aclose()는 완료, 클라이언트 연결 종료, 오류 등 모든 종료 경로에서
    Task를 취소하고 업스트림을 닫는다.
    """

    def __init__(self, source: StreamSource, interval: float = DEFAULT_CHUNK_INTERVAL):
        self._source = source
        self._interval = interval
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=1)
        self._task: Optional[asyncio.Task] = None
        self._final_sent = False
        self._last_content = ""

        self.state = StreamState.IDLE
        self.mode = "real" if isinstance(source, RealStream) else "simulated"
        self.fell_back = False
        self.cancelled = False
        self.error: Optional[str] = None
        self.produced = 0

    # === 수명 관리 ===
    def start(self) -> asyncio.Task:
        """이벤트 생성 시작"""
        if self.state is not StreamState.IDLE:
            raise RuntimeError(f"Stream already {self.state.value}")
        self.state = StreamState.STREAMING
        self._task = asyncio.create_task(self._produce())
        return self._task

    async def aclose(self) -> None:
        """생성 중단 및 리소스 해제 - 여러 번 호출해도 안전"""
        if self._task is not None and not self._task.done():
            self.cancelled = True
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            logger.info(f"Stream cancelled after {self.produced} events")
        elif self._task is None and isinstance(self._source, RealStream):
            # 시작 전에 닫힌 경우에도 업스트림 정리
            await self._close_upstream(self._source)
        self.state = StreamState.DONE

    async def __aenter__(self) -> "StreamEmitter":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    # === 소비자 인터페이스 ===
    async def events(self) -> AsyncGenerator[StreamEvent, None]:
        """이벤트 순회 - 최종 이벤트 이후에는 아무것도 내보내지 않음"""
        if self.state is StreamState.IDLE:
            self.start()
        try:
            while True:
                event = await self._queue.get()
                yield event
                if event.is_final:
                    break
        finally:
            await self.aclose()

    def __aiter__(self):
        return self.events()

    # === 생성자 (Task 내부) ===
    async def _produce(self):
        try:
            if isinstance(self._source, RealStream):
                await self._pass_through(self._source)
            else:
                await self._simulate(self._source.text)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Stream production failed: {e}", exc_info=True)
            self.error = str(e)
            if not self._final_sent:
                await self._emit(StreamEvent(self._last_content, is_final=True, error=self.error))
        finally:
            self.state = StreamState.DONE

    async def _pass_through(self, source: RealStream):
        """업스트림 부분 이벤트를 그대로 전달, 오류 시 시뮬레이션 모드로 전환"""
        failure: Optional[BaseException] = None
        received = 0
        try:
            async for partial in source.upstream:
                await self._emit(StreamEvent(partial))
                received += 1
        except asyncio.CancelledError:
            raise
        except Exception as e:
            failure = e
        finally:
            await self._close_upstream(source)

        if failure is None and received == 0:
            failure = RuntimeError("upstream produced no content")

        if failure is not None:
            logger.warning(f"Upstream stream failed, falling back to simulated playback: {failure}")
            self.fell_back = True
            self.mode = "simulated"
            await self._simulate(source.fallback_text())
            return

        await self._emit(StreamEvent(self._last_content, is_final=True))

    async def _simulate(self, text: str):
        """단어 단위 누적 재생 - n개 단어면 부분 이벤트 n개 + 최종 이벤트 1개"""
        words = text.split()
        for index in range(1, len(words) + 1):
            await asyncio.sleep(self._interval)
            await self._emit(StreamEvent(" ".join(words[:index])))
        await asyncio.sleep(self._interval)
        await self._emit(StreamEvent(text, is_final=True))

    async def _emit(self, event: StreamEvent):
        if self._final_sent:
            raise RuntimeError("Stream already finished")
        await self._queue.put(event)
        self.produced += 1
        self._last_content = event.content
        if event.is_final:
            self._final_sent = True

    @staticmethod
    async def _close_upstream(source: RealStream):
        close = getattr(source.upstream, "aclose", None)
        if close is None:
            return
        try:
            await close()
        except Exception as e:
            logger.debug(f"Upstream close raised: {e}")
