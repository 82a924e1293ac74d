# src/chat_session/service.py
import asyncio
import contextlib
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from src.exceptions import SessionNotFoundException
from .domains import ChatSession, ChatMessage
from .repository import ChatSessionRepository
from .settings import ChatSessionSettings

logger = logging.getLogger(__name__)

class ChatSessionService:
    """채팅 세션 관리 서비스 - 생성, 이력 추가, 만료 정리 전담"""

    def __init__(self, repository: ChatSessionRepository, settings: ChatSessionSettings):
        self._repository = repository
        self._settings = settings
        self._registry_lock = asyncio.Lock()
        self._sweeper_task: Optional[asyncio.Task] = None

    # === 세션 생명주기 관리 ===
    async def get_or_create_session(
        self,
        session_id: str,
        seed_history: Optional[Sequence[ChatMessage]] = None
    ) -> ChatSession:
        """세션 조회 - 처음 보는 ID면 새로 생성 (클라이언트 이력으로 초기화 가능)"""
        async with self._registry_lock:
            session = self._repository.find_session_by_id(session_id)
            if session is None:
                session = ChatSession.new(session_id)
                if seed_history:
                    session.messages.extend(seed_history)
                self._repository.save_session(session)
                logger.info(f"New session started: {session_id} (seeded with {len(seed_history or [])} messages)")
            else:
                session.touch()
            return session

    async def get_session(self, session_id: str) -> ChatSession:
        """세션 조회"""
        session = self._repository.find_session_by_id(session_id)
        if not session:
            raise SessionNotFoundException(f"Session {session_id} not found")
        return session

    async def close_session(self, session_id: str) -> bool:
        """세션 종료 (저장소에서 제거)"""
        async with self._registry_lock:
            removed = self._repository.delete_session(session_id)
        if removed:
            logger.info(f"Session closed: {session_id}")
        return removed

    async def get_active_sessions(self) -> List[ChatSession]:
        """활성 세션 목록"""
        return self._repository.find_all_sessions()

    def count_sessions(self) -> int:
        return self._repository.count()

    # === 메시지 관리 ===
    async def append_messages(self, session_id: str, *messages: ChatMessage) -> ChatSession:
        """메시지 추가 - 같은 세션에 대한 추가 작업은 세션 락으로 직렬화"""
        session = await self.get_session(session_id)
        async with self._repository.lock_for(session_id):
            for message in messages:
                session.append(message)
        return session

    async def get_history(self, session_id: str) -> List[ChatMessage]:
        """세션의 메시지 목록 (복사본)"""
        session = await self.get_session(session_id)
        async with self._repository.lock_for(session_id):
            return list(session.messages)

    # === 만료 세션 정리 ===
    async def sweep_expired(self, now: Optional[datetime] = None) -> List[str]:
        """유휴 시간이 초과된 세션 제거"""
        now = now or datetime.now()
        async with self._registry_lock:
            expired = [
                session.session_id
                for session in self._repository.find_all_sessions()
                if session.is_expired(self._settings.SESSION_TIMEOUT_SECONDS, now)
            ]
            for session_id in expired:
                self._repository.delete_session(session_id)

        if expired:
            logger.info(f"Evicted {len(expired)} expired sessions")
        return expired

    def start_sweeper(self) -> asyncio.Task:
        """백그라운드 정리 작업 시작"""
        if self._sweeper_task is None or self._sweeper_task.done():
            self._sweeper_task = asyncio.create_task(self._sweep_loop())
            logger.info(
                f"Session sweeper started (timeout={self._settings.SESSION_TIMEOUT_SECONDS}s, "
                f"interval={self._settings.SESSION_SWEEP_INTERVAL_SECONDS}s)"
            )
        return self._sweeper_task

    async def stop_sweeper(self) -> None:
        """백그라운드 정리 작업 중단"""
        if self._sweeper_task is None:
            return
        self._sweeper_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._sweeper_task
        self._sweeper_task = None
        logger.info("Session sweeper stopped")

    async def _sweep_loop(self):
        while True:
            await asyncio.sleep(self._settings.SESSION_SWEEP_INTERVAL_SECONDS)
            try:
                await self.sweep_expired()
            except Exception as e:
                logger.error(f"Session sweep failed: {e}", exc_info=True)
