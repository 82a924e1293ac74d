# src/chat_session/repository.py
import asyncio
from typing import Dict, List, Optional
from .domains import ChatSession

class ChatSessionRepository:
    """채팅 세션 저장소 (메모리 기반) - 세션별 락 포함"""

    def __init__(self):
        self._sessions: Dict[str, ChatSession] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    # === Session 관리 ===
    def save_session(self, session: ChatSession) -> None:
        """세션 저장"""
        self._sessions[session.session_id] = session
        if session.session_id not in self._locks:
            self._locks[session.session_id] = asyncio.Lock()

    def find_session_by_id(self, session_id: str) -> Optional[ChatSession]:
        """ID로 세션 조회"""
        return self._sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        """세션 삭제 (락도 함께 삭제)"""
        if session_id in self._sessions:
            del self._sessions[session_id]
            self._locks.pop(session_id, None)
            return True
        return False

    def find_all_sessions(self) -> List[ChatSession]:
        """모든 세션 조회"""
        return list(self._sessions.values())

    def count(self) -> int:
        return len(self._sessions)

    # === 동시성 제어 ===
    def lock_for(self, session_id: str) -> asyncio.Lock:
        """세션별 락 조회"""
        lock = self._locks.get(session_id)
        if lock is None:
            lock = self._locks[session_id] = asyncio.Lock()
        return lock
