# webapp/routers/chat.py
import json
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Header, Path, Query
from fastapi.responses import StreamingResponse

from src.exceptions import SayonaraException
from src.streaming.domains import StreamEvent
from webapp.dtos import (
    ChatRequest,
    ChatResponse,
    SessionInfoDTO,
    SessionResponseDTO,
    ActiveSessionsDTO
)
from webapp.dependency import get_chatbot_service, get_chat_session_service, get_llm_service

logger = logging.getLogger(__name__)

router = APIRouter()

def resolve_session_key(*candidates: Optional[str]) -> str:
    """세션 키 결정 - 먼저 주어진 값 사용, 없으면 새 UUID"""
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return str(uuid.uuid4())

def _format_frame(frame: dict) -> str:
    return f"data: {json.dumps(frame, ensure_ascii=False)}\n\n"

@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="채팅 응답",
    description="대화 이력과 메시지를 받아 전체 응답을 한 번에 반환합니다.",
)
async def chat(
    request: ChatRequest,
    x_session_id: Optional[str] = Header(None),
    chatbot_service = Depends(get_chatbot_service),
    llm_service = Depends(get_llm_service)
) -> ChatResponse:
    """채팅 응답"""
    conversation_id = resolve_session_key(request.conversation_id, x_session_id)
    config = request.config.to_domain(llm_service.resolve_config()) if request.config else None
    rag_enabled = request.config.rag_enabled if request.config else None

    reply = await chatbot_service.chat(
        conversation_id,
        request.message,
        chat_history=request.history(),
        generation_config=config,
        rag_enabled=rag_enabled,
    )
    return ChatResponse.from_domain(reply)

@router.get(
    "/chat/stream",
    summary="채팅 스트리밍",
    description="사용자 메시지를 받아 Server-Sent Events로 응답을 스트리밍합니다.",
    responses={200: {"content": {"text/event-stream": {}}}},
)
async def chat_stream(
    message: str = Query("", description="사용자 메시지"),
    conversation_id: Optional[str] = Query(None, alias="conversationId"),
    session_id: Optional[str] = Query(None, alias="sessionId"),
    rag_enabled: Optional[bool] = Query(None, alias="ragEnabled"),
    x_session_id: Optional[str] = Header(None),
    chatbot_service = Depends(get_chatbot_service)
) -> StreamingResponse:
    """채팅 스트리밍"""
    key = resolve_session_key(conversation_id, x_session_id, session_id)
    events = await chatbot_service.stream_chat(key, message, rag_enabled=rag_enabled)

    async def event_generator():
        try:
            async for event in events:
                yield _format_frame(event.to_frame())
        except SayonaraException as e:
            logger.error(f"Streaming error - session_id: {key}: {e.message}")
            yield _format_frame(StreamEvent("", is_final=True, error=e.message).to_frame())
        finally:
            await events.aclose()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Session-Id": key,
        },
    )

@router.get(
    "/sessions",
    response_model=ActiveSessionsDTO,
    summary="활성 세션 목록"
)
async def get_active_sessions(
    chat_session_service = Depends(get_chat_session_service)
) -> ActiveSessionsDTO:
    """활성 세션 목록"""
    sessions = await chat_session_service.get_active_sessions()
    return ActiveSessionsDTO.from_domain(sessions)

@router.get(
    "/sessions/{session_id}",
    response_model=SessionInfoDTO,
    summary="세션 정보 조회"
)
async def get_session_info(
    session_id: str = Path(..., examples=["conv_123"]),
    chat_session_service = Depends(get_chat_session_service)
) -> SessionInfoDTO:
    """세션 정보 조회"""
    session = await chat_session_service.get_session(session_id)
    return SessionInfoDTO.from_domain(session)

@router.delete(
    "/sessions/{session_id}",
    response_model=SessionResponseDTO,
    summary="세션 종료"
)
async def close_session(
    session_id: str = Path(..., examples=["conv_123"]),
    chat_session_service = Depends(get_chat_session_service)
) -> SessionResponseDTO:
    """세션 종료"""
    # 없는 세션이면 SessionNotFoundException
    await chat_session_service.get_session(session_id)
    await chat_session_service.close_session(session_id)
    return SessionResponseDTO(message=f"Session {session_id} closed", session_id=session_id)
