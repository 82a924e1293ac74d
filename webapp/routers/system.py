# webapp/routers/system.py
from fastapi import APIRouter, Depends

from webapp.dtos import ClientConfigDTO, HealthResponse
from webapp.dependency import get_chatbot_service, get_chat_session_service, get_llm_service

router = APIRouter()

@router.get("/health", response_model=HealthResponse, summary="상태 확인")
async def health(
    chatbot_service = Depends(get_chatbot_service),
    chat_session_service = Depends(get_chat_session_service),
    llm_service = Depends(get_llm_service)
) -> HealthResponse:
    """서버 상태 및 API 키/데모 모드/기능 설정 여부"""
    info = llm_service.get_model_info()
    flags = chatbot_service.get_client_config()
    return HealthResponse(
        model=info["model_name"],
        demo_mode=info["demo_mode"],
        api_key_configured=info["api_key_configured"],
        streaming=flags["streaming"],
        rag_enabled=flags["rag_enabled"],
        active_sessions=chat_session_service.count_sessions(),
    )

@router.get("/api/config", response_model=ClientConfigDTO, summary="클라이언트 설정")
async def client_config(
    chatbot_service = Depends(get_chatbot_service)
) -> ClientConfigDTO:
    """UI 기능 플래그"""
    return ClientConfigDTO(**chatbot_service.get_client_config())
