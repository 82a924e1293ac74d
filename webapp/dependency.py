# webapp/dependency.py
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from webapp.container import SayonaraContainer

# === 핵심 서비스 의존성만 ===
@inject
def get_chatbot_service(
    service = Depends(Provide[SayonaraContainer.chatbot_service])
):
    """챗봇 서비스 의존성"""
    return service

@inject
def get_chat_session_service(
    service = Depends(Provide[SayonaraContainer.chat_session_service])
):
    """채팅 세션 서비스 의존성"""
    return service

@inject
def get_llm_service(
    service = Depends(Provide[SayonaraContainer.llm_service])
):
    """LLM 서비스 의존성"""
    return service
