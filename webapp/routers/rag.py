# webapp/routers/rag.py
import logging

from fastapi import APIRouter, Depends

from webapp.dtos import RagRequest, RagResponse
from webapp.dependency import get_chatbot_service, get_llm_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post(
    "/rag",
    response_model=RagResponse,
    summary="지식 베이스 질의",
    description="Sayonara 지식 베이스를 검색하고 검색 결과에 근거한 답변을 반환합니다.",
)
async def query_knowledge(
    request: RagRequest,
    chatbot_service = Depends(get_chatbot_service),
    llm_service = Depends(get_llm_service)
) -> RagResponse:
    """지식 베이스 질의"""
    config = request.config.to_domain(llm_service.resolve_config()) if request.config else None
    answer = await chatbot_service.answer_from_knowledge(request.query, generation_config=config)
    logger.info(f"RAG query answered with {len(answer.sources)} sources")
    return RagResponse.from_domain(answer)
