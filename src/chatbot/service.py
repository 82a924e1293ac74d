# src/chatbot/service.py
import logging
from typing import Any, AsyncGenerator, Dict, List, Optional, Sequence, Tuple

from src.exceptions import InvalidRequestException, SessionNotFoundException
from src.chat_session.domains import ChatMessage
from src.chat_session.service import ChatSessionService
from src.knowledge.service import KnowledgeService
from src.llm.domains import GenerationConfig
from src.llm.service import LLMService
from src.prompt.service import PromptAssembler
from src.streaming.domains import RealStream, SimulatedStream, StreamEvent
from src.streaming.emitter import StreamEmitter
from .demo import DemoResponder
from .domains import ChatReply, RagAnswer, NO_RELEVANT_INFORMATION
from .settings import ChatbotSettings

logger = logging.getLogger(__name__)

class ChatbotService:
    """채팅 요청 파이프라인 - 세션, 프롬프트 조립, LLM 호출, 응답 전달 조율"""

    def __init__(
        self,
        chat_session_service: ChatSessionService,
        prompt_assembler: PromptAssembler,
        knowledge_service: KnowledgeService,
        llm_service: LLMService,
        settings: ChatbotSettings,
        demo_responder: Optional[DemoResponder] = None
    ):
        self._session_service = chat_session_service
        self._assembler = prompt_assembler
        self._knowledge_service = knowledge_service
        self._llm_service = llm_service
        self._settings = settings
        self._demo = demo_responder or DemoResponder()

    # === 일괄 응답 ===
    async def chat(
        self,
        conversation_id: str,
        message: Optional[str],
        chat_history: Optional[Sequence[ChatMessage]] = None,
        generation_config: Optional[GenerationConfig] = None,
        rag_enabled: Optional[bool] = None
    ) -> ChatReply:
        """메시지 하나에 대한 전체 응답 생성"""
        text, history = await self._open_turn(conversation_id, message, chat_history)
        use_rag = self._use_rag(rag_enabled)

        prompt = self._assembler.assemble(text, history, rag_enabled=use_rag)
        answer, fallback = await self._generate_text(text, prompt, generation_config)

        reply_message = ChatMessage.model(answer)
        await self._session_service.append_messages(conversation_id, reply_message)

        return ChatReply(
            message_id=reply_message.message_id,
            text=answer,
            conversation_id=conversation_id,
            metadata={
                "model": self._llm_service.model_name,
                "rag_enabled": use_rag,
                "fallback": fallback,
                "demo_mode": self._llm_service.demo_mode,
            },
        )

    # === 스트리밍 응답 ===
    async def stream_chat(
        self,
        conversation_id: str,
        message: Optional[str],
        chat_history: Optional[Sequence[ChatMessage]] = None,
        generation_config: Optional[GenerationConfig] = None,
        rag_enabled: Optional[bool] = None
    ) -> AsyncGenerator[StreamEvent, None]:
        """스트리밍 준비 - 검증과 사용자 메시지 저장은 즉시 수행하고 이벤트 제너레이터 반환"""
        text, history = await self._open_turn(conversation_id, message, chat_history)
        prompt = self._assembler.assemble(text, history, rag_enabled=self._use_rag(rag_enabled))

        emitter = await self._create_emitter(text, prompt, generation_config)
        logger.info(f"Starting {emitter.mode} stream - session_id: {conversation_id}")
        return self._relay(conversation_id, emitter)

    async def _relay(
        self,
        conversation_id: str,
        emitter: StreamEmitter
    ) -> AsyncGenerator[StreamEvent, None]:
        """이벤트 전달 - 오류 없는 최종 이벤트가 나온 경우에만 모델 응답을 이력에 저장"""
        async with emitter:
            async for event in emitter.events():
                if event.is_final and not event.error:
                    await self._commit_reply(conversation_id, event.content)
                yield event

        logger.info(
            f"Stream finished - session_id: {conversation_id}, events: {emitter.produced}, "
            f"fell_back: {emitter.fell_back}, cancelled: {emitter.cancelled}"
        )

    async def _commit_reply(self, conversation_id: str, text: str):
        """모델 응답 저장 - 스트리밍 중 세션이 종료/만료되었으면 저장 생략"""
        try:
            await self._session_service.append_messages(conversation_id, ChatMessage.model(text))
        except SessionNotFoundException:
            logger.warning(f"Session ended before stream completed, reply not stored - session_id: {conversation_id}")

    # === 지식 베이스 질의 ===
    async def answer_from_knowledge(
        self,
        query: str,
        generation_config: Optional[GenerationConfig] = None
    ) -> RagAnswer:
        """지식 베이스 검색 결과로 답변 - 결과가 없으면 명시적 안내 문구"""
        if not query or not query.strip():
            raise InvalidRequestException("query is required")
        if not self._settings.RAG_ENABLED:
            raise InvalidRequestException("RAG is disabled")

        query = query.strip()
        results = self._knowledge_service.search(query)
        if not results:
            logger.info("Knowledge lookup returned no results")
            return RagAnswer(answer=NO_RELEVANT_INFORMATION)

        if self._llm_service.demo_mode:
            return RagAnswer(answer=results[0].content, sources=results)

        prompt = self._assembler.assemble_grounded(query, results)
        answer, _ = await self._generate_text(query, prompt, generation_config)
        return RagAnswer(answer=answer, sources=results)

    # === 클라이언트 설정 ===
    def get_client_config(self) -> Dict[str, Any]:
        """UI 기능 플래그"""
        return {
            "streaming": self._settings.ENABLE_STREAMING,
            "rag_enabled": self._settings.RAG_ENABLED,
            "markdown": self._settings.ENABLE_MARKDOWN,
            "file_upload": self._settings.ENABLE_FILE_UPLOAD,
            "model": self._llm_service.model_name,
            "demo_mode": self._llm_service.demo_mode,
        }

    # === 내부 Helper 메서드들 ===
    async def _open_turn(
        self,
        conversation_id: str,
        message: Optional[str],
        chat_history: Optional[Sequence[ChatMessage]]
    ) -> Tuple[str, List[ChatMessage]]:
        """세션 확보 후 사용자 메시지 저장 - 저장 전 이력 반환"""
        if not conversation_id or not conversation_id.strip():
            raise InvalidRequestException("conversation id is required")

        text, seed = self._resolve_message(message, chat_history)
        await self._session_service.get_or_create_session(conversation_id, seed_history=seed)
        history = await self._session_service.get_history(conversation_id)
        await self._session_service.append_messages(conversation_id, ChatMessage.user(text))
        return text, history

    def _resolve_message(
        self,
        message: Optional[str],
        chat_history: Optional[Sequence[ChatMessage]]
    ) -> Tuple[str, List[ChatMessage]]:
        """입력 검증 - 메시지가 없으면 이력의 마지막 사용자 턴 사용"""
        history = list(chat_history or [])
        text = (message or "").strip()

        if history and history[-1].role == "user":
            last = history[-1].text.strip()
            if not text or last == text:
                text = text or last
                history.pop()

        if not text:
            raise InvalidRequestException("contents are required")

        if len(text) > self._settings.MAX_MESSAGE_LENGTH:
            raise InvalidRequestException(
                f"message cannot exceed {self._settings.MAX_MESSAGE_LENGTH} characters"
            )
        return text, history

    def _use_rag(self, requested: Optional[bool]) -> bool:
        return self._settings.RAG_ENABLED and (requested is None or requested)

    async def _generate_text(
        self,
        message: str,
        prompt: str,
        config: Optional[GenerationConfig]
    ) -> Tuple[str, bool]:
        if self._llm_service.demo_mode:
            return self._demo.respond(message), False
        result = await self._llm_service.generate(prompt, config)
        return result.text, result.fallback

    async def _create_emitter(
        self,
        message: str,
        prompt: str,
        config: Optional[GenerationConfig]
    ) -> StreamEmitter:
        """설정에 따라 실제 스트림 또는 시뮬레이션 선택"""
        if self._settings.ENABLE_STREAMING and not self._llm_service.demo_mode:
            source = RealStream(
                upstream=self._llm_service.stream(prompt, config),
                fallback_text=lambda: self._demo.respond(message),
            )
        else:
            text, _ = await self._generate_text(message, prompt, config)
            source = SimulatedStream(text)
        return StreamEmitter(source, interval=self._settings.STREAM_CHUNK_INTERVAL)
