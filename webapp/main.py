# webapp/main.py
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from webapp.routers import chat, rag, system
from webapp.container import SayonaraContainer, create_container
from src.exceptions import (
    ClientException,
    NotFoundException,
    ServerException,
)

logger = logging.getLogger(__name__)

def _setup_logging(debug: bool):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

def _setup_lifespan(container: SayonaraContainer):
    """애플리케이션 생명주기 설정 - API 키 검증, 세션 정리 작업 시작/중단"""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Setting up Sayonara Assistant application")
        # 데모 모드가 아니면 API 키 없이 기동 불가
        container.llm_settings().validate_credentials()
        chat_session_service = container.chat_session_service()
        chat_session_service.start_sweeper()
        yield
        await chat_session_service.stop_sweeper()
        logger.info("Tearing down Sayonara Assistant application")
    return lifespan

def _create_fastapi_app(lifespan_manager) -> FastAPI:
    """FastAPI 앱 인스턴스 생성"""
    return FastAPI(
        title="Sayonara Assistant API",
        description="Chat backend for the Sayonara assistant with streaming and knowledge-base grounding.",
        version="1.0.0",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        lifespan=lifespan_manager,
        generate_unique_id_function=lambda route: route.name,
    )

def _setup_container_and_wiring(container: Optional[SayonaraContainer] = None) -> SayonaraContainer:
    """DI 컨테이너 설정 및 와이어링"""
    container = container or create_container()
    container.wire(modules=["webapp.dependency"])
    return container

def _error_response(status_code: int, exc: Exception, message) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.__class__.__name__,
            "message": message,
            "trace_id": str(uuid.uuid4())[:8],
        },
    )

def _validation_errors(exc: RequestValidationError):
    """검증 오류 목록에서 직렬화 불가능한 ctx 제거"""
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]

def create_app(container: Optional[SayonaraContainer] = None) -> FastAPI:
    """애플리케이션 생성 및 설정"""
    # 컨테이너 설정
    container = _setup_container_and_wiring(container)
    _setup_logging(container.chatbot_settings().DEBUG)

    # 생명주기 관리자 설정
    lifespan_manager = _setup_lifespan(container)

    # FastAPI 앱 생성
    app = _create_fastapi_app(lifespan_manager)
    app.container = container

    # 라우터 등록
    app.include_router(chat.router, prefix="/api", tags=["chat"])
    app.include_router(rag.router, prefix="/api", tags=["rag"])
    app.include_router(system.router, tags=["system"])

    # 미들웨어
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Session-Id"],
    )

    # 예외 처리기들
    @app.exception_handler(NotFoundException)
    async def not_found_exception_handler(request: Request, exc: NotFoundException):
        logger.warning(f"Not found: {exc.message}")
        return _error_response(404, exc, exc.message)

    @app.exception_handler(ClientException)
    async def client_exception_handler(request: Request, exc: ClientException):
        logger.warning(f"Client exception: {exc.message}")
        return _error_response(400, exc, exc.message)

    @app.exception_handler(ServerException)
    async def server_exception_handler(request: Request, exc: ServerException):
        logger.error(f"Server exception: {exc.message}", exc_info=True)
        return _error_response(500, exc, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error: {exc.errors()}")
        return _error_response(422, exc, _validation_errors(exc))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unexpected exception: {str(exc)}", exc_info=True)
        return _error_response(500, exc, "Internal server error occurred")

    @app.get("/")
    def read_root():
        return {"message": "Welcome to the Sayonara Assistant API"}

    return app

# FastAPI 앱 인스턴스
app = create_app()

if __name__ == "__main__":
    uvicorn.run("webapp.main:app", host="0.0.0.0", port=8000, reload=False)
