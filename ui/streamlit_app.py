# ui/streamlit_app.py
import json
import os
import uuid
from typing import Iterator, Optional, Tuple

import httpx
import streamlit as st

from commands import CLEAR, RAG, format_rag_answer, parse_command

st.set_page_config(page_title="Sayonara AI Assistant", layout="centered")

# API URL - webapp에서 실행되는 FastAPI 서버
SERVER_URL = os.getenv("SAYONARA_SERVER_URL", "http://localhost:8000")
API_URL = f"{SERVER_URL}/api"

def test_api_connection() -> bool:
    """API 연결 테스트"""
    try:
        response = httpx.get(f"{SERVER_URL}/health", timeout=5.0)
        return response.status_code == 200
    except httpx.HTTPError:
        return False

def parse_frame(line: str) -> Optional[dict]:
    """SSE 'data:' 라인 파싱 - 데이터 라인이 아니면 None"""
    if not line.startswith("data:"):
        return None
    return json.loads(line[len("data:"):].strip())

def stream_chat(message: str, session_id: str, rag_enabled: bool) -> Iterator[Tuple[str, bool]]:
    """응답 스트리밍 - (누적 텍스트, 완료 여부) 반환, 실패 시 RuntimeError"""
    params = {"message": message, "conversationId": session_id, "ragEnabled": str(rag_enabled).lower()}
    try:
        with httpx.stream(
            "GET",
            f"{API_URL}/chat/stream",
            params=params,
            timeout=60.0,
            headers={"Accept": "text/event-stream", "X-Session-Id": session_id}
        ) as response:
            if response.status_code != 200:
                response.read()
                raise RuntimeError(f"API error {response.status_code}: {response.text}")
            for line in response.iter_lines():
                frame = parse_frame(line)
                if frame is None:
                    continue
                if frame.get("error"):
                    raise RuntimeError(frame["error"])
                yield frame.get("content", ""), bool(frame.get("done"))
                if frame.get("done"):
                    return
    except httpx.TimeoutException as e:
        raise RuntimeError("Request timed out") from e
    except httpx.ConnectError as e:
        raise RuntimeError("Could not connect to the server") from e

def query_rag(query: str) -> dict:
    """지식 베이스 질의 - 실패 시 RuntimeError"""
    try:
        response = httpx.post(f"{API_URL}/rag", json={"query": query}, timeout=60.0)
    except httpx.HTTPError as e:
        raise RuntimeError("RAG query failed. Please check your connection.") from e
    if response.status_code != 200:
        raise RuntimeError(f"API error {response.status_code}: {response.text}")
    return response.json()

def reset_conversation():
    """서버 세션 종료 후 새 대화 시작"""
    httpx.delete(f"{API_URL}/sessions/{st.session_state.session_id}", timeout=5.0)
    st.session_state.messages = []
    st.session_state.session_id = str(uuid.uuid4())
    st.session_state.last_error = None
    st.session_state.last_prompt = None

def _answer_from_stream(message: str) -> str:
    placeholder = st.empty()
    text = ""
    try:
        for content, done in stream_chat(message, st.session_state.session_id, st.session_state.rag_enabled):
            # 누적 텍스트이므로 덮어쓰기
            text = content
            placeholder.markdown(text if done else text + "▌")
    except RuntimeError:
        placeholder.empty()
        raise
    return text

def _answer_from_knowledge(query: str) -> str:
    if not query:
        raise RuntimeError("Usage: /rag <question>")
    with st.spinner("Searching the knowledge base..."):
        text = format_rag_answer(query_rag(query))
    st.markdown(text)
    return text

def process_user_input(prompt: str, replay: bool = False):
    """사용자 입력 처리 - '/clear', '/rag <질문>' 명령 지원, 재시도면 메시지를 다시 추가하지 않음"""
    command = parse_command(prompt)
    if command.name == CLEAR:
        reset_conversation()
        st.rerun()

    st.session_state.last_error = None
    st.session_state.last_prompt = prompt
    if not replay:
        st.session_state.messages.append({"role": "user", "content": prompt})
        with st.chat_message("user"):
            st.markdown(prompt)

    with st.chat_message("assistant"):
        try:
            if command.name == RAG:
                text = _answer_from_knowledge(command.argument)
            else:
                text = _answer_from_stream(command.argument)
        except RuntimeError as e:
            st.session_state.last_error = str(e)
            return

    if text.strip():
        st.session_state.messages.append({"role": "assistant", "content": text})
    else:
        st.session_state.last_error = "No response received."

# 메인 앱
st.title("🤖 Sayonara AI Assistant")

# API 연결 상태 확인
if not test_api_connection():
    st.error("❌ Backend unavailable - start the FastAPI server first")
    st.code("uvicorn webapp.main:app --reload")
    st.stop()

# 세션 초기화
if "session_id" not in st.session_state:
    st.session_state.session_id = str(uuid.uuid4())
    st.session_state.messages = []
    st.session_state.last_error = None
    st.session_state.last_prompt = None

# 채팅 기록 표시
for message in st.session_state.messages:
    with st.chat_message(message["role"]):
        st.markdown(message["content"])

# 사이드바
with st.sidebar:
    st.header("⚙️ Settings")
    st.session_state.rag_enabled = st.checkbox(
        "📚 Use knowledge base",
        value=st.session_state.get("rag_enabled", True),
    )
    if st.button("🗑️ New conversation"):
        reset_conversation()
        st.rerun()
    st.markdown("---")
    st.caption(f"Session: {st.session_state.session_id[:8]}...")
    st.caption(f"Messages: {len(st.session_state.messages)}")
    st.caption("Commands: /rag <question>, /clear")

if prompt := st.chat_input("Ask about data wiping, blockchain verification, resale... (/rag, /clear)"):
    process_user_input(prompt)

# 오류 표시 + 마지막 메시지 재전송
if st.session_state.last_error:
    st.error(f"❌ {st.session_state.last_error}")
    if st.button("🔄 Retry"):
        process_user_input(st.session_state.last_prompt, replay=True)
        st.rerun()
