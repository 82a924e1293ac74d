# ui/commands.py
from dataclasses import dataclass
from typing import Any, Dict

CHAT = "chat"
RAG = "rag"
CLEAR = "clear"

@dataclass(frozen=True)
class ChatCommand:
    """채팅 입력 해석 결과"""
    name: str
    argument: str = ""

def parse_command(text: str) -> ChatCommand:
    """입력 해석 - '/rag <질문>'은 지식 베이스 질의, '/clear'는 대화 초기화, 나머지는 일반 채팅"""
    stripped = (text or "").strip()
    if stripped.startswith("/"):
        head, _, rest = stripped.partition(" ")
        if head == "/clear":
            return ChatCommand(CLEAR)
        if head == "/rag":
            return ChatCommand(RAG, rest.strip())
    return ChatCommand(CHAT, stripped)

def format_rag_answer(body: Dict[str, Any]) -> str:
    """RAG 응답을 마크다운으로 변환"""
    answer = body.get("answer") or "RAG query completed."
    sources = body.get("sources") or []
    if not sources:
        return answer
    lines = [answer, "", "**Sources**"]
    lines.extend(f"- {s['topic']} (relevance {s['relevance']})" for s in sources)
    return "\n".join(lines)
