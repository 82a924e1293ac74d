# src/chatbot/demo.py

DEMO_RESPONSES = {
    "wiping": (
        "The Sayonara platform uses military-grade NIST 800-88 compliant data sanitization. "
        "Our dual-phase process ensures complete erasure with blockchain verification."
    ),
    "blockchain": (
        "Each data wipe generates a tamper-proof certificate stored on the Ethereum Sepolia "
        "testnet. This provides immutable proof of compliance."
    ),
    "rag": (
        "Our RAG (Retrieval Augmented Generation) system enhances responses with real-time "
        "data from our knowledge base about secure data wiping procedures."
    ),
    "default": (
        "I understand your query about the Sayonara data wiping solution. Our platform offers "
        "comprehensive secure erasure with AI guidance and blockchain verification."
    ),
}

class DemoResponder:
    """원격 API 없이 사용하는 고정 응답 (데모 모드 및 스트림 장애 대체용)"""

    def respond(self, message: str) -> str:
        lowered = (message or "").lower()
        if "wip" in lowered:
            return DEMO_RESPONSES["wiping"]
        if "blockchain" in lowered:
            return DEMO_RESPONSES["blockchain"]
        if "rag" in lowered:
            return DEMO_RESPONSES["rag"]
        return DEMO_RESPONSES["default"]
