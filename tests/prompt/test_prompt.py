# tests/prompt/test_prompt.py
from src.chat_session.domains import ChatMessage
from src.prompt.service import PromptAssembler
from src.prompt.templates import PERSONA_INSTRUCTION, KNOWLEDGE_HEADER, HISTORY_HEADER


class TestPromptAssembler:
    """PromptAssembler 프롬프트 조립 테스트"""

    def test_plain_message_without_history_or_rag(self, prompt_assembler: PromptAssembler):
        # when
        prompt = prompt_assembler.assemble("Hello there", rag_enabled=False)

        # then
        assert prompt == PERSONA_INSTRUCTION + "\n\n" + "Hello there"

    def test_rag_prompt_contains_knowledge_block(self, prompt_assembler: PromptAssembler, blockchain_query):
        # when
        prompt = prompt_assembler.assemble(blockchain_query, rag_enabled=True)

        # then
        assert prompt.startswith(PERSONA_INSTRUCTION)
        assert KNOWLEDGE_HEADER in prompt
        assert "[Blockchain Verification]" in prompt
        assert prompt.endswith(f"Question: {blockchain_query}")

    def test_rag_without_results_falls_back_to_plain_message(self, prompt_assembler: PromptAssembler):
        prompt = prompt_assembler.assemble("zzz qqq", rag_enabled=True)

        assert KNOWLEDGE_HEADER not in prompt
        assert prompt.endswith("\n\nzzz qqq")

    def test_history_is_rendered_in_order(self, prompt_assembler: PromptAssembler):
        # given
        history = [ChatMessage.user("Hi"), ChatMessage.model("Hello! How can I help?")]

        # when
        prompt = prompt_assembler.assemble("What is Sayonara?", history)

        # then
        assert HISTORY_HEADER in prompt
        assert prompt.index("User: Hi") < prompt.index("Assistant: Hello! How can I help?")
        assert prompt.endswith("What is Sayonara?")

    def test_grounded_prompt_uses_given_results(self, prompt_assembler: PromptAssembler, knowledge_service, blockchain_query):
        # given
        results = knowledge_service.search(blockchain_query)

        # when
        prompt = prompt_assembler.assemble_grounded(blockchain_query, results)

        # then
        assert results[0].content in prompt
        assert HISTORY_HEADER not in prompt
