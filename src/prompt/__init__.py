# src/prompt/__init__.py
from .service import PromptAssembler
from .templates import PERSONA_INSTRUCTION
from .container import create_prompt_container

__all__ = ["PromptAssembler", "PERSONA_INSTRUCTION", "create_prompt_container"]
