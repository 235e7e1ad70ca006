"""
Axiom LLM Layer

Provider interface, OpenAI implementation and tolerant JSON decoding.
"""

from axiom.llm.base import BaseLLMProvider, LLMResponse, Message, build_messages
from axiom.llm.openai_provider import OpenAIProvider
from axiom.llm.parsing import parse_llm_json, strip_code_fences

__all__ = [
    "BaseLLMProvider",
    "LLMResponse",
    "Message",
    "build_messages",
    "OpenAIProvider",
    "parse_llm_json",
    "strip_code_fences",
]
