"""LLM integration for stepshell."""

from .client import LLMClient, ChatSession, create_llm_client
from .payload import PayloadBuilder, create_payload_builder
from .parsers import parse_step, extract_response_content

__all__ = [
    "LLMClient",
    "ChatSession",
    "create_llm_client",
    "PayloadBuilder",
    "create_payload_builder",
    "parse_step",
    "extract_response_content",
]
