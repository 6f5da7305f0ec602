"""LLM client module."""

from .anthropic_client import AnthropicClient
from .base import LLMClient, LLMMessage
from .call_log import LLMCallLogger, LLMCallRecord
from .openrouter_client import OpenRouterClient

__all__ = [
    "AnthropicClient",
    "LLMClient",
    "LLMMessage",
    "LLMCallLogger",
    "LLMCallRecord",
    "OpenRouterClient",
]
