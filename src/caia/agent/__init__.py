"""Conversation agent for Caia."""

from .orchestrator import CaiaSession, TurnResult, create_llm_client
from .prompts import HELP_TEXT, SYSTEM_PROMPT, build_system_prompt

__all__ = [
    "CaiaSession",
    "TurnResult",
    "create_llm_client",
    "HELP_TEXT",
    "SYSTEM_PROMPT",
    "build_system_prompt",
]
