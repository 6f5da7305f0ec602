"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Iterator, Optional

import pytest

from caia.config import Settings
from caia.errors import TransportError
from caia.llm import LLMClient
from caia.ops import ConfirmationGate, InstructionExecutor


class FakeLLMClient(LLMClient):
    """Streams canned replies, one per call."""

    provider = "fake"

    def __init__(self, replies: Optional[list] = None, chunk_size: int = 7):
        self.replies = list(replies or [])
        self.chunk_size = chunk_size
        self.calls: list[dict] = []
        self.last_usage = None

    def stream_message(
        self,
        messages: list[dict],
        system: str,
        max_tokens: int,
        model: str,
    ) -> Iterator[str]:
        self.calls.append(
            {"messages": list(messages), "system": system, "max_tokens": max_tokens, "model": model}
        )
        reply = self.replies.pop(0)
        if isinstance(reply, TransportError):
            raise reply
        for start in range(0, len(reply), self.chunk_size):
            yield reply[start:start + self.chunk_size]
        self.last_usage = {"input_tokens": 10, "output_tokens": len(reply)}


class ScriptedInput:
    """Stand-in for ``input`` that answers from a list and records prompts."""

    def __init__(self, answers: list):
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """An empty workspace directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def test_settings(workspace: Path, tmp_path: Path) -> Settings:
    """Create settings with test values."""
    return Settings(
        llm_provider="anthropic",
        anthropic_api_key="test-key-123",
        openrouter_api_key=None,
        model_name="claude-3-5-sonnet-latest",
        max_tokens=1024,
        workspace_root=workspace,
        preview_max_chars=200,
        log_level="WARNING",
        log_file=None,
        enable_call_logging=False,
        call_log_path=tmp_path / "logs" / "calls.jsonl",
    )


@pytest.fixture
def approve_all():
    """Input that confirms every prompt."""
    return ScriptedInput(["y"] * 20)


@pytest.fixture
def executor(workspace: Path, approve_all) -> InstructionExecutor:
    """Executor rooted at the workspace that confirms everything."""
    return InstructionExecutor(workspace, gate=ConfirmationGate(input_func=approve_all))
