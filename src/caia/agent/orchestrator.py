"""Conversation session: stream replies and act on the instructions inside them."""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from ..config import Settings, require_api_key, settings as default_settings
from ..errors import TransportError
from ..llm import AnthropicClient, LLMCallLogger, LLMClient, LLMMessage, OpenRouterClient
from ..ops import ConfirmationGate, ExecutionResult, InstructionExecutor, parse_instructions
from ..workspace import WorkspaceFileDescriptor, WorkspaceIndexer, render_workspace_context
from .prompts import build_system_prompt

logger = logging.getLogger(__name__)

# Responses without this marker cannot hold an instruction
OPERATION_MARKER = '"operation"'


def create_llm_client(settings: Settings) -> LLMClient:
    """Create the LLM client for the configured provider.

    Raises:
        ConfigurationError: the provider's API key is missing.
    """
    api_key = require_api_key(settings)
    if settings.llm_provider == "openrouter":
        return OpenRouterClient(api_key=api_key)
    return AnthropicClient(api_key=api_key)


@dataclass
class TurnResult:
    """What one conversation turn produced."""

    response: str
    results: list[ExecutionResult] = field(default_factory=list)


class CaiaSession:
    """Owns the conversation history and the workspace index for one CLI run."""

    def __init__(
        self,
        client: LLMClient,
        settings: Optional[Settings] = None,
        executor: Optional[InstructionExecutor] = None,
        indexer: Optional[WorkspaceIndexer] = None,
        call_logger: Optional[LLMCallLogger] = None,
    ):
        self.settings = settings or default_settings
        self.client = client
        root = self.settings.workspace_root
        self.executor = executor or InstructionExecutor(
            root, gate=ConfirmationGate(preview_chars=self.settings.preview_max_chars)
        )
        self.indexer = indexer or WorkspaceIndexer(root)
        self.call_logger = call_logger or LLMCallLogger(
            log_path=self.settings.call_log_path,
            enabled=self.settings.enable_call_logging,
        )

        self.messages: list[dict] = []
        self.descriptors: list[WorkspaceFileDescriptor] = []

    def reindex(self) -> list[WorkspaceFileDescriptor]:
        """Replace the descriptor list with a fresh index of the workspace."""
        self.descriptors = self.indexer.index()
        return self.descriptors

    def reset_conversation(self):
        """Reset the conversation history."""
        self.messages = []

    def system_prompt(self) -> str:
        return build_system_prompt(render_workspace_context(self.descriptors))

    def process_message(self, user_message: str) -> Optional[TurnResult]:
        """Run one turn; None when the response could not be streamed.

        The exchange is added to the history only once a reply arrived, so
        a failed turn leaves the history as it was.
        """
        pending = self.messages + [LLMMessage(role="user", content=user_message).to_dict()]
        model = self.settings.active_model

        print("\nCaia: ", end="", flush=True)
        chunks = []
        started = time.monotonic()
        try:
            for chunk in self.client.stream_message(
                messages=pending,
                system=self.system_prompt(),
                max_tokens=self.settings.max_tokens,
                model=model,
            ):
                print(chunk, end="", flush=True)
                chunks.append(chunk)
        except TransportError as e:
            logger.error(f"Turn abandoned: {e}")
            print(f"\nError: {e}")
            return None
        print()

        response = "".join(chunks)
        self.call_logger.log_call(
            model=model,
            provider=self.client.provider,
            message_count=len(pending),
            response_chars=len(response),
            duration_ms=(time.monotonic() - started) * 1000,
            usage_data=self.client.last_usage,
        )

        if not response:
            logger.warning("Received an empty response")
            print("Error: received an empty response")
            return None

        self.messages = pending + [LLMMessage(role="assistant", content=response).to_dict()]
        return TurnResult(response=response, results=self.apply_response(response))

    def apply_response(self, response: str) -> list[ExecutionResult]:
        """Execute the instructions embedded in ``response`` and reindex afterwards."""
        if OPERATION_MARKER not in response:
            return []

        instructions = parse_instructions(response)
        if not instructions:
            print("\nNo valid file operations found in the response.")
            return []

        print(f"\nFound {len(instructions)} file operations to execute.")
        results = self.executor.execute_all(instructions)

        try:
            self.reindex()
        except OSError as e:
            logger.warning(f"Reindex after operations failed: {e}")
            print(f"Warning: Error reindexing workspace files: {e}")
        return results

    def close(self):
        summary = self.call_logger.get_session_summary()
        logger.info(
            f"Session finished: {summary['calls']} calls, "
            f"{summary['input_tokens']} input / {summary['output_tokens']} output tokens"
        )
