"""Anthropic LLM client."""

import logging
from typing import Iterator

from anthropic import Anthropic, APIError

from ..errors import TransportError
from .base import LLMClient

logger = logging.getLogger(__name__)


class AnthropicClient(LLMClient):
    """Anthropic Claude client using the streaming Messages API."""

    provider = "anthropic"

    def __init__(self, api_key: str):
        self.client = Anthropic(api_key=api_key)
        self.last_usage = None

    def stream_message(
        self,
        messages: list[dict],
        system: str,
        max_tokens: int,
        model: str,
    ) -> Iterator[str]:
        """Stream a message from Claude."""
        self.last_usage = None
        try:
            with self.client.messages.stream(
                model=model,
                max_tokens=max_tokens,
                system=system,
                messages=messages,
            ) as stream:
                for text in stream.text_stream:
                    yield text
                final = stream.get_final_message()
        except APIError as e:
            raise TransportError(f"error sending message to Claude: {e}") from e

        self.last_usage = {
            "input_tokens": final.usage.input_tokens,
            "output_tokens": final.usage.output_tokens,
        }
        logger.debug(f"Claude stream finished: {final.stop_reason}, usage={self.last_usage}")
