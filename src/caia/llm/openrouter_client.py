"""OpenRouter LLM client."""

import json
import logging
from typing import Iterator, Optional

import httpx

from ..errors import TransportError
from .base import LLMClient

logger = logging.getLogger(__name__)

SSE_DATA_PREFIX = "data:"
SSE_DONE = "[DONE]"


class OpenRouterClient(LLMClient):
    """OpenRouter HTTP API client streaming server-sent events."""

    provider = "openrouter"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://openrouter.ai/api/v1",
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.transport = transport
        self.last_usage = None

    def stream_message(
        self,
        messages: list[dict],
        system: str,
        max_tokens: int,
        model: str,
    ) -> Iterator[str]:
        """Stream a chat completion via the OpenRouter API."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "X-Title": "Caia",
        }
        payload = {
            "model": model,
            "messages": self._convert_messages(messages, system),
            "max_tokens": max_tokens,
            "stream": True,
            "usage": {"include": True},
        }

        self.last_usage = None
        try:
            with httpx.Client(timeout=60.0, transport=self.transport) as client:
                with client.stream(
                    "POST",
                    f"{self.base_url}/chat/completions",
                    headers=headers,
                    json=payload,
                ) as response:
                    response.raise_for_status()
                    for line in response.iter_lines():
                        chunk = self._parse_event(line)
                        if chunk is None:
                            continue
                        if chunk is SSE_DONE:
                            break
                        text = self._consume_chunk(chunk)
                        if text:
                            yield text
        except httpx.HTTPError as e:
            raise TransportError(f"error sending message to OpenRouter: {e}") from e

    def _convert_messages(self, messages: list[dict], system: str) -> list[dict]:
        """Prepend the system prompt as a system-role message."""
        converted = []
        if system:
            converted.append({"role": "system", "content": system})
        for msg in messages:
            converted.append({"role": msg["role"], "content": msg["content"]})
        return converted

    def _parse_event(self, line: str):
        """Decode one SSE line; None for keep-alives and comments."""
        if not line.startswith(SSE_DATA_PREFIX):
            return None
        data = line[len(SSE_DATA_PREFIX):].strip()
        if not data:
            return None
        if data == SSE_DONE:
            return SSE_DONE
        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            raise TransportError(f"malformed stream event from OpenRouter: {e}") from e

    def _consume_chunk(self, chunk: dict) -> str:
        if "error" in chunk:
            error = chunk["error"]
            message = error.get("message", error) if isinstance(error, dict) else error
            raise TransportError(f"OpenRouter stream error: {message}")

        if chunk.get("usage"):
            usage = chunk["usage"]
            self.last_usage = {
                "input_tokens": usage.get("prompt_tokens", 0),
                "output_tokens": usage.get("completion_tokens", 0),
            }
            if "cost" in usage:
                self.last_usage["cost"] = usage["cost"]

        text = ""
        for choice in chunk.get("choices", []):
            delta = choice.get("delta") or {}
            text += delta.get("content") or ""
        return text
