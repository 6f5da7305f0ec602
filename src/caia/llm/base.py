"""Base LLM client interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass
class LLMMessage:
    """Message in a conversation."""

    role: str
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


class LLMClient(ABC):
    """Abstract base class for streaming LLM clients."""

    provider: str = ""

    # Token usage of the last completed stream, when the provider reports it
    last_usage: Optional[dict] = None

    @abstractmethod
    def stream_message(
        self,
        messages: list[dict],
        system: str,
        max_tokens: int,
        model: str,
    ) -> Iterator[str]:
        """Stream the reply to ``messages`` as text chunks in delivery order.

        Raises:
            TransportError: the request or the stream failed.
        """
