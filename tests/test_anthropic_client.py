"""Tests for the Anthropic client."""

from unittest.mock import MagicMock, Mock

import httpx
import pytest
from anthropic import APIConnectionError

from caia.errors import TransportError
from caia.llm import AnthropicClient


def _client_with_stream(chunks):
    client = AnthropicClient(api_key="test-key")
    stream = MagicMock()
    stream.text_stream = iter(chunks)
    stream.get_final_message.return_value = Mock(
        usage=Mock(input_tokens=30, output_tokens=4), stop_reason="end_turn"
    )
    client.client = MagicMock()
    client.client.messages.stream.return_value.__enter__.return_value = stream
    return client


class TestAnthropicClient:
    """Tests for AnthropicClient."""

    def test_stream_yields_text(self):
        client = _client_with_stream(["Hel", "lo"])

        chunks = list(
            client.stream_message(
                messages=[{"role": "user", "content": "hi"}],
                system="sys",
                max_tokens=1024,
                model="claude-3-5-sonnet-latest",
            )
        )

        assert chunks == ["Hel", "lo"]
        client.client.messages.stream.assert_called_once_with(
            model="claude-3-5-sonnet-latest",
            max_tokens=1024,
            system="sys",
            messages=[{"role": "user", "content": "hi"}],
        )
        assert client.last_usage == {"input_tokens": 30, "output_tokens": 4}

    def test_api_error_becomes_transport_error(self):
        client = AnthropicClient(api_key="test-key")
        client.client = MagicMock()
        client.client.messages.stream.side_effect = APIConnectionError(
            request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        )

        with pytest.raises(TransportError, match="error sending message to Claude"):
            list(client.stream_message(messages=[], system="", max_tokens=10, model="m"))

        assert client.last_usage is None
