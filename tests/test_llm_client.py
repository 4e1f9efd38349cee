"""Tests for callcoach.llm.client."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from callcoach.llm.client import AnthropicAPIClient, create_client


def _message(text, stop_reason="end_turn"):
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=text)],
        usage=SimpleNamespace(input_tokens=12, output_tokens=34),
        stop_reason=stop_reason,
    )


class TestCreateClient:
    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
            create_client()

    def test_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
        client = create_client(model="claude-test")
        assert isinstance(client, AnthropicAPIClient)
        assert client.model == "claude-test"

    def test_sdk_retries_disabled(self):
        client = AnthropicAPIClient("sk-test")
        assert client.client.max_retries == 0


class TestComplete:
    def test_complete(self):
        client = AnthropicAPIClient("sk-test", model="claude-test")
        client.client = MagicMock()
        client.client.messages.create.return_value = _message('{"ok": true}')

        response = client.complete("system text", "user text", max_tokens=100)

        assert response.content == '{"ok": true}'
        assert response.input_tokens == 12
        assert response.output_tokens == 34
        assert response.model == "claude-test"
        assert response.stop_reason == "end_turn"
        client.client.messages.create.assert_called_once_with(
            model="claude-test",
            max_tokens=100,
            system="system text",
            messages=[{"role": "user", "content": "user text"}],
        )

    def test_truncated_reply_still_returned(self):
        client = AnthropicAPIClient("sk-test")
        client.client = MagicMock()
        client.client.messages.create.return_value = _message('{"partial": ', stop_reason="max_tokens")

        response = client.complete("s", "u")

        assert response.content == '{"partial": '
        assert response.stop_reason == "max_tokens"
