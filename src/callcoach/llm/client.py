"""Claude client used for coaching scorecards and company/transcript extraction."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from callcoach.config import MODEL_DEFAULT

logger = logging.getLogger(__name__)

# Seconds; a coaching scorecard for a long call can take a while
REQUEST_TIMEOUT = 120.0


@dataclass
class LLMResponse:
    content: str
    input_tokens: int
    output_tokens: int
    model: str
    stop_reason: str | None = None


class AnthropicAPIClient:
    """Single-turn completions over the anthropic SDK.

    Failures are not retried here; callers see the SDK exception.
    """

    def __init__(self, api_key: str, model: str = MODEL_DEFAULT, timeout: float = REQUEST_TIMEOUT):
        import anthropic

        self.client = anthropic.Anthropic(api_key=api_key, max_retries=0, timeout=timeout)
        self.model = model

    def complete(self, system: str, user: str, max_tokens: int = 4096) -> LLMResponse:
        message = self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            system=system,
            messages=[{"role": "user", "content": user}],
        )
        text = "".join(block.text for block in message.content if block.type == "text")
        usage = message.usage
        logger.debug(
            f"{self.model}: {usage.input_tokens} tokens in, {usage.output_tokens} out "
            f"({message.stop_reason})"
        )
        if message.stop_reason == "max_tokens":
            logger.warning(f"Claude reply hit max_tokens={max_tokens}; JSON may be truncated")
        return LLMResponse(
            content=text,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
            model=self.model,
            stop_reason=message.stop_reason,
        )


def create_client(api_key: str | None = None, model: str = MODEL_DEFAULT) -> AnthropicAPIClient:
    """Build the Claude client, reading ANTHROPIC_API_KEY when no key is given."""
    key = api_key or os.environ.get("ANTHROPIC_API_KEY")
    if not key:
        raise ValueError("ANTHROPIC_API_KEY environment variable not set")
    return AnthropicAPIClient(key, model)
