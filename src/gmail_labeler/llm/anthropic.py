"""Anthropic Messages API backend."""

from __future__ import annotations

import logging

from gmail_labeler.exceptions import (
    CompletionError,
    CompletionResponseError,
    CompletionTransportError,
)
from gmail_labeler.llm.base import CompletionProvider

logger = logging.getLogger(__name__)


class AnthropicCompletionProvider(CompletionProvider):
    """Synchronous wrapper around the Anthropic SDK.

    Args:
        api_key: Anthropic API key.
        max_tokens: Upper bound on generated tokens per call.
    """

    def __init__(self, api_key: str, max_tokens: int = 1024):
        if not api_key:
            raise CompletionError("Anthropic API key is required.")
        try:
            from anthropic import Anthropic
        except ImportError:
            raise ImportError(
                "anthropic is required for AnthropicCompletionProvider. "
                "Install with: pip install gmail-labeler"
            )
        # The SDK retries by default; calls here are single-shot.
        self._client = Anthropic(api_key=api_key, max_retries=0)
        self.max_tokens = max_tokens

    @property
    def client(self):
        """Access the underlying Anthropic SDK client for advanced usage."""
        return self._client

    def complete(self, model: str, system_prompt: str, user_prompt: str) -> str:
        from anthropic import APIError

        try:
            response = self._client.messages.create(
                model=model,
                max_tokens=self.max_tokens,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except APIError as e:
            raise CompletionTransportError(f"Claude API error: {e}") from e

        text = "\n".join(
            block.text for block in (response.content or []) if getattr(block, "type", "") == "text"
        ).strip()
        if not text:
            raise CompletionResponseError(
                f"Claude returned no text (stop_reason={getattr(response, 'stop_reason', None)})"
            )
        return text
