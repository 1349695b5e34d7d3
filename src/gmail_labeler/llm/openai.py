"""OpenAI chat-completions backend."""

from __future__ import annotations

import logging

from gmail_labeler.exceptions import (
    CompletionError,
    CompletionResponseError,
    CompletionTransportError,
)
from gmail_labeler.llm.base import CompletionProvider

logger = logging.getLogger(__name__)

API_URL = "https://api.openai.com/v1/chat/completions"


class OpenAICompletionProvider(CompletionProvider):
    """OpenAI chat completions over plain HTTP.

    Args:
        api_key: OpenAI API key.
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, api_key: str, timeout: float = 60.0):
        if not api_key:
            raise CompletionError("OpenAI API key is required.")
        try:
            import httpx  # noqa: F401
        except ImportError:
            raise ImportError(
                "httpx is required for OpenAICompletionProvider. "
                "Install with: pip install gmail-labeler"
            )
        self.api_key = api_key
        self.timeout = timeout

    def complete(self, model: str, system_prompt: str, user_prompt: str) -> str:
        import httpx

        payload = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(
                    API_URL,
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise CompletionTransportError(f"OpenAI request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise CompletionResponseError(f"OpenAI returned invalid JSON: {e}") from e
        return _extract_text(data)


def _extract_text(data: dict) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise CompletionResponseError(f"OpenAI returned unexpected response: {data!r}") from e
    if not isinstance(content, str) or not content.strip():
        raise CompletionResponseError("OpenAI returned an empty message")
    return content.strip()
