"""Abstract base class for completion backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class CompletionProvider(ABC):
    """Prompt in, text out.

    Implementations raise ``CompletionTransportError`` when the request
    fails and ``CompletionResponseError`` when the answer is malformed or
    empty. Neither retries.
    """

    @abstractmethod
    def complete(self, model: str, system_prompt: str, user_prompt: str) -> str:
        """Return the generated text, stripped of surrounding whitespace."""
        ...
