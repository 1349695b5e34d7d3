"""Completion backends (OpenAI, Anthropic Claude)."""

from gmail_labeler.llm.base import CompletionProvider


def get_completion_provider(model: str, api_key: str) -> CompletionProvider:
    """Pick the backend that serves ``model``: ``claude*`` goes to Anthropic, anything else to OpenAI."""
    if model.lower().startswith("claude"):
        from gmail_labeler.llm.anthropic import AnthropicCompletionProvider
        return AnthropicCompletionProvider(api_key)
    from gmail_labeler.llm.openai import OpenAICompletionProvider
    return OpenAICompletionProvider(api_key)


__all__ = ["CompletionProvider", "get_completion_provider"]
