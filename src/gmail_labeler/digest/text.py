"""Text shaping helpers: word-budget truncation, dates, user alias."""

from __future__ import annotations

import re
from datetime import date, datetime

ELLIPSIS = "..."

_ALIAS_SEPARATORS = re.compile(r"[._+\-]+")


def truncate(text: str | None, max_words: int) -> tuple[str, bool]:
    """Cut ``text`` down to ``max_words`` whitespace-separated words.

    Returns ``(text, was_truncated)``. Text within budget, or a budget of
    zero or less, comes back unchanged. Truncated text is the first
    ``max_words`` words joined by single spaces plus an ellipsis.
    """
    if not text:
        return "", False
    if max_words <= 0:
        return text, False

    words = text.split()
    if len(words) <= max_words:
        return text, False
    return " ".join(words[:max_words]) + ELLIPSIS, True


def format_date(value: date | datetime) -> str:
    """``Mon Oct 19 2026``"""
    return value.strftime("%a %b %d %Y")


def derive_alias(email: str) -> str:
    """Readable name from an address's local part: ``jane.doe@x.com`` -> ``jane doe``."""
    local = email.split("@", 1)[0].strip()
    return " ".join(_ALIAS_SEPARATORS.sub(" ", local).split())
