"""Prompt construction for per-thread summaries."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from gmail_labeler.digest.models import ThreadMessage
from gmail_labeler.digest.text import derive_alias, format_date, truncate

LENGTHY_THREAD_SIZE = 3

COMPRESSION_INSTRUCTIONS = {
    "detailed": (
        "DETAILED: use up to two full sentences covering who is involved, "
        "what happened, and any dates, amounts or deadlines."
    ),
    "standard": (
        "STANDARD: use one or two concise sentences with the key point and "
        "any action needed."
    ),
    "succinct": (
        "SUCCINCT: use one short sentence with only the essential point."
    ),
    "very succinct": (
        "VERY SUCCINCT: use a single short phrase of a few words."
    ),
}


def compression_instruction(level: str) -> str:
    instruction = COMPRESSION_INSTRUCTIONS.get(level, COMPRESSION_INSTRUCTIONS["standard"])
    return (
        f"Compression level {instruction} This overrides every other length "
        "guidance you were given."
    )


def thread_framing(original_size: int, included: int, windowed: bool) -> str:
    if original_size <= 1:
        return "This is a single email."
    lines = [f"This is an email thread of {original_size} messages."]
    if windowed:
        lines.append(
            f"Only the most recent {included} messages are included below; "
            "earlier messages were left out."
        )
    if original_size > LENGTHY_THREAD_SIZE:
        lines.append(
            "This is a lengthy thread: describe where the conversation stands "
            "now and what is still open, not its full history."
        )
    return " ".join(lines)


def self_reference_instruction(user_email: str) -> str:
    alias = derive_alias(user_email)
    names = f'{user_email} (also written as "{alias}")' if alias else user_email
    return (
        f"The reader of this summary is {names}. Wherever they appear as a "
        'sender, call them "You" instead of using their name or address.'
    )


def listening_budget_instruction(target_minutes: int) -> str:
    return (
        f"Target duration: about {target_minutes} minutes of listening time "
        "for this label, shared across all of its conversations."
    )


def format_message(msg: ThreadMessage, max_words: int) -> str:
    body, was_truncated = truncate(msg.message.body_text, max_words)
    lines = [
        f"Message {msg.position} of {msg.size}",
        f"From: {msg.message.sender}",
        f"Date: {format_date(msg.sent_at)}",
        f"Subject: {msg.message.subject}",
    ]
    if msg.message.attachment_names:
        lines.append(f"Attachments: {', '.join(msg.message.attachment_names)}")
    lines.append(f"Body{' (truncated)' if was_truncated else ''}: {body}")
    return "\n".join(lines)


def build_thread_prompt(
    messages: Sequence[ThreadMessage],
    *,
    original_size: int,
    windowed: bool,
    compression_level: str,
    today: date,
    user_email: str,
    max_words: int,
    target_minutes: int | None = None,
) -> str:
    """User-role prompt for one thread; the style guide goes in the system role."""
    sections = [compression_instruction(compression_level)]
    if target_minutes:
        sections.append(listening_budget_instruction(target_minutes))
    sections += [
        thread_framing(original_size, len(messages), windowed),
        f"Today is {format_date(today)}. Refer to dates relative to today "
        "where it reads naturally (today, yesterday, on Monday).",
    ]
    if user_email:
        sections.append(self_reference_instruction(user_email))
    sections.append(
        "Email content:\n\n"
        + "\n\n---\n\n".join(format_message(m, max_words) for m in messages)
    )
    sections.append("Summary:")
    return "\n\n".join(sections)
