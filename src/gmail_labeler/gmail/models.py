"""Data models for the Gmail module."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Message:
    """A single email, immutable once fetched."""

    message_id: str
    thread_id: str
    subject: str
    body_text: str
    sent_at: datetime
    sender: str
    attachment_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class MailThread:
    """A conversation as returned by the mailbox, messages in send order."""

    thread_id: str
    messages: tuple[Message, ...]
    label_names: frozenset[str] = field(default_factory=frozenset)

    @property
    def latest(self) -> Message | None:
        return self.messages[-1] if self.messages else None
