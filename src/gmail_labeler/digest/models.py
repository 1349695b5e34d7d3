"""Data models for the digest pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from gmail_labeler.gmail.models import Message


@dataclass(frozen=True)
class ThreadMessage:
    """A collected message annotated with its place in the thread.

    ``size`` is the thread's original length, even when the email cap cut
    some of its messages.
    """

    message: Message
    position: int
    size: int
    is_thread_start: bool

    @property
    def thread_id(self) -> str:
        return self.message.thread_id

    @property
    def sent_at(self) -> datetime:
        return self.message.sent_at


@dataclass(frozen=True)
class ThreadSummary:
    thread_id: str
    text: str
    source_link: str


@dataclass(frozen=True)
class LabelSummary:
    label_name: str
    email_count: int
    time_range_description: str
    thread_summaries: tuple[ThreadSummary, ...] = field(default_factory=tuple)
