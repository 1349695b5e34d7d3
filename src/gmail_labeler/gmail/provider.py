"""Mailbox operations the jobs depend on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from gmail_labeler.gmail.models import MailThread


class MailboxProvider(ABC):
    """Abstract mailbox. Implementations raise MailboxError subclasses."""

    @abstractmethod
    def search_threads(self, query: str, max_results: int) -> list[MailThread]:
        """Threads matching a Gmail search query, newest first, with their messages."""
        ...

    @abstractmethod
    def modify_thread_labels(
        self,
        thread_id: str,
        add: Iterable[str] = (),
        remove: Iterable[str] = (),
    ) -> None:
        """Add and remove labels (by name) on a thread, creating missing labels."""
        ...

    @abstractmethod
    def send_message(
        self,
        to: str,
        subject: str,
        body_plain: str,
        body_html: str | None = None,
    ) -> None:
        """Send an email from the authenticated account."""
        ...

    @abstractmethod
    def get_user_email(self) -> str:
        """Address of the authenticated account."""
        ...
