"""Collects a label's recent messages, grouped and ordered by thread."""

from __future__ import annotations

import logging

from gmail_labeler.digest.models import ThreadMessage
from gmail_labeler.gmail.models import MailThread
from gmail_labeler.gmail.provider import MailboxProvider
from gmail_labeler.gmail.query import build_query
from gmail_labeler.result import Degraded, Ok, Result

logger = logging.getLogger(__name__)


class ThreadCollector:
    """Queries the mailbox per label and flattens threads into messages.

    Args:
        mailbox: Mailbox to search.
    """

    def __init__(self, mailbox: MailboxProvider):
        self._mailbox = mailbox

    def collect(self, label_name: str, max_count: int, max_days: int) -> Result[list[ThreadMessage]]:
        """Messages labeled ``label_name`` within ``max_days``, at most ``max_count`` of them.

        The cap counts messages, not threads, so the last included thread
        may be cut short. Thread groups come back oldest-latest-activity
        first; messages inside a thread keep the mailbox's order.
        """
        query = build_query(labels=[label_name], newer_than_days=max_days)
        try:
            threads = self._mailbox.search_threads(query, max_count)
        except Exception as e:
            logger.error(f"Error getting emails from label {label_name}: {e}")
            return Degraded([], f"mailbox search failed: {e}")

        collected = _cap_messages(threads, max_count)
        ordered = order_by_latest_activity(collected)
        logger.info(
            f"Collected {len(ordered)} emails from {len({m.thread_id for m in ordered})} "
            f"threads for label {label_name}"
        )
        return Ok(ordered)


def _cap_messages(threads: list[MailThread], max_count: int) -> list[ThreadMessage]:
    collected: list[ThreadMessage] = []
    for thread in threads:
        size = len(thread.messages)
        for position, message in enumerate(thread.messages, start=1):
            if len(collected) >= max_count:
                return collected
            collected.append(ThreadMessage(
                message=message,
                position=position,
                size=size,
                is_thread_start=position == 1,
            ))
    return collected


def order_by_latest_activity(messages: list[ThreadMessage]) -> list[ThreadMessage]:
    """Regroup by thread and sort groups by their newest message, ascending.

    The sort is stable, so threads with equal latest timestamps keep their
    original relative order.
    """
    groups: dict[str, list[ThreadMessage]] = {}
    for msg in messages:
        groups.setdefault(msg.thread_id, []).append(msg)

    ordered_groups = sorted(
        groups.values(),
        key=lambda group: max(m.sent_at for m in group),
    )
    return [msg for group in ordered_groups for msg in group]
