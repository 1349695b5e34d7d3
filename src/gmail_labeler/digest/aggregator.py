"""Groups a label's messages by thread and summarizes each thread."""

from __future__ import annotations

import logging
from typing import Sequence

from gmail_labeler.digest.models import LabelSummary, ThreadMessage, ThreadSummary
from gmail_labeler.digest.summarizer import ThreadSummarizer
from gmail_labeler.digest.text import format_date

logger = logging.getLogger(__name__)


def group_by_thread(messages: Sequence[ThreadMessage]) -> dict[str, list[ThreadMessage]]:
    """Thread id -> messages, threads in first-seen order."""
    groups: dict[str, list[ThreadMessage]] = {}
    for msg in messages:
        groups.setdefault(msg.thread_id, []).append(msg)
    return groups


def format_time_range(messages: Sequence[ThreadMessage]) -> str:
    if not messages:
        return "no emails"

    dates = sorted(m.sent_at for m in messages)
    oldest, newest = dates[0], dates[-1]
    if oldest.date() == newest.date():
        return f"last received: {format_date(newest)}"
    return f"spanning: {format_date(oldest)} to {format_date(newest)}"


class LabelAggregator:
    """Builds a LabelSummary from one label's collected messages."""

    def __init__(self, summarizer: ThreadSummarizer):
        self._summarizer = summarizer

    def aggregate(
        self,
        label_name: str,
        messages: Sequence[ThreadMessage],
        *,
        model: str,
        compression_level: str,
        user_identity: str,
        max_words: int,
        style_guide: str | None = None,
        target_minutes: int | None = None,
    ) -> LabelSummary:
        summaries: list[ThreadSummary] = []
        degraded = 0
        for thread_id, thread_messages in group_by_thread(messages).items():
            result = self._summarizer.summarize(
                thread_messages,
                model=model,
                compression_level=compression_level,
                user_identity=user_identity,
                max_words_per_message=max_words,
                style_guide=style_guide,
                target_minutes=target_minutes,
            )
            if not result.ok:
                degraded += 1
            summaries.append(result.value)

        if degraded:
            logger.warning(f"{degraded}/{len(summaries)} thread summaries degraded for label {label_name}")

        return LabelSummary(
            label_name=label_name,
            email_count=len(messages),
            time_range_description=format_time_range(messages),
            thread_summaries=tuple(summaries),
        )
