"""Summarizes one conversation thread with a single completion call."""

from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from gmail_labeler.config.defaults import DEFAULTS, Defaults
from gmail_labeler.digest.models import ThreadMessage, ThreadSummary
from gmail_labeler.digest.prompts import build_thread_prompt
from gmail_labeler.llm.base import CompletionProvider
from gmail_labeler.result import Degraded, Ok, Result

logger = logging.getLogger(__name__)

WINDOW_THRESHOLD = 3
WINDOW_SIZE = 2


class ThreadSummarizer:
    """Turns a thread's messages into a one- or two-sentence summary.

    Args:
        completion: Backend used for the summary call.
        defaults: Style guide, fallback text and link template.
        today: Date used for relative-day phrasing; defaults to the
            current date at call time.
    """

    def __init__(
        self,
        completion: CompletionProvider,
        defaults: Defaults = DEFAULTS,
        today: date | None = None,
    ):
        self._completion = completion
        self._defaults = defaults
        self._today = today

    def link_for(self, thread_id: str) -> str:
        return self._defaults.thread_link_template.format(thread_id=thread_id)

    def summarize(
        self,
        thread_messages: Sequence[ThreadMessage],
        model: str,
        compression_level: str,
        user_identity: str,
        max_words_per_message: int,
        style_guide: str | None = None,
        target_minutes: int | None = None,
    ) -> Result[ThreadSummary]:
        """Summarize one thread. Never raises.

        Threads longer than three messages are cut to their last two before
        prompting. Any completion failure yields the fallback summary text.
        """
        if not thread_messages:
            return Degraded(ThreadSummary("", self._defaults.fallback_summary, ""), "empty thread")

        thread_id = thread_messages[0].thread_id
        link = self.link_for(thread_id)
        fallback = ThreadSummary(thread_id, self._defaults.fallback_summary, link)

        windowed = len(thread_messages) > WINDOW_THRESHOLD
        included = list(thread_messages[-WINDOW_SIZE:]) if windowed else list(thread_messages)
        original_size = max(m.size for m in thread_messages)

        try:
            prompt = build_thread_prompt(
                included,
                original_size=original_size,
                windowed=windowed,
                compression_level=compression_level,
                today=self._today or date.today(),
                user_email=user_identity,
                max_words=max_words_per_message,
                target_minutes=target_minutes,
            )
            text = self._completion.complete(
                model,
                style_guide or self._defaults.summary_prompt,
                prompt,
            )
        except Exception as e:
            logger.warning(f"Summary failed for thread {thread_id}: {e}")
            return Degraded(fallback, str(e))

        if not text or not text.strip():
            logger.warning(f"Empty summary for thread {thread_id}")
            return Degraded(fallback, "empty completion")

        return Ok(ThreadSummary(thread_id, f"{text.strip()}\n[open thread] {link}", link))
