"""Digest job: summarize recently labeled mail and email the result."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from gmail_labeler.config.defaults import DEFAULTS, Defaults
from gmail_labeler.config.resolver import ConfigResolver
from gmail_labeler.config.store import ConfigStore
from gmail_labeler.digest.aggregator import LabelAggregator
from gmail_labeler.digest.assembler import DigestAssembler
from gmail_labeler.digest.collector import ThreadCollector
from gmail_labeler.digest.models import LabelSummary
from gmail_labeler.digest.summarizer import ThreadSummarizer
from gmail_labeler.gmail.provider import MailboxProvider
from gmail_labeler.llm import CompletionProvider, get_completion_provider

logger = logging.getLogger(__name__)


def listening_budget(total_minutes: int, label_count: int) -> int:
    """Whole minutes of listening time per label, never less than one."""
    if label_count <= 0:
        return total_minutes
    return max(1, total_minutes // label_count)


class DigestJob:
    """Runs collector, aggregator and assembler over every configured label.

    Labels are processed one at a time in definition order; the catch-all
    label is never summarized.

    Args:
        mailbox: Mailbox to read from and send with.
        store: Config store with label definitions and parameters.
        completion_factory: ``(model, api_key) -> CompletionProvider``.
        defaults: Default configuration.
        today: Date used in prompts and the digest title.
    """

    def __init__(
        self,
        mailbox: MailboxProvider,
        store: ConfigStore,
        completion_factory: Callable[[str, str], CompletionProvider] = get_completion_provider,
        defaults: Defaults = DEFAULTS,
        today: date | None = None,
    ):
        self._mailbox = mailbox
        self._resolver = ConfigResolver(store, defaults)
        self._completion_factory = completion_factory
        self._defaults = defaults
        self._today = today

    def _user_email(self) -> str:
        try:
            return self._mailbox.get_user_email()
        except Exception as e:
            logger.warning(f"Could not read the account address: {e}")
            return ""

    def run(self) -> str | None:
        """Build and send the digest; returns the body, or None when nothing ran."""
        user_email = self._user_email()
        labels = self._resolver.resolve_labels().value
        parameters = self._resolver.resolve_parameters(user_email).value

        if not parameters.api_key_configured:
            logger.error("API key not configured, skipping digest")
            return None

        label_names = [name for name in labels if name != self._defaults.catch_all_label]
        if not label_names:
            logger.info("No labels found")
            return None

        collector = ThreadCollector(self._mailbox)
        summarizer = ThreadSummarizer(
            self._completion_factory(parameters.model, parameters.api_key),
            self._defaults,
            today=self._today,
        )
        aggregator = LabelAggregator(summarizer)
        target_minutes = listening_budget(parameters.summary_time_minutes, len(label_names))
        assembler = DigestAssembler(self._mailbox, today=self._today)

        label_summaries: list[LabelSummary] = []
        total = 0
        for label_name in label_names:
            messages = collector.collect(
                label_name, parameters.summary_count, parameters.summary_days,
            ).value
            if not messages:
                continue
            total += len(messages)
            label_summaries.append(aggregator.aggregate(
                label_name,
                messages,
                model=parameters.model,
                compression_level=parameters.summary_compression,
                user_identity=user_email,
                max_words=parameters.max_words,
                style_guide=parameters.summary_prompt,
                target_minutes=target_minutes,
            ))

        body = assembler.assemble(label_summaries, total, parameters)
        subject = assembler.subject_for(total, parameters)
        assembler.dispatch(body, subject, parameters.summary_emails)
        logger.info("Email summary generation completed")
        return body


def run_digest_job(
    mailbox: MailboxProvider,
    store: ConfigStore,
    completion_factory: Callable[[str, str], CompletionProvider] = get_completion_provider,
    defaults: Defaults = DEFAULTS,
) -> str | None:
    """Outermost wrapper: any error is logged and the run simply ends."""
    try:
        return DigestJob(mailbox, store, completion_factory, defaults).run()
    except Exception:
        logger.exception("Error in digest job")
        return None
