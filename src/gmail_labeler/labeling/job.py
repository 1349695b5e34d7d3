"""Inbox labeling job: classify unprocessed threads and tag them."""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator

from gmail_labeler import settings
from gmail_labeler.config.defaults import DEFAULTS, Defaults
from gmail_labeler.config.parameters import RunParameters
from gmail_labeler.config.resolver import ConfigResolver
from gmail_labeler.config.store import ConfigStore
from gmail_labeler.digest.text import truncate
from gmail_labeler.gmail.models import MailThread
from gmail_labeler.gmail.provider import MailboxProvider
from gmail_labeler.gmail.query import build_query
from gmail_labeler.labeling.classifier import Classifier
from gmail_labeler.llm import CompletionProvider, get_completion_provider

logger = logging.getLogger(__name__)

LOCK_NAME = "gmail-labeler-labeling.lock"
STALE_LOCK_SECONDS = 3600


@dataclass
class LabelingReport:
    """Per-run outcome: thread id -> applied label, plus skipped and failed ids."""

    labeled: dict[str, str] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


@contextmanager
def single_flight(lock_path: Path, stale_after: float = STALE_LOCK_SECONDS) -> Iterator[bool]:
    """Exclusive lock file; yields False when another run holds it.

    A lock older than ``stale_after`` seconds is assumed abandoned and taken over.
    """
    try:
        if time.time() - lock_path.stat().st_mtime > stale_after:
            logger.warning(f"Removing stale lock {lock_path}")
            lock_path.unlink()
    except FileNotFoundError:
        pass

    try:
        fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
    except FileExistsError:
        yield False
        return

    try:
        os.write(fd, str(os.getpid()).encode())
        os.close(fd)
        yield True
    finally:
        try:
            lock_path.unlink()
        except FileNotFoundError:
            pass


class LabelingJob:
    """Classifies inbox threads and applies labels.

    A thread already carrying the processed marker is skipped unless the
    ``resorting`` parameter is on; in that case labels from the current
    definitions are stripped and the thread is classified again.

    Args:
        mailbox: Mailbox to read and tag.
        store: Config store with label definitions and parameters.
        completion_factory: ``(model, api_key) -> CompletionProvider``.
        defaults: Default configuration.
    """

    def __init__(
        self,
        mailbox: MailboxProvider,
        store: ConfigStore,
        completion_factory: Callable[[str, str], CompletionProvider] = get_completion_provider,
        defaults: Defaults = DEFAULTS,
    ):
        self._mailbox = mailbox
        self._resolver = ConfigResolver(store, defaults)
        self._completion_factory = completion_factory
        self._defaults = defaults

    def run(self) -> LabelingReport:
        report = LabelingReport()
        labels = self._resolver.resolve_labels().value
        parameters = self._resolver.resolve_parameters().value

        logger.info(f"Using label config: {sorted(labels)}")
        logger.info(
            f"Using parameters: style={parameters.style} emailCount={parameters.email_count} "
            f"dayCount={parameters.day_count} resorting={parameters.resorting} model={parameters.model}"
        )

        if not parameters.api_key_configured:
            logger.error("API key not configured, nothing to do")
            return report

        classifier = Classifier(
            self._completion_factory(parameters.model, parameters.api_key),
            catch_all=self._defaults.catch_all_label,
        )

        try:
            threads = self._fetch_threads(parameters)
        except Exception as e:
            logger.error(f"Error fetching inbox threads: {e}")
            return report

        for thread in threads:
            self._process_thread(thread, labels, parameters, classifier, report)

        logger.info(
            f"Labeling finished: {len(report.labeled)} labeled, "
            f"{len(report.skipped)} skipped, {len(report.failed)} failed"
        )
        return report

    def _fetch_threads(self, parameters: RunParameters) -> list[MailThread]:
        newer_than = parameters.day_count if parameters.style == "days" else None
        query = build_query(in_folder="inbox", newer_than_days=newer_than)
        return self._mailbox.search_threads(query, parameters.email_count)

    def _process_thread(
        self,
        thread: MailThread,
        labels: dict[str, str],
        parameters: RunParameters,
        classifier: Classifier,
        report: LabelingReport,
    ) -> None:
        processed = self._defaults.processed_label
        latest = thread.latest
        if latest is None:
            report.skipped.append(thread.thread_id)
            return
        if processed in thread.label_names and not parameters.resorting:
            report.skipped.append(thread.thread_id)
            return

        body, _ = truncate(latest.body_text, parameters.max_words)
        label = classifier.classify(
            latest.subject, body, latest.attachment_names, labels, parameters.model,
        ).value

        to_remove: list[str] = []
        if parameters.resorting:
            # Only labels in the current definitions; stale ones stay put.
            to_remove = sorted(
                name for name in thread.label_names
                if name in labels and name != label
            )

        try:
            self._mailbox.modify_thread_labels(
                thread.thread_id, add=[label, processed], remove=to_remove,
            )
        except Exception as e:
            logger.error(f"Error labeling thread {thread.thread_id}: {e}")
            report.failed.append(thread.thread_id)
            return

        logger.info(f'Subject: "{latest.subject}" -> Chosen Label: "{label}"')
        report.labeled[thread.thread_id] = label


def run_labeling_job(
    mailbox: MailboxProvider,
    store: ConfigStore,
    completion_factory: Callable[[str, str], CompletionProvider] = get_completion_provider,
    defaults: Defaults = DEFAULTS,
    lock_dir: Path = settings.LOCK_DIR,
) -> LabelingReport | None:
    """Outermost wrapper: one run at a time, and nothing escapes."""
    try:
        with single_flight(Path(lock_dir) / LOCK_NAME) as acquired:
            if not acquired:
                logger.warning("Another labeling run is in progress, skipping")
                return None
            return LabelingJob(mailbox, store, completion_factory, defaults).run()
    except Exception:
        logger.exception("Error in labeling job")
        return None
