"""Assembles the digest body and sends it to the configured recipients."""

from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from gmail_labeler.config.parameters import RunParameters
from gmail_labeler.digest.models import LabelSummary
from gmail_labeler.digest.text import format_date
from gmail_labeler.gmail.provider import MailboxProvider
from gmail_labeler.result import Degraded, Ok, Result

logger = logging.getLogger(__name__)

NO_EMAILS_NOTICE = "no new emails found in the specified time period."


class DigestAssembler:
    """Formats LabelSummaries into one plain-text digest and dispatches it.

    Args:
        mailbox: Used to send the digest.
        today: Date in the title; defaults to the current date at call time.
    """

    def __init__(self, mailbox: MailboxProvider, today: date | None = None):
        self._mailbox = mailbox
        self._today = today

    def assemble(
        self,
        label_summaries: Sequence[LabelSummary],
        total_email_count: int,
        parameters: RunParameters,
    ) -> str:
        today = self._today or date.today()
        lines = [
            f"EMAIL SUMMARY - {format_date(today)}",
            "",
            "OVERVIEW:",
            f"total emails: {total_email_count}",
            f"time period: last {parameters.summary_days} days",
            f"target listening time: {parameters.summary_time_minutes} minutes",
            "",
        ]

        if total_email_count == 0:
            lines.append(NO_EMAILS_NOTICE)
            return "\n".join(lines) + "\n"

        for summary in label_summaries:
            lines.append(
                f"{summary.label_name}: {summary.email_count} emails "
                f"({summary.time_range_description})"
            )
        lines.extend(["", "DETAILED SUMMARIES:", ""])

        for summary in label_summaries:
            lines.append(_section(summary))
            lines.append("")

        return "\n".join(lines)

    def subject_for(self, total_email_count: int, parameters: RunParameters) -> str:
        return (
            f"AI email summary - {total_email_count} emails from last "
            f"{parameters.summary_days} days"
        )

    def dispatch(self, body: str, subject: str, recipients: Sequence[str]) -> Result[list[str]]:
        """Send ``body`` to every address containing ``@``.

        Invalid addresses and failed sends are logged and skipped.
        """
        if not recipients:
            logger.warning("No summary recipients configured, digest not sent")
            return Degraded([], "no recipients")

        sent: list[str] = []
        skipped: list[str] = []
        for address in recipients:
            address = address.strip()
            if "@" not in address:
                logger.warning(f"Skipping invalid recipient address {address!r}")
                skipped.append(address)
                continue
            try:
                self._mailbox.send_message(address, subject, body)
            except Exception as e:
                logger.error(f"Failed to send summary to {address}: {e}")
                skipped.append(address)
                continue
            logger.info(f"Summary sent to: {address}")
            sent.append(address)

        if skipped:
            return Degraded(sent, f"skipped recipients: {', '.join(skipped)}")
        return Ok(sent)


def _section(summary: LabelSummary) -> str:
    header = (
        f"--- {summary.label_name.upper()} ({summary.email_count} emails, "
        f"{summary.time_range_description}) ---"
    )
    body = "\n\n".join(ts.text for ts in summary.thread_summaries)
    return f"{header}\n{body}"
