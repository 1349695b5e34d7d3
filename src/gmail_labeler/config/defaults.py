"""Immutable default configuration injected into components."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from gmail_labeler import settings

CATCH_ALL_LABEL = "Other"
PROCESSED_LABEL = "processed"
API_KEY_PLACEHOLDER = "API_KEY"

COMPRESSION_LEVELS = ("detailed", "standard", "succinct", "very succinct")

DEFAULT_STYLE_GUIDE = (
    "You write short spoken briefings of email conversations for someone "
    "listening while driving. Use a calm, direct, conversational tone and skip "
    "pleasantries, signatures and quoted history. Call out anything urgent or "
    "time-sensitive first: deadlines, requests that need a reply, meetings, "
    "payments, security alerts. Never exceed one or two sentences per "
    "conversation, and write in plain text without markdown so it reads "
    "naturally aloud."
)

FALLBACK_SUMMARY = "A summary could not be generated for this conversation."

THREAD_LINK_TEMPLATE = "https://mail.google.com/mail/u/0/#all/{thread_id}"


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Defaults:
    """Everything a job needs that is not read from the config store."""

    labels: Mapping[str, str] = field(default_factory=lambda: _frozen({
        "Urgent": "Emails that need a reply or action within a day",
        "Work": "Emails related to work, projects, or colleagues",
        "Newsletters": "Newsletters, digests, and mailing lists",
        CATCH_ALL_LABEL: "Any other email",
    }))
    email_count: int = 10
    model: str = "gpt-4o"
    api_key: str = API_KEY_PLACEHOLDER
    resorting: bool = False
    style: str = "days"
    day_count: int = 1
    max_words: int = 500
    summary_days: int = 3
    summary_count: int = 20
    summary_time_minutes: int = 20
    summary_prompt: str = DEFAULT_STYLE_GUIDE
    summary_compression: str = "standard"
    catch_all_label: str = CATCH_ALL_LABEL
    processed_label: str = PROCESSED_LABEL
    fallback_summary: str = FALLBACK_SUMMARY
    thread_link_template: str = THREAD_LINK_TEMPLATE
    labels_table: str = settings.LABELS_SHEET_NAME
    parameters_table: str = settings.PARAMETERS_SHEET_NAME


DEFAULTS = Defaults()
