"""Thread summarization pipeline and the digest job."""

from gmail_labeler.digest.aggregator import LabelAggregator, format_time_range, group_by_thread
from gmail_labeler.digest.assembler import DigestAssembler
from gmail_labeler.digest.collector import ThreadCollector, order_by_latest_activity
from gmail_labeler.digest.job import DigestJob, run_digest_job
from gmail_labeler.digest.models import LabelSummary, ThreadMessage, ThreadSummary
from gmail_labeler.digest.summarizer import ThreadSummarizer
from gmail_labeler.digest.text import derive_alias, format_date, truncate

__all__ = [
    "LabelAggregator",
    "format_time_range",
    "group_by_thread",
    "DigestAssembler",
    "ThreadCollector",
    "order_by_latest_activity",
    "DigestJob",
    "run_digest_job",
    "LabelSummary",
    "ThreadMessage",
    "ThreadSummary",
    "ThreadSummarizer",
    "derive_alias",
    "format_date",
    "truncate",
]
