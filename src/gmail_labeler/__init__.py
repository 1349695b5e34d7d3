"""Classify Gmail threads into user-defined labels and email digests of labeled mail."""

from gmail_labeler.digest.job import DigestJob, run_digest_job
from gmail_labeler.labeling.job import LabelingJob, run_labeling_job
from gmail_labeler.result import Degraded, Ok

__all__ = [
    "DigestJob",
    "run_digest_job",
    "LabelingJob",
    "run_labeling_job",
    "Degraded",
    "Ok",
]
