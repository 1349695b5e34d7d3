"""Inbox classification and labeling."""

from gmail_labeler.labeling.classifier import Classifier, build_classification_prompt
from gmail_labeler.labeling.job import LabelingJob, LabelingReport, run_labeling_job, single_flight

__all__ = [
    "Classifier",
    "build_classification_prompt",
    "LabelingJob",
    "LabelingReport",
    "run_labeling_job",
    "single_flight",
]
