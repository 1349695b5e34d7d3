"""One-shot email classification into user-defined labels."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from gmail_labeler.config.defaults import CATCH_ALL_LABEL
from gmail_labeler.llm.base import CompletionProvider
from gmail_labeler.result import Degraded, Ok, Result

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful email classifier."


def build_classification_prompt(
    subject: str,
    body: str,
    attachment_names: Sequence[str],
    label_definitions: Mapping[str, str],
) -> str:
    labels = ", ".join(label_definitions)
    definitions = "\n".join(f"{name}: {desc}" for name, desc in label_definitions.items())
    prompt = (
        f"Classify this email into one of these labels: {labels}. "
        "Return only the label, exactly as written, and nothing else.\n\n"
        f"Definitions:\n{definitions}\n\n"
        f"Subject: {subject}\n\n"
        f"Body: {body}\n\n"
    )
    if attachment_names:
        prompt += f"Attachments: {', '.join(attachment_names)}\n\n"
    return prompt + "Label:"


class Classifier:
    """Maps an email to one configured label, or the catch-all.

    Args:
        completion: Backend used for the classification call.
        catch_all: Label returned when nothing matches or the call fails.
    """

    def __init__(self, completion: CompletionProvider, catch_all: str = CATCH_ALL_LABEL):
        self._completion = completion
        self.catch_all = catch_all

    def classify(
        self,
        subject: str,
        body: str,
        attachment_names: Sequence[str],
        label_definitions: Mapping[str, str],
        model: str,
    ) -> Result[str]:
        prompt = build_classification_prompt(subject, body, attachment_names, label_definitions)
        try:
            token = self._completion.complete(model, SYSTEM_PROMPT, prompt).strip()
        except Exception as e:
            logger.warning(f"Error in classification, using {self.catch_all!r}: {e}")
            return Degraded(self.catch_all, str(e))

        if token in label_definitions:
            return Ok(token)

        logger.info(f"Unexpected label {token!r}, using {self.catch_all!r}")
        return Degraded(self.catch_all, f"unknown label {token!r}")
