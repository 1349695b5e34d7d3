"""Shared fixtures: in-memory mailbox and completion fakes."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from gmail_labeler.exceptions import (
    CompletionTransportError,
    MailboxFetchError,
    MailboxSendError,
)
from gmail_labeler.gmail.models import MailThread, Message
from gmail_labeler.gmail.provider import MailboxProvider
from gmail_labeler.gmail.query import _escape_label
from gmail_labeler.llm.base import CompletionProvider

BASE_TIME = datetime(2026, 10, 12, 9, 0, tzinfo=timezone.utc)
USER_EMAIL = "jane.doe@example.com"


class FakeMailbox(MailboxProvider):
    """Threads held in memory; label state is mutable like a real mailbox."""

    def __init__(self, threads=(), user_email=USER_EMAIL):
        self.threads = {t.thread_id: t for t in threads}
        self.labels = {t.thread_id: set(t.label_names) for t in threads}
        self.user_email = user_email
        self.queries = []
        self.modify_calls = []
        self.sent = []
        self.search_error = None
        self.modify_error_for = set()
        self.send_error_for = set()

    def search_threads(self, query, max_results):
        self.queries.append((query, max_results))
        if self.search_error is not None:
            raise self.search_error
        wanted = [term[len("label:"):] for term in query.split() if term.startswith("label:")]
        found = []
        for thread_id, thread in self.threads.items():
            escaped = {_escape_label(name) for name in self.labels[thread_id]}
            if all(w in escaped for w in wanted):
                found.append(replace(thread, label_names=frozenset(self.labels[thread_id])))
        return found[:max_results]

    def modify_thread_labels(self, thread_id, add=(), remove=()):
        add, remove = list(add), list(remove)
        self.modify_calls.append((thread_id, add, remove))
        if thread_id in self.modify_error_for:
            raise MailboxFetchError(f"cannot modify {thread_id}")
        self.labels[thread_id].update(add)
        self.labels[thread_id].difference_update(remove)

    def send_message(self, to, subject, body_plain, body_html=None):
        if to in self.send_error_for:
            raise MailboxSendError(f"cannot send to {to}")
        self.sent.append((to, subject, body_plain))

    def get_user_email(self):
        return self.user_email


class FakeCompletion(CompletionProvider):
    """Replays canned responses in order; an Exception instance is raised instead."""

    def __init__(self, *responses, default="A short summary."):
        self.responses = list(responses)
        self.default = default
        self.calls = []

    def complete(self, model, system_prompt, user_prompt):
        self.calls.append({"model": model, "system": system_prompt, "user": user_prompt})
        response = self.responses.pop(0) if self.responses else self.default
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def make_message():
    def _make(thread_id, index, sent_at=None, subject=None, body=None,
              sender="alice@example.com", attachments=()):
        return Message(
            message_id=f"{thread_id}-m{index}",
            thread_id=thread_id,
            subject=subject or f"Subject {thread_id}",
            body_text=body if body is not None else f"Body of message {index} in {thread_id}",
            sent_at=sent_at or BASE_TIME + timedelta(hours=index),
            sender=sender,
            attachment_names=tuple(attachments),
        )
    return _make


@pytest.fixture
def make_thread(make_message):
    def _make(thread_id, size, start=None, labels=(), step=timedelta(hours=1)):
        start = start or BASE_TIME
        messages = tuple(
            make_message(thread_id, i, sent_at=start + step * (i - 1))
            for i in range(1, size + 1)
        )
        return MailThread(thread_id=thread_id, messages=messages, label_names=frozenset(labels))
    return _make


@pytest.fixture
def fake_mailbox():
    return FakeMailbox


@pytest.fixture
def fake_completion():
    return FakeCompletion


@pytest.fixture
def transport_error():
    return CompletionTransportError("connection reset")
