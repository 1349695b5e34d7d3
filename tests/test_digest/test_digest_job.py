"""End-to-end tests for the digest job with in-memory collaborators."""

from datetime import date, timedelta

import pytest

from gmail_labeler.config.defaults import DEFAULTS, FALLBACK_SUMMARY
from gmail_labeler.config.store import InMemoryConfigStore
from gmail_labeler.digest.assembler import NO_EMAILS_NOTICE
from gmail_labeler.digest.job import DigestJob, listening_budget, run_digest_job
from gmail_labeler.exceptions import CompletionTransportError

TODAY = date(2026, 10, 19)


def _store(labels=None, **parameters):
    params = {"apiKey": "sk-test", **parameters}
    return InMemoryConfigStore({
        DEFAULTS.labels_table: labels if labels is not None else [
            ("dogs", "Emails about dogs"),
            ("cats", "Emails about cats"),
            ("Other", "Any other email"),
        ],
        DEFAULTS.parameters_table: list(params.items()),
    })


@pytest.fixture
def factory(fake_completion):
    created = []

    def _factory(model, api_key):
        completion = fake_completion(default=f"Summary from {model}.")
        created.append((model, api_key, completion))
        return completion

    _factory.created = created
    return _factory


def test_digest_sent_with_label_sections(fake_mailbox, make_thread, factory):
    base = make_thread("x", 1).messages[0].sent_at
    mailbox = fake_mailbox([
        make_thread("d1", 2, labels=["dogs"]),
        make_thread("c1", 1, labels=["cats"], start=base + timedelta(days=1)),
        make_thread("o1", 1, labels=["Other"]),
    ])
    body = DigestJob(mailbox, _store(summary_emails="boss@example.com"), factory, today=TODAY).run()

    assert "total emails: 3" in body
    assert body.index("--- DOGS (2 emails") < body.index("--- CATS (1 emails")
    assert "OTHER" not in body
    assert "Summary from gpt-4o." in body
    assert [q for q, _ in mailbox.queries] == ["label:dogs newer_than:3d", "label:cats newer_than:3d"]
    assert mailbox.sent == [("boss@example.com", "AI email summary - 3 emails from last 3 days", body)]
    assert factory.created[0][:2] == ("gpt-4o", "sk-test")


def test_default_recipient_is_current_user(fake_mailbox, make_thread, factory):
    mailbox = fake_mailbox([make_thread("d1", 1, labels=["dogs"])])
    DigestJob(mailbox, _store(), factory, today=TODAY).run()
    assert [to for to, _, _ in mailbox.sent] == ["jane.doe@example.com"]


def test_no_emails_still_sends_notice(fake_mailbox, factory):
    mailbox = fake_mailbox()
    body = DigestJob(mailbox, _store(), factory, today=TODAY).run()
    assert "total emails: 0" in body
    assert NO_EMAILS_NOTICE in body
    assert "---" not in body
    assert len(mailbox.sent) == 1


def test_summary_count_caps_each_label(fake_mailbox, make_thread, factory):
    mailbox = fake_mailbox([make_thread("d1", 4, labels=["dogs"]), make_thread("d2", 4, labels=["dogs"])])
    body = DigestJob(mailbox, _store(summary_count="5"), factory, today=TODAY).run()
    assert "--- DOGS (5 emails" in body


def test_failed_summary_degrades_single_thread(fake_mailbox, make_thread, fake_completion):
    completion = fake_completion(CompletionTransportError("timeout"), "Second is fine.")
    mailbox = fake_mailbox([
        make_thread("d1", 1, labels=["dogs"]),
        make_thread("d2", 1, labels=["dogs"]),
    ])
    body = DigestJob(mailbox, _store(), lambda m, k: completion, today=TODAY).run()
    assert FALLBACK_SUMMARY in body
    assert "Second is fine." in body


def test_unconfigured_api_key_skips_run(fake_mailbox, make_thread, factory):
    mailbox = fake_mailbox([make_thread("d1", 1, labels=["dogs"])])
    store = InMemoryConfigStore({DEFAULTS.labels_table: [("dogs", "d")], DEFAULTS.parameters_table: []})
    assert DigestJob(mailbox, store, factory, today=TODAY).run() is None
    assert mailbox.sent == []
    assert factory.created == []


def test_only_catch_all_label_skips_run(fake_mailbox, factory):
    mailbox = fake_mailbox()
    assert DigestJob(mailbox, _store(labels=[("Other", "Any")]), factory, today=TODAY).run() is None
    assert mailbox.sent == []


def test_wrapper_swallows_unexpected_errors(fake_mailbox):
    def broken_factory(model, api_key):
        raise RuntimeError("no backend")

    mailbox = fake_mailbox()
    assert run_digest_job(mailbox, _store(), broken_factory) is None
    assert mailbox.sent == []


def test_listening_time_split_across_labels(fake_mailbox, make_thread, fake_completion):
    completion = fake_completion()
    mailbox = fake_mailbox([make_thread("d1", 1, labels=["dogs"])])
    DigestJob(mailbox, _store(summary_time_minutes="30"), lambda m, k: completion, today=TODAY).run()
    assert "Target duration: about 15 minutes" in completion.calls[0]["user"]


@pytest.mark.parametrize("total, count, expected", [(20, 2, 10), (20, 3, 6), (2, 5, 1), (20, 0, 20)])
def test_listening_budget(total, count, expected):
    assert listening_budget(total, count) == expected
