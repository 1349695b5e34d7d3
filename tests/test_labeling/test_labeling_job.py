"""Tests for the inbox labeling job."""

import os
import time

import pytest

from gmail_labeler.config.defaults import DEFAULTS
from gmail_labeler.config.store import InMemoryConfigStore
from gmail_labeler.labeling.job import LOCK_NAME, LabelingJob, run_labeling_job, single_flight

LABELS = [("dogs", "About dogs"), ("cats", "About cats"), ("god", "About deities"), ("Other", "Any other email")]


def _store(**parameters):
    params = {"apiKey": "sk-test", **parameters}
    return InMemoryConfigStore({
        DEFAULTS.labels_table: LABELS,
        DEFAULTS.parameters_table: list(params.items()),
    })


def _factory(completion):
    return lambda model, api_key: completion


def test_unseen_thread_is_labeled_and_processed(fake_mailbox, make_thread, fake_completion):
    mailbox = fake_mailbox([make_thread("t1", 2, labels=["INBOX"])])
    report = LabelingJob(mailbox, _store(), _factory(fake_completion("dogs"))).run()

    assert report.labeled == {"t1": "dogs"}
    assert mailbox.labels["t1"] == {"INBOX", "dogs", "processed"}


def test_unmatched_thread_gets_catch_all(fake_mailbox, make_thread, fake_completion):
    mailbox = fake_mailbox([make_thread("t1", 1, labels=["INBOX"])])
    LabelingJob(mailbox, _store(), _factory(fake_completion("Sports"))).run()
    assert mailbox.labels["t1"] == {"INBOX", "Other", "processed"}


def test_classifies_latest_message(fake_mailbox, make_thread, fake_completion):
    completion = fake_completion("dogs")
    mailbox = fake_mailbox([make_thread("t1", 3, labels=["INBOX"])])
    LabelingJob(mailbox, _store(), _factory(completion)).run()
    prompt = completion.calls[0]["user"]
    assert "Body of message 3 in t1" in prompt
    assert "Body of message 1 in t1" not in prompt


def test_rerun_without_resort_is_idempotent(fake_mailbox, make_thread, fake_completion):
    mailbox = fake_mailbox([make_thread("t1", 1, labels=["INBOX"])])
    LabelingJob(mailbox, _store(), _factory(fake_completion("dogs"))).run()
    after_first = set(mailbox.labels["t1"])

    completion = fake_completion("cats")
    report = LabelingJob(mailbox, _store(), _factory(completion)).run()

    assert mailbox.labels["t1"] == after_first
    assert report.skipped == ["t1"]
    assert completion.calls == []


def test_resort_moves_thread_to_new_label(fake_mailbox, make_thread, fake_completion):
    mailbox = fake_mailbox([make_thread("t1", 1, labels=["INBOX", "dogs", "processed", "Starred-ish"])])
    LabelingJob(mailbox, _store(resorting="T"), _factory(fake_completion("cats"))).run()

    labels = mailbox.labels["t1"]
    assert "cats" in labels
    assert "dogs" not in labels
    assert "processed" in labels
    assert "Starred-ish" in labels


def test_resort_keeps_stale_labels(fake_mailbox, make_thread, fake_completion):
    mailbox = fake_mailbox([make_thread("t1", 1, labels=["INBOX", "ferrets", "processed"])])
    LabelingJob(mailbox, _store(resorting="T"), _factory(fake_completion("cats"))).run()
    assert mailbox.labels["t1"] == {"INBOX", "ferrets", "cats", "processed"}


def test_style_controls_query(fake_mailbox, fake_completion):
    mailbox = fake_mailbox()
    LabelingJob(mailbox, _store(style="days", dayCount="2", emailCount="7"), _factory(fake_completion())).run()
    LabelingJob(mailbox, _store(style="count", emailCount="4"), _factory(fake_completion())).run()
    assert mailbox.queries == [("in:inbox newer_than:2d", 7), ("in:inbox", 4)]


def test_body_truncated_to_max_words(fake_mailbox, make_message, fake_completion):
    from gmail_labeler.gmail.models import MailThread

    message = make_message("t1", 1, body="one two three four five six")
    mailbox = fake_mailbox([MailThread("t1", (message,), frozenset({"INBOX"}))])
    completion = fake_completion("dogs")
    LabelingJob(mailbox, _store(maxWords="3"), _factory(completion)).run()
    assert "Body: one two three..." in completion.calls[0]["user"]


def test_modify_failure_continues_with_next_thread(fake_mailbox, make_thread, fake_completion):
    mailbox = fake_mailbox([make_thread("t1", 1, labels=["INBOX"]), make_thread("t2", 1, labels=["INBOX"])])
    mailbox.modify_error_for = {"t1"}
    report = LabelingJob(mailbox, _store(), _factory(fake_completion("dogs", "cats"))).run()
    assert report.failed == ["t1"]
    assert report.labeled == {"t2": "cats"}


def test_unconfigured_api_key_does_nothing(fake_mailbox, make_thread, fake_completion):
    mailbox = fake_mailbox([make_thread("t1", 1, labels=["INBOX"])])
    store = InMemoryConfigStore({DEFAULTS.labels_table: LABELS})
    report = LabelingJob(mailbox, store, _factory(fake_completion("dogs"))).run()
    assert report.labeled == {}
    assert mailbox.queries == []


def test_run_wrapper_respects_lock(tmp_path, fake_mailbox, make_thread, fake_completion):
    mailbox = fake_mailbox([make_thread("t1", 1, labels=["INBOX"])])
    (tmp_path / LOCK_NAME).write_text("12345")
    result = run_labeling_job(mailbox, _store(), _factory(fake_completion("dogs")), lock_dir=tmp_path)
    assert result is None
    assert mailbox.modify_calls == []


def test_run_wrapper_releases_lock(tmp_path, fake_mailbox, make_thread, fake_completion):
    mailbox = fake_mailbox([make_thread("t1", 1, labels=["INBOX"])])
    report = run_labeling_job(mailbox, _store(), _factory(fake_completion("dogs")), lock_dir=tmp_path)
    assert report.labeled == {"t1": "dogs"}
    assert not (tmp_path / LOCK_NAME).exists()


def test_run_wrapper_swallows_errors(tmp_path, fake_mailbox):
    def broken_factory(model, api_key):
        raise RuntimeError("no backend")

    assert run_labeling_job(fake_mailbox(), _store(), broken_factory, lock_dir=tmp_path) is None
    assert not (tmp_path / LOCK_NAME).exists()


def test_stale_lock_is_taken_over(tmp_path):
    lock = tmp_path / LOCK_NAME
    lock.write_text("999")
    old = time.time() - 7200
    os.utime(lock, (old, old))
    with single_flight(lock, stale_after=3600) as acquired:
        assert acquired is True


def test_second_holder_is_refused(tmp_path):
    lock = tmp_path / LOCK_NAME
    with single_flight(lock) as first:
        with single_flight(lock) as second:
            assert first is True
            assert second is False
    assert not lock.exists()
