"""Tests for run parameter coercion."""

import pytest

from gmail_labeler.config.defaults import DEFAULTS, DEFAULT_STYLE_GUIDE
from gmail_labeler.config.parameters import default_parameters, parse_parameters


def test_empty_rows_give_complete_defaults():
    params = parse_parameters([], DEFAULTS, "me@example.com")
    assert params.email_count == 10
    assert params.model == "gpt-4o"
    assert params.resorting is False
    assert params.style == "days"
    assert params.day_count == 1
    assert params.max_words == 500
    assert params.summary_days == 3
    assert params.summary_count == 20
    assert params.summary_time_minutes == 20
    assert params.summary_emails == ("me@example.com",)
    assert params.summary_prompt == DEFAULT_STYLE_GUIDE
    assert params.summary_compression == "standard"
    assert params.api_key_configured is False


def test_numeric_values_are_parsed():
    params = parse_parameters(
        [("emailCount", "25"), ("summary_days", "7"), ("maxWords", "10.0")],
        DEFAULTS,
    )
    assert params.email_count == 25
    assert params.summary_days == 7
    assert params.max_words == 10


def test_non_numeric_falls_back_to_key_default():
    params = parse_parameters(
        [("emailCount", "lots"), ("dayCount", "0"), ("summary_time_minutes", "-5")],
        DEFAULTS,
    )
    assert params.email_count == 10
    assert params.day_count == 1
    assert params.summary_time_minutes == 20


@pytest.mark.parametrize("raw", ["inf", "-inf", "1e400", "nan", "-3", "0.4"])
def test_extreme_numbers_fall_back_to_key_default(raw):
    params = parse_parameters(
        [("apiKey", "sk-real"), ("summary_days", raw), ("model", "gpt-4o-mini")],
        DEFAULTS,
    )
    assert params.summary_days == 3
    assert params.api_key == "sk-real"
    assert params.model == "gpt-4o-mini"


def test_strings_pass_through_verbatim():
    params = parse_parameters(
        [("model", "claude-haiku-4-5"), ("apiKey", "sk-abc"), ("summary_prompt", "Be brief.")],
        DEFAULTS,
    )
    assert params.model == "claude-haiku-4-5"
    assert params.api_key == "sk-abc"
    assert params.api_key_configured is True
    assert params.summary_prompt == "Be brief."


def test_flags_and_choices():
    params = parse_parameters(
        [("resorting", "t"), ("style", "COUNT"), ("summary_compression", "Very  Succinct")],
        DEFAULTS,
    )
    assert params.resorting is True
    assert params.style == "count"
    assert params.summary_compression == "very succinct"


def test_invalid_choices_use_defaults():
    params = parse_parameters(
        [("resorting", "maybe"), ("style", "weekly"), ("summary_compression", "tiny")],
        DEFAULTS,
    )
    assert params.resorting is False
    assert params.style == "days"
    assert params.summary_compression == "standard"


def test_summary_emails_split_and_stripped():
    params = parse_parameters(
        [("summary_emails", " a@example.com, ,b@example.com ,not-an-address")],
        DEFAULTS,
        "me@example.com",
    )
    assert params.summary_emails == ("a@example.com", "b@example.com", "not-an-address")


def test_unknown_keys_are_ignored():
    params = parse_parameters([("colour", "blue")], DEFAULTS)
    assert params == default_parameters(DEFAULTS)


def test_placeholder_key_is_unconfigured():
    params = parse_parameters([("apiKey", "API_KEY")], DEFAULTS)
    assert params.api_key_configured is False
