"""Typed run parameters and the coercion rule for each recognized key."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable

from gmail_labeler.config.defaults import API_KEY_PLACEHOLDER, COMPRESSION_LEVELS, Defaults

logger = logging.getLogger(__name__)

STYLES = ("count", "days")


@dataclass(frozen=True)
class RunParameters:
    """A complete, defaulted set of run parameters."""

    email_count: int
    model: str
    api_key: str
    resorting: bool
    style: str
    day_count: int
    max_words: int
    summary_days: int
    summary_count: int
    summary_time_minutes: int
    summary_emails: tuple[str, ...]
    summary_prompt: str
    summary_compression: str

    @property
    def api_key_configured(self) -> bool:
        return bool(self.api_key) and self.api_key != API_KEY_PLACEHOLDER


def _as_int(raw: str, default: int) -> int:
    try:
        value = int(float(str(raw).strip()))
    except (TypeError, ValueError, OverflowError):
        return default
    return value if value > 0 else default


def _as_str(raw: str, default: str) -> str:
    text = str(raw)
    return text if text.strip() else default


def _as_flag(raw: str, default: bool) -> bool:
    text = str(raw).strip().upper()
    if not text:
        return default
    return text in ("T", "TRUE")


def _as_choice(choices: Iterable[str]) -> Callable[[str, str], str]:
    allowed = tuple(choices)

    def coerce(raw: str, default: str) -> str:
        text = " ".join(str(raw).lower().split())
        return text if text in allowed else default

    return coerce


def _as_addresses(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in str(raw).split(",") if part.strip())


# sheet key -> (RunParameters field, coercion rule)
_RULES: dict[str, tuple[str, Callable]] = {
    "emailCount": ("email_count", _as_int),
    "model": ("model", _as_str),
    "apiKey": ("api_key", _as_str),
    "resorting": ("resorting", _as_flag),
    "style": ("style", _as_choice(STYLES)),
    "dayCount": ("day_count", _as_int),
    "maxWords": ("max_words", _as_int),
    "summary_days": ("summary_days", _as_int),
    "summary_count": ("summary_count", _as_int),
    "summary_time_minutes": ("summary_time_minutes", _as_int),
    "summary_prompt": ("summary_prompt", _as_str),
    "summary_compression": ("summary_compression", _as_choice(COMPRESSION_LEVELS)),
}


def default_parameters(defaults: Defaults, user_email: str = "") -> RunParameters:
    """The parameter set used when nothing could be read."""
    return RunParameters(
        email_count=defaults.email_count,
        model=defaults.model,
        api_key=defaults.api_key,
        resorting=defaults.resorting,
        style=defaults.style,
        day_count=defaults.day_count,
        max_words=defaults.max_words,
        summary_days=defaults.summary_days,
        summary_count=defaults.summary_count,
        summary_time_minutes=defaults.summary_time_minutes,
        summary_emails=(user_email,) if user_email else (),
        summary_prompt=defaults.summary_prompt,
        summary_compression=defaults.summary_compression,
    )


def parse_parameters(
    rows: Iterable[tuple[str, str]],
    defaults: Defaults,
    user_email: str = "",
) -> RunParameters:
    """Build RunParameters from raw ``(name, value)`` rows.

    Unknown keys are ignored. A recognized key that is missing or does not
    coerce falls back to its default, so the result is always complete.
    """
    values = {}
    addresses: tuple[str, ...] = ()
    for name, raw in rows:
        if name == "summary_emails":
            addresses = _as_addresses(raw)
            continue
        rule = _RULES.get(name)
        if rule is None:
            logger.debug(f"Ignoring unknown parameter {name!r}")
            continue
        field_name, coerce = rule
        values[field_name] = coerce(raw, getattr(defaults, field_name))

    if not addresses and user_email:
        addresses = (user_email,)

    base = default_parameters(defaults, user_email)
    return replace(base, summary_emails=addresses, **values)
