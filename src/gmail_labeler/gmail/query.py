"""Gmail search query builder."""

from __future__ import annotations

from typing import Iterable


def build_query(
    labels: Iterable[str] = (),
    exclude_labels: Iterable[str] = (),
    newer_than_days: int | None = None,
    in_folder: str | None = None,
) -> str:
    """Construct a Gmail search query; every term is and'd.

    >>> build_query(labels=["Work"], newer_than_days=3)
    'label:Work newer_than:3d'
    """
    terms = []
    if in_folder:
        terms.append(_in(in_folder))
    terms.extend(_label(lbl) for lbl in labels)
    terms.extend(_exclude(_label(lbl)) for lbl in exclude_labels)
    if newer_than_days is not None:
        terms.append(_newer_than(newer_than_days))
    return " ".join(terms)


def _exclude(term: str) -> str:
    return f'-{term}'


def _label(label: str) -> str:
    # Gmail search matches user labels with spaces and slashes as hyphens.
    return f'label:{_escape_label(label)}'


def _escape_label(label: str) -> str:
    return "-".join(label.replace("/", "-").split())


def _in(folder_name: str) -> str:
    return f'in:{folder_name}'


def _newer_than(days: int) -> str:
    return f'newer_than:{days}d'
