"""Parse Gmail API message payloads into Message objects."""

from __future__ import annotations

import base64
import re
from datetime import datetime, timezone

import dateutil.parser
from bs4 import BeautifulSoup

from gmail_labeler.gmail.models import Message


def parse_message(raw_message: dict) -> Message:
    """Extract a Message from a Gmail API message dict (format=full).

    Pure parsing, no network calls.
    """
    payload = raw_message.get("payload", {})
    headers = _extract_headers(payload)

    return Message(
        message_id=raw_message["id"],
        thread_id=raw_message.get("threadId", ""),
        subject=headers.get("subject", "(no subject)"),
        body_text=_extract_body(payload),
        sent_at=_parse_date(headers.get("date", ""), raw_message.get("internalDate")),
        sender=headers.get("from", ""),
        attachment_names=tuple(_attachment_names(payload)),
    )


def _extract_headers(payload: dict) -> dict[str, str]:
    return {
        h["name"].lower(): h["value"]
        for h in payload.get("headers", [])
    }


def _parse_date(date_header: str, internal_date: str | None) -> datetime:
    if date_header:
        try:
            parsed = dateutil.parser.parse(date_header)
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone()
        except (ValueError, OverflowError):
            pass
    if internal_date:
        return datetime.fromtimestamp(int(internal_date) / 1000, tz=timezone.utc).astimezone()
    return datetime.fromtimestamp(0, tz=timezone.utc)


def _extract_body(payload: dict) -> str:
    mime_type = payload.get("mimeType", "")

    if mime_type == "text/plain" and not payload.get("filename"):
        return _decode_body_data(payload)

    if mime_type.startswith("multipart/"):
        parts = payload.get("parts", [])
        for part in parts:
            if part.get("mimeType") == "text/plain" and not part.get("filename"):
                text = _decode_body_data(part)
                if text:
                    return text
        for part in parts:
            text = _extract_body(part)
            if text:
                return text

    if mime_type == "text/html":
        html = _decode_body_data(payload)
        return _strip_html(html) if html else ""

    return ""


def _decode_body_data(payload: dict) -> str:
    data = payload.get("body", {}).get("data", "")
    if not data:
        return ""
    try:
        return base64.urlsafe_b64decode(data).decode("utf-8", errors="replace")
    except (ValueError, TypeError):
        return ""


def _strip_html(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "head"]):
        tag.decompose()
    text = soup.get_text(separator=" ")
    return re.sub(r"\s+", " ", text).strip()


def _attachment_names(payload: dict) -> list[str]:
    names = []
    for part in payload.get("parts", []):
        if part.get("filename"):
            names.append(part["filename"])
        if part.get("parts"):
            names.extend(_attachment_names(part))
    return names
