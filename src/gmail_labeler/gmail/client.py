"""Gmail API implementation of the mailbox provider."""

from __future__ import annotations

import base64
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
import logging
from typing import Iterable

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from gmail_labeler.exceptions import (
    MailboxFetchError,
    MailboxModifyError,
    MailboxSendError,
)
from gmail_labeler.gmail.models import MailThread
from gmail_labeler.gmail.parser import parse_message
from gmail_labeler.gmail.provider import MailboxProvider

logger = logging.getLogger(__name__)

_PAGE_SIZE = 100


class GmailMailbox(MailboxProvider):
    """Thread-level access to a Gmail account.

    Args:
        credentials: A google.oauth2.credentials.Credentials object with the
            gmail.modify and gmail.send scopes.
        user_id: Gmail user id, ``'me'`` for the authenticated account.
    """

    def __init__(self, credentials, user_id: str = 'me') -> None:
        self.creds = credentials
        self.user_id = user_id
        self._service = build('gmail', 'v1', credentials=credentials, cache_discovery=False)
        self._labels_by_name: dict[str, str] | None = None

    @property
    def service(self) -> 'googleapiclient.discovery.Resource':
        if self.creds.expired and self.creds.refresh_token:
            from google.auth.transport.requests import Request
            self.creds.refresh(Request())
        return self._service

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def search_threads(self, query: str, max_results: int) -> list[MailThread]:
        try:
            thread_ids = self._list_thread_ids(query, max_results)
            logger.info(f"Query {query!r} matched {len(thread_ids)} threads")
            names_by_id = {v: k for k, v in self._label_ids().items()}
            return [self._get_thread(thread_id, names_by_id) for thread_id in thread_ids]
        except HttpError as e:
            raise MailboxFetchError(f"Failed to search threads for {query!r}: {e}") from e

    def _list_thread_ids(self, query: str, max_results: int) -> list[str]:
        ids: list[str] = []
        page_token = None

        while len(ids) < max_results:
            kwargs: dict = {
                'userId': self.user_id,
                'q': query,
                'maxResults': min(max_results - len(ids), _PAGE_SIZE),
            }
            if page_token:
                kwargs['pageToken'] = page_token

            response = self.service.users().threads().list(**kwargs).execute()
            threads = response.get('threads', [])
            if not threads:
                break

            ids.extend(t['id'] for t in threads)
            page_token = response.get('nextPageToken')
            if not page_token:
                break

        return ids[:max_results]

    def _get_thread(self, thread_id: str, names_by_id: dict[str, str]) -> MailThread:
        raw = self.service.users().threads().get(
            userId=self.user_id, id=thread_id, format='full',
        ).execute()
        raw_messages = raw.get('messages', [])

        label_ids: set[str] = set()
        for msg in raw_messages:
            label_ids.update(msg.get('labelIds', []))

        return MailThread(
            thread_id=raw.get('id', thread_id),
            messages=tuple(parse_message(msg) for msg in raw_messages),
            label_names=frozenset(names_by_id.get(x, x) for x in label_ids),
        )

    def get_user_email(self) -> str:
        try:
            profile = self.service.users().getProfile(userId=self.user_id).execute()
        except HttpError as e:
            raise MailboxFetchError(f"Failed to read profile: {e}") from e
        return profile.get('emailAddress', '')

    # -------------------------------------------------------------------------
    # Labels
    # -------------------------------------------------------------------------

    def _label_ids(self) -> dict[str, str]:
        if self._labels_by_name is None:
            res = self.service.users().labels().list(userId=self.user_id).execute()
            self._labels_by_name = {x['name']: x['id'] for x in res.get('labels', [])}
        return self._labels_by_name

    def _get_or_create_label(self, name: str) -> str:
        labels = self._label_ids()
        if name in labels:
            return labels[name]
        body = {
            'name': name,
            'labelListVisibility': 'labelShow',
            'messageListVisibility': 'show',
        }
        res = self.service.users().labels().create(userId=self.user_id, body=body).execute()
        logger.info(f"Created label {name!r}")
        labels[res['name']] = res['id']
        return res['id']

    def modify_thread_labels(
        self,
        thread_id: str,
        add: Iterable[str] = (),
        remove: Iterable[str] = (),
    ) -> None:
        try:
            add_ids = [self._get_or_create_label(name) for name in add]
            known = self._label_ids()
            remove_ids = [known[name] for name in remove if name in known]
            if not add_ids and not remove_ids:
                return
            self.service.users().threads().modify(
                userId=self.user_id,
                id=thread_id,
                body={'addLabelIds': add_ids, 'removeLabelIds': remove_ids},
            ).execute()
        except HttpError as e:
            raise MailboxModifyError(f"Failed to modify labels on thread {thread_id}: {e}") from e

    # -------------------------------------------------------------------------
    # Sending
    # -------------------------------------------------------------------------

    def send_message(
        self,
        to: str,
        subject: str,
        body_plain: str,
        body_html: str | None = None,
    ) -> None:
        msg = _create_message(to, subject, body_plain, body_html)
        try:
            self.service.users().messages().send(userId=self.user_id, body=msg).execute()
        except HttpError as e:
            raise MailboxSendError(f"Failed to send message to {to}: {e}") from e


def _create_message(
    to: str,
    subject: str,
    msg_plain: str,
    msg_html: str | None = None,
) -> dict:
    msg = MIMEMultipart('alternative')
    msg['To'] = to
    msg['Subject'] = subject

    msg.attach(MIMEText(msg_plain, 'plain'))
    if msg_html:
        msg.attach(MIMEText(msg_html, 'html'))

    return {
        'raw': base64.urlsafe_b64encode(msg.as_string().encode()).decode()
    }
