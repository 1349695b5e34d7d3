"""Gmail mailbox access.

Heavy imports are deferred. Use explicit imports:
    from gmail_labeler.gmail.client import GmailMailbox
    from gmail_labeler.gmail.auth import load_credentials
"""

# Light imports only (no Google client deps)
from gmail_labeler.gmail.models import MailThread, Message
from gmail_labeler.gmail.provider import MailboxProvider
from gmail_labeler.gmail.query import build_query


def __getattr__(name):
    """Lazy imports for classes that require the Google client libraries."""
    if name == "GmailMailbox":
        from gmail_labeler.gmail.client import GmailMailbox
        return GmailMailbox
    if name == "load_credentials":
        from gmail_labeler.gmail.auth import load_credentials
        return load_credentials
    if name == "parse_message":
        from gmail_labeler.gmail.parser import parse_message
        return parse_message
    raise AttributeError(f"module 'gmail_labeler.gmail' has no attribute {name!r}")


__all__ = [
    "GmailMailbox",
    "MailboxProvider",
    "MailThread",
    "Message",
    "build_query",
    "load_credentials",
    "parse_message",
]
