"""Unified exception hierarchy for gmail-labeler."""


class LabelerError(Exception):
    """Base exception for all gmail-labeler errors."""


# Config
class ConfigError(LabelerError):
    """Base exception for configuration problems."""


class ConfigStoreError(ConfigError):
    """The config store could not be read."""


# Mailbox
class MailboxError(LabelerError):
    """Base exception for mailbox operations."""


class MailboxAuthError(MailboxError):
    """Mailbox authentication or authorization failure."""


class MailboxFetchError(MailboxError):
    """Failed to search or fetch threads and messages."""


class MailboxModifyError(MailboxError):
    """Failed to add or remove labels on a thread."""


class MailboxSendError(MailboxError):
    """Failed to send an email."""


# Completion
class CompletionError(LabelerError):
    """Base exception for completion provider calls."""


class CompletionTransportError(CompletionError):
    """The completion request itself failed (network, HTTP status, API error)."""


class CompletionResponseError(CompletionError):
    """The completion provider answered, but the response was malformed or empty."""
