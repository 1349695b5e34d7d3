"""OAuth2 credential loading for the Google APIs the jobs use."""

from __future__ import annotations

from pathlib import Path

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from gmail_labeler import settings
from gmail_labeler.exceptions import MailboxAuthError


def load_credentials(
    client_secret_file: Path = settings.CLIENT_SECRET_FILE,
    token_file: Path = settings.TOKEN_FILE,
    scopes: list[str] | None = None,
    interactive: bool = False,
) -> Credentials:
    """Load the persisted token, refreshing it when expired.

    With ``interactive=True`` a missing or invalid token triggers the
    browser OAuth flow; scheduled runs leave it off and fail fast instead.
    """
    scopes = scopes or settings.SCOPES
    creds = None
    if token_file.exists():
        creds = Credentials.from_authorized_user_file(str(token_file), scopes)

    if creds and creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
        except Exception as e:
            raise MailboxAuthError(f"Failed to refresh token at {token_file}: {e}") from e
        token_file.write_text(creds.to_json())

    if creds and creds.valid:
        return creds

    if not interactive:
        raise MailboxAuthError(
            f"No valid token at {token_file}. Authorize interactively first."
        )
    if not client_secret_file.exists():
        raise MailboxAuthError(
            f"Client secret not found at {client_secret_file}. "
            "Download it from Google Cloud Console and place it there."
        )

    flow = InstalledAppFlow.from_client_secrets_file(str(client_secret_file), scopes)
    creds = flow.run_local_server(port=0)
    token_file.parent.mkdir(parents=True, exist_ok=True)
    token_file.write_text(creds.to_json())
    return creds
