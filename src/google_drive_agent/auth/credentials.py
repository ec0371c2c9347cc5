"""
Credential and service helpers for the Drive API.

The agent runs unattended, so it never starts an interactive flow at
runtime: it is configured with an OAuth client id, client secret and a
long-lived refresh token, and access tokens are refreshed by google-auth
as calls are made. ``run_authorization_flow`` is the one-off helper used to
obtain that refresh token.
"""

import logging
from typing import Optional, List

from aiogoogle.auth.creds import UserCreds, ClientCreds
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build


logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/drive",
]
TOKEN_URI = "https://oauth2.googleapis.com/token"
DRIVE_API_NAME = "drive"
DRIVE_API_VERSION = "v3"


def build_credentials(
        client_id: str,
        client_secret: str,
        refresh_token: str,
        scopes: Optional[List[str]] = None
) -> Credentials:
    """
    Create OAuth2 credentials from a refresh token.

    No access token is fetched here; the first API call refreshes it, so bad
    credentials only surface on first use.

    Args:
        client_id: OAuth client id.
        client_secret: OAuth client secret.
        refresh_token: Long-lived refresh token for the Drive account.
        scopes: Scopes to request on refresh. None keeps the scopes granted
            with the refresh token.

    Returns:
        Google OAuth2 Credentials object
    """
    return Credentials(
        token=None,
        refresh_token=refresh_token,
        token_uri=TOKEN_URI,
        client_id=client_id,
        client_secret=client_secret,
        scopes=scopes,
    )


def get_drive_service(credentials: Credentials):
    """
    Build a Drive v3 resource bound to the given credentials.

    Uses the discovery document bundled with google-api-python-client, so no
    network call is made.
    """
    return build(DRIVE_API_NAME, DRIVE_API_VERSION, credentials=credentials, cache_discovery=False)


def to_user_creds(credentials: Credentials) -> UserCreds:
    """
    Get aiogoogle-compatible UserCreds from Google credentials.

    Returns:
        UserCreds object for use with aiogoogle
    """
    return UserCreds(
        access_token=credentials.token,
        refresh_token=credentials.refresh_token,
        token_uri=credentials.token_uri,
        scopes=credentials.scopes,
    )


def to_client_creds(credentials: Credentials) -> ClientCreds:
    """Get aiogoogle-compatible ClientCreds from Google credentials."""
    return ClientCreds(
        client_id=credentials.client_id,
        client_secret=credentials.client_secret,
        scopes=credentials.scopes,
    )


def run_authorization_flow(client_secrets_path: str, scopes: Optional[List[str]] = None,
                           port: int = 8080) -> Credentials:
    """
    Run the installed-app OAuth flow in a local browser.

    Offline access and the consent prompt are requested so that Google
    issues a refresh token even if the account granted access before.

    Args:
        client_secrets_path: Path to the OAuth client JSON downloaded from Google Cloud Console.
        scopes: Scopes to request (default: full Drive access).
        port: Local port for the redirect listener.

    Returns:
        Credentials carrying the new refresh token.
    """
    scopes = scopes or SCOPES
    logger.info("Starting OAuth2 flow on port %d", port)
    flow = InstalledAppFlow.from_client_secrets_file(client_secrets_path, scopes)
    creds = flow.run_local_server(port=port, access_type="offline", prompt="consent")
    logger.info("OAuth2 flow completed successfully")
    return creds
