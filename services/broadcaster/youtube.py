"""OAuth plumbing and client construction for the YouTube Data API."""

from __future__ import annotations

from typing import Any, Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from googleapiclient.discovery import build

from shared.config import settings


SCOPES = [
    "https://www.googleapis.com/auth/youtube",
    "https://www.googleapis.com/auth/youtube.force-ssl",
]
AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URI = "https://oauth2.googleapis.com/token"


def client_config() -> dict[str, Any]:
    """Return the "web" client configuration built from settings."""
    return {
        "web": {
            "client_id": settings.YOUTUBE_CLIENT_ID,
            "client_secret": settings.YOUTUBE_CLIENT_SECRET,
            "auth_uri": AUTH_URI,
            "token_uri": TOKEN_URI,
            "redirect_uris": [settings.YOUTUBE_REDIRECT_URL],
        }
    }


def _flow() -> Flow:
    # The callback runs in a separate stateless request, so no PKCE verifier.
    return Flow.from_client_config(
        client_config(),
        scopes=SCOPES,
        redirect_uri=settings.YOUTUBE_REDIRECT_URL,
        autogenerate_code_verifier=False,
    )


def consent_url(state: Optional[str] = None) -> str:
    """Return Google's consent page URL requesting offline access."""
    url, _ = _flow().authorization_url(
        access_type="offline", prompt="consent", state=state
    )
    return url


def exchange_code(code: str) -> Credentials:
    """Exchange an authorization ``code`` for credentials."""
    flow = _flow()
    flow.fetch_token(code=code)
    return flow.credentials


def refresh_credentials() -> Credentials:
    """Trade the stored refresh token for a short-lived access token."""
    creds = Credentials(
        token=None,
        refresh_token=settings.YOUTUBE_REFRESH_TOKEN,
        token_uri=TOKEN_URI,
        client_id=settings.YOUTUBE_CLIENT_ID,
        client_secret=settings.YOUTUBE_CLIENT_SECRET,
        scopes=SCOPES,
    )
    creds.refresh(Request())
    return creds


def build_client(credentials: Credentials) -> Any:
    """Return an authenticated YouTube Data API v3 resource."""
    return build("youtube", "v3", credentials=credentials, cache_discovery=False)


__all__ = [
    "SCOPES",
    "AUTH_URI",
    "TOKEN_URI",
    "client_config",
    "consent_url",
    "exchange_code",
    "refresh_credentials",
    "build_client",
]
