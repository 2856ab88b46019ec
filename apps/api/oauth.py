"""Administrative consent flow used once to obtain the channel's refresh token."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import RedirectResponse
from google.auth.exceptions import GoogleAuthError
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from services.broadcaster import youtube
from shared.logging import log_error, log_info

router = APIRouter(tags=["oauth"])


@router.get("/")
def start_consent() -> RedirectResponse:
    """Redirect the channel owner to Google's consent page."""
    url = youtube.consent_url()
    log_info("consent_redirect")
    return RedirectResponse(url, status_code=302)


@router.get("/auth")
def consent_callback(code: Optional[str] = None) -> dict[str, str]:
    """Exchange the consent ``code`` and hand the refresh token to the operator."""
    if not code:
        raise HTTPException(status_code=400, detail="Missing authorization code")
    try:
        creds = youtube.exchange_code(code)
    except (OAuth2Error, GoogleAuthError, ValueError) as exc:
        log_error("consent_exchange_failed", error=str(exc))
        raise HTTPException(status_code=400, detail="Authorization code exchange failed") from exc
    if not creds.refresh_token:
        raise HTTPException(status_code=400, detail="No refresh token issued")
    log_info("consent_exchanged")
    return {"refreshToken": creds.refresh_token}


__all__ = ["router"]
