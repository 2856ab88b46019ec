"""Shared-secret authorization for broadcast creation."""

from __future__ import annotations

import hmac
from typing import Optional

from fastapi import Header, HTTPException, Request, status

from shared.config import settings
from shared.logging import log_error


SECRET_HEADER = "X-Broadcast-Secret"


def require_shared_secret(
    request: Request,
    x_broadcast_secret: Optional[str] = Header(default=None),
) -> None:
    """Reject callers whose ``X-Broadcast-Secret`` does not match the configured secret."""
    expected = settings.BROADCAST_SECRET
    if not expected or not x_broadcast_secret or not hmac.compare_digest(
        x_broadcast_secret.encode(), expected.encode()
    ):
        log_error(
            "auth_rejected",
            path=request.url.path,
            header_present=x_broadcast_secret is not None,
        )
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


__all__ = ["require_shared_secret", "SECRET_HEADER"]
