"""FastAPI application setup with startup configuration checks and readiness probes."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from time import monotonic

from services.broadcaster.orchestrator import BroadcastStepError
from shared.config import settings
from shared.logging import log_error, log_info

from .broadcasting import router as broadcasting_router
from .oauth import router as oauth_router


ready = False

app = FastAPI(title="Live Broadcast Relay")


class LogRequestsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = monotonic()
        response = await call_next(request)
        duration_ms = int((monotonic() - start) * 1000)
        log_info(
            "request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=duration_ms,
        )
        return response


app.add_middleware(LogRequestsMiddleware)
if settings.CLIENT_URL:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CLIENT_URL],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
app.include_router(oauth_router)
app.include_router(broadcasting_router)


@app.exception_handler(BroadcastStepError)
async def broadcast_step_error_handler(request: Request, exc: BroadcastStepError) -> JSONResponse:
    return JSONResponse(
        status_code=502,
        content={"error": "upstream_error", "step": exc.step},
    )


def check_configuration() -> None:
    """Refuse to serve traffic without the channel credentials."""
    missing = settings.missing_credentials()
    if missing:
        log_error("config_missing", fields=missing)
        raise RuntimeError(f"Missing required settings: {', '.join(missing)}")


@app.on_event("startup")
def on_startup() -> None:
    """Validate credentials once before serving traffic."""
    global ready
    check_configuration()
    ready = True


@app.get("/healthz")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.get("/readyz")
async def readyz() -> dict[str, str]:
    """Readiness probe that flips true after the configuration check."""
    if not ready:
        raise HTTPException(status_code=503, detail="not ready")
    return {"status": "ok"}
