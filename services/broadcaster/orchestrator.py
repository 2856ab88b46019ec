"""Create a YouTube live broadcast, its ingest stream and thumbnail."""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import Any, Optional, TypeVar

import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import Error as GoogleApiError
from googleapiclient.http import MediaIoBaseUpload

from shared.logging import log_error, log_info
from shared.types import (
    BroadcastCreationParams,
    BroadcastResult,
    IngestionInfo,
    Thumbnail,
)
from services.broadcaster import youtube


T = TypeVar("T")

# Step names, in execution order.
TOKEN_EXCHANGE = "token_exchange"
CREATE_BROADCAST = "create_broadcast"
CREATE_STREAM = "create_stream"
BIND_STREAM = "bind_stream"
FETCH_INGESTION_INFO = "fetch_ingestion_info"
SET_THUMBNAIL = "set_thumbnail"

STEPS = (
    TOKEN_EXCHANGE,
    CREATE_BROADCAST,
    CREATE_STREAM,
    BIND_STREAM,
    FETCH_INGESTION_INFO,
    SET_THUMBNAIL,
)

# GoogleApiError covers HttpError plus the client's JSON and upload errors;
# HttpLib2Error covers DNS and connection failures of the discovery client.
_EXTERNAL_ERRORS = (GoogleApiError, httplib2.HttpLib2Error, GoogleAuthError, OSError)


class BroadcastStepError(RuntimeError):
    """Raised when an external step fails; later steps are not attempted."""

    def __init__(self, step: str, message: str) -> None:
        super().__init__(f"{step}: {message}")
        self.step = step
        self.message = message


def default_client() -> Any:
    """Exchange the stored refresh token and build an API client."""
    return youtube.build_client(youtube.refresh_credentials())


def _required(response: dict[str, Any], step: str) -> str:
    value = (response or {}).get("id")
    if not value:
        raise BroadcastStepError(step, "response carried no id")
    return value


class BroadcastOrchestrator:
    """Run the broadcast creation steps in order, stopping at the first failure.

    ``client_factory`` returns an authenticated YouTube Data API resource.
    It is only invoked from :meth:`create`, after the caller was authorized.
    """

    def __init__(self, client_factory: Optional[Callable[[], Any]] = None) -> None:
        self.client_factory = client_factory or default_client

    def _run(self, step: str, func: Callable[..., T], *args: Any) -> T:
        try:
            result = func(*args)
        except BroadcastStepError as exc:
            log_error("broadcast_step_failed", step=step, error=exc.message)
            raise
        except _EXTERNAL_ERRORS as exc:
            log_error("broadcast_step_failed", step=step, error=str(exc))
            raise BroadcastStepError(step, str(exc)) from exc
        log_info("broadcast_step", step=step)
        return result

    def create(self, params: BroadcastCreationParams) -> BroadcastResult:
        """Create broadcast, stream, binding and thumbnail for ``params``."""
        client = self._run(TOKEN_EXCHANGE, self.client_factory)
        broadcast_id = self._run(CREATE_BROADCAST, self.create_broadcast, client, params)
        stream_id = self._run(CREATE_STREAM, self.create_stream, client, params)
        self._run(BIND_STREAM, self.bind_stream, client, broadcast_id, stream_id)
        info = self._run(FETCH_INGESTION_INFO, self.fetch_ingestion_info, client, stream_id)
        if params.thumbnail is not None:
            self._run(SET_THUMBNAIL, self.set_thumbnail, client, broadcast_id, params.thumbnail)
        log_info(
            "broadcast_created",
            video_id=broadcast_id,
            stream_id=stream_id,
            title=params.title,
        )
        return BroadcastResult(
            video_id=broadcast_id,
            stream_name=info.stream_name,
            stream_address=info.ingestion_address,
            title=params.title,
        )

    def create_broadcast(self, client: Any, params: BroadcastCreationParams) -> str:
        """Insert the live broadcast and return its id."""
        body = {
            "snippet": {
                "title": params.title,
                "description": params.description,
                "scheduledStartTime": params.scheduled_start_time,
            },
            "status": {"privacyStatus": params.privacy_status},
            "contentDetails": {
                "enableDvr": True,
                "latencyPreference": params.latency_preference,
                "enableAutoStart": params.auto_start,
                "enableAutoStop": params.auto_stop,
            },
        }
        response = (
            client.liveBroadcasts()
            .insert(part="snippet,status,contentDetails", body=body)
            .execute()
        )
        return _required(response, CREATE_BROADCAST)

    def create_stream(self, client: Any, params: BroadcastCreationParams) -> str:
        """Insert an RTMP ingest stream and return its id."""
        body = {
            "snippet": {"title": params.title},
            "cdn": {
                "ingestionType": "rtmp",
                "resolution": "variable",
                "frameRate": "variable",
            },
        }
        response = client.liveStreams().insert(part="snippet,cdn", body=body).execute()
        return _required(response, CREATE_STREAM)

    def bind_stream(self, client: Any, broadcast_id: str, stream_id: str) -> dict[str, Any]:
        """Bind ``stream_id`` to ``broadcast_id``; returns the full broadcast."""
        return (
            client.liveBroadcasts()
            .bind(
                id=broadcast_id,
                part="id,snippet,contentDetails,status",
                streamId=stream_id,
            )
            .execute()
        )

    def fetch_ingestion_info(self, client: Any, stream_id: str) -> IngestionInfo:
        """Look up where an encoder must publish for ``stream_id``."""
        response = client.liveStreams().list(part="snippet,cdn", id=stream_id).execute()
        items = (response or {}).get("items") or []
        if not items:
            raise BroadcastStepError(FETCH_INGESTION_INFO, f"stream {stream_id} not found")
        ingestion = items[0].get("cdn", {}).get("ingestionInfo", {})
        stream_name = ingestion.get("streamName", "")
        address = ingestion.get("ingestionAddress", "")
        if not stream_name or not address:
            raise BroadcastStepError(
                FETCH_INGESTION_INFO, f"stream {stream_id} has no ingestion info"
            )
        return IngestionInfo(stream_name=stream_name, ingestion_address=address)

    def set_thumbnail(self, client: Any, broadcast_id: str, thumbnail: Thumbnail) -> dict[str, Any]:
        """Upload ``thumbnail`` as the broadcast's image."""
        media = MediaIoBaseUpload(
            io.BytesIO(thumbnail.data), mimetype=thumbnail.mime_type, resumable=False
        )
        return client.thumbnails().set(videoId=broadcast_id, media_body=media).execute()


__all__ = [
    "BroadcastOrchestrator",
    "BroadcastStepError",
    "STEPS",
    "default_client",
]
