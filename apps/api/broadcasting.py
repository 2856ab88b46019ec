"""Broadcast creation endpoint."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    field_validator,
)

from services.broadcaster.orchestrator import BroadcastOrchestrator
from services.broadcaster.thumbnail import decode_data_uri
from shared.logging import log_error, log_info
from shared.types import (
    LATENCY_PREFERENCE,
    PRIVACY_STATUS,
    BroadcastCreationParams,
    Latency,
    Thumbnail,
    Visibility,
)

from .auth import require_shared_secret

router = APIRouter(tags=["broadcasting"])


def _rfc3339(value: datetime) -> str:
    """Render ``value`` in UTC with a ``Z`` suffix; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class BroadcastRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    description: str = ""
    start_date: datetime = Field(validation_alias=AliasChoices("startDate", "start_date"))
    visibility: Visibility
    latency: Latency = Latency.NORMAL
    thumbnail: Optional[Thumbnail] = None
    auto_start: bool = Field(default=True, validation_alias=AliasChoices("autoStart", "auto_start"))
    auto_stop: bool = Field(
        default=True, validation_alias=AliasChoices("autoStop", "autoEnd", "auto_stop")
    )

    @field_validator("thumbnail", mode="before")
    @classmethod
    def _decode_thumbnail(cls, value: object) -> object:
        if value is None or value == "":
            return None
        if not isinstance(value, str):
            raise ValueError("thumbnail must be a data URI string")
        return decode_data_uri(value)

    def to_params(self) -> BroadcastCreationParams:
        return BroadcastCreationParams(
            title=self.title,
            description=self.description,
            scheduled_start_time=_rfc3339(self.start_date),
            privacy_status=PRIVACY_STATUS[self.visibility],
            latency_preference=LATENCY_PREFERENCE[self.latency],
            auto_start=self.auto_start,
            auto_stop=self.auto_stop,
            thumbnail=self.thumbnail,
        )


class BroadcastResponse(BaseModel):
    title: str
    videoId: str
    streamName: str
    streamAddress: str


def get_orchestrator() -> BroadcastOrchestrator:
    return BroadcastOrchestrator()


@router.post(
    "/broadcasting",
    response_model=BroadcastResponse,
    dependencies=[Depends(require_shared_secret)],
)
async def create_broadcasting(
    request: Request,
    orchestrator: BroadcastOrchestrator = Depends(get_orchestrator),
) -> dict[str, str]:
    """Create a scheduled live broadcast with a bound RTMP stream.

    The body is parsed only after the caller was authorized.
    """
    raw = await request.body()
    try:
        payload = BroadcastRequest.model_validate_json(raw)
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        log_error("invalid_request", path=request.url.path, errors=len(errors))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_request", "errors": errors},
        ) from exc

    params = payload.to_params()
    log_info(
        "broadcast_requested",
        title=params.title,
        privacy_status=params.privacy_status,
        latency_preference=params.latency_preference,
        thumbnail=params.thumbnail is not None,
    )
    result = await run_in_threadpool(orchestrator.create, params)
    return result.as_response()


__all__ = ["router", "BroadcastRequest", "get_orchestrator"]
