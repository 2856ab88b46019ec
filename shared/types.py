"""Shared data types for the broadcast relay."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Visibility(str, Enum):
    """Privacy tier accepted from the front-end."""

    PUBLIC = "public"
    UNLISTED = "unlisted"
    PRIVATE = "private"


class Latency(str, Enum):
    """Latency preference accepted from the front-end."""

    ULTRA_LOW = "ultra_low"
    LOW = "low"
    NORMAL = "normal"


# Values understood by liveBroadcasts.status.privacyStatus
PRIVACY_STATUS: Dict[Visibility, str] = {
    Visibility.PUBLIC: "public",
    Visibility.UNLISTED: "unlisted",
    Visibility.PRIVATE: "private",
}

# Values understood by liveBroadcasts.contentDetails.latencyPreference
LATENCY_PREFERENCE: Dict[Latency, str] = {
    Latency.ULTRA_LOW: "ultraLow",
    Latency.LOW: "low",
    Latency.NORMAL: "normal",
}


@dataclass(frozen=True)
class Thumbnail:
    """Decoded thumbnail image ready for upload."""

    data: bytes
    mime_type: str


@dataclass(frozen=True)
class BroadcastCreationParams:
    """Normalized request handed to the orchestrator."""

    title: str
    description: str
    scheduled_start_time: str
    privacy_status: str
    latency_preference: str
    auto_start: bool = True
    auto_stop: bool = True
    thumbnail: Optional[Thumbnail] = None


@dataclass(frozen=True)
class IngestionInfo:
    """Where an encoder must publish to reach a bound stream."""

    stream_name: str
    ingestion_address: str


@dataclass(frozen=True)
class BroadcastResult:
    """Identifiers returned to the caller once every step succeeded."""

    video_id: str
    stream_name: str
    stream_address: str
    title: str

    def as_response(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "videoId": self.video_id,
            "streamName": self.stream_name,
            "streamAddress": self.stream_address,
        }
