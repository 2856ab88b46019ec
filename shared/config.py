"""Application configuration loaded from environment variables."""

from __future__ import annotations

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    """Application settings read from environment variables.

    Credential fields also accept the bare names used by earlier
    deployments (``CLIENT_ID``, ``REFRESH_TOKEN`` ...).
    """

    YOUTUBE_CLIENT_ID: str = Field(
        default="",
        description="OAuth client id of the channel owner's Google project",
        validation_alias=AliasChoices("YOUTUBE_CLIENT_ID", "CLIENT_ID"),
    )
    YOUTUBE_CLIENT_SECRET: str = Field(
        default="",
        description="OAuth client secret",
        validation_alias=AliasChoices("YOUTUBE_CLIENT_SECRET", "CLIENT_SECRET"),
    )
    YOUTUBE_REDIRECT_URL: str = Field(
        default="",
        description="Redirect URL registered for the consent flow",
        validation_alias=AliasChoices("YOUTUBE_REDIRECT_URL", "REDIRECT_URL"),
    )
    YOUTUBE_REFRESH_TOKEN: str = Field(
        default="",
        description="Long-lived refresh token of the channel owner",
        validation_alias=AliasChoices("YOUTUBE_REFRESH_TOKEN", "REFRESH_TOKEN"),
    )
    BROADCAST_SECRET: str = Field(
        default="",
        description="Shared secret callers send in X-Broadcast-Secret",
        validation_alias=AliasChoices("BROADCAST_SECRET", "SECRET"),
    )
    CLIENT_URL: str = Field(
        default="",
        description="Front-end origin allowed by CORS",
    )
    LOG_LEVEL: str = Field(
        default="INFO", description="Logging level"
    )

    def missing_credentials(self) -> list[str]:
        """Return the names of required credential fields that are empty."""
        required = (
            "YOUTUBE_CLIENT_ID",
            "YOUTUBE_CLIENT_SECRET",
            "YOUTUBE_REFRESH_TOKEN",
            "BROADCAST_SECRET",
        )
        return [name for name in required if not getattr(self, name)]


settings = Settings()

__all__ = ["Settings", "settings"]
