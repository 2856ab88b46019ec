"""Decode base64 data-URI thumbnails sent by the front-end."""

from __future__ import annotations

import base64
import binascii

from shared.types import Thumbnail


DEFAULT_MIME_TYPE = "application/octet-stream"


class ThumbnailDecodeError(ValueError):
    """Raised when a thumbnail string cannot be turned into image bytes."""


def _mime_type(prefix: str) -> str:
    """Return the mime type from a ``data:<mime>;base64`` prefix."""
    if not prefix.startswith("data:"):
        return DEFAULT_MIME_TYPE
    mime = prefix[len("data:"):].split(";", 1)[0].strip()
    return mime or DEFAULT_MIME_TYPE


def decode_data_uri(value: str) -> Thumbnail:
    """Decode ``value`` such as ``data:image/png;base64,iVBOR...``.

    Everything up to and including the first comma is discarded and the
    remainder is strictly base64-decoded. A value without a comma never
    decodes.
    """
    prefix, sep, payload = value.partition(",")
    if not sep:
        raise ThumbnailDecodeError("thumbnail is not a data URI")
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ThumbnailDecodeError(f"thumbnail is not valid base64: {exc}") from exc
    if not data:
        raise ThumbnailDecodeError("thumbnail is empty")
    return Thumbnail(data=data, mime_type=_mime_type(prefix))


__all__ = ["ThumbnailDecodeError", "decode_data_uri", "DEFAULT_MIME_TYPE"]
