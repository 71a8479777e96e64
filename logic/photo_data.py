"""Split image data URIs into raw bytes and a mime type."""
from __future__ import annotations

import base64
import binascii
import re
from typing import Tuple

from logic.errors import InvalidPhotoError

DEFAULT_MIME_TYPE = "image/jpeg"
_MIME_PATTERN = re.compile(r":(.*?);")


def split_data_uri(reference: str | None) -> Tuple[bytes, str]:
    """Return ``(payload_bytes, mime_type)`` for a ``data:<mime>;base64,<data>`` reference."""

    if not reference or "," not in reference:
        raise InvalidPhotoError()
    header, payload = reference.split(",", 1)
    if not header or not payload:
        raise InvalidPhotoError()

    match = _MIME_PATTERN.search(header)
    mime_type = match.group(1) if match and match.group(1) else DEFAULT_MIME_TYPE
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidPhotoError("User photo is not valid base64 image data.") from exc
    return data, mime_type


def to_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


__all__ = ["DEFAULT_MIME_TYPE", "split_data_uri", "to_data_uri"]
