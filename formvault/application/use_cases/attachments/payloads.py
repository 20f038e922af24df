"""Decoding of Base64 attachment payloads."""

from __future__ import annotations

import base64
import binascii
import re
from collections.abc import Sequence
from dataclasses import dataclass

from formvault.domain.entities import DEFAULT_CONTENT_TYPE, AttachmentPayload
from formvault.domain.errors import InvalidPayload, PayloadTooLarge

_DATA_URL_PATTERN = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[\w-]+=[\w.-]+)*;base64,", re.IGNORECASE
)
_MAX_NAME_LENGTH = 255
_MAX_LABEL_LENGTH = 100


@dataclass(frozen=True)
class DecodedPayload:
    """A payload whose content has been decoded and size checked."""

    data: bytes
    display_name: str | None
    label: str | None
    content_type: str


def _clean_text(value: str | None, *, limit: int, field: str) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned:
        return None
    if len(cleaned) > limit:
        raise InvalidPayload(f"The {field} must be at most {limit} characters long")
    return cleaned


def decode_payload(payload: AttachmentPayload, *, max_bytes: int) -> DecodedPayload:
    """Decode ``payload`` and enforce the size limit.

    Accepts plain Base64 or a ``data:<mime>;base64,`` URL. A MIME type found in
    the URL header is used when the payload does not name one.
    """

    if not isinstance(payload.content, str):
        raise InvalidPayload("Attachment content must be a Base64 string")

    content = payload.content.strip()
    content_type = payload.content_type
    match = _DATA_URL_PATTERN.match(content)
    if match:
        content = content[match.end():]
        content_type = content_type or match.group("mime")

    # Line breaks from MIME style encoders are tolerated, nothing else is.
    content = "".join(content.split())
    if not content:
        raise InvalidPayload("Attachment content is empty")

    # Every 4 Base64 characters decode to at most 3 bytes.
    if (len(content) // 4) * 3 - 2 > max_bytes:
        raise PayloadTooLarge(size=(len(content) // 4) * 3, limit=max_bytes)

    try:
        data = base64.b64decode(content, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidPayload("Attachment content is not valid Base64") from exc

    if not data:
        raise InvalidPayload("Attachment content is empty")
    if len(data) > max_bytes:
        raise PayloadTooLarge(size=len(data), limit=max_bytes)

    return DecodedPayload(
        data=data,
        display_name=_clean_text(
            payload.display_name, limit=_MAX_NAME_LENGTH, field="display name"
        ),
        label=_clean_text(payload.label, limit=_MAX_LABEL_LENGTH, field="label"),
        content_type=_clean_text(content_type, limit=100, field="content type")
        or DEFAULT_CONTENT_TYPE,
    )


def decode_payloads(
    payloads: Sequence[AttachmentPayload], *, max_bytes: int
) -> list[DecodedPayload]:
    """Decode every payload, failing on the first invalid one."""

    return [decode_payload(payload, max_bytes=max_bytes) for payload in payloads]


__all__ = ["DecodedPayload", "decode_payload", "decode_payloads"]
