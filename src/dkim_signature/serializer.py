"""Canonical rendering of a :class:`Signature` as a single tag-list line."""
from __future__ import annotations

import base64
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence, Union

from .models import DEFAULT_CANONICALIZATION, DEFAULT_QUERY_METHODS, Signature
from .utils.encoding import domain_to_ascii, qp_encode

SEGMENT_SEPARATOR = "; "
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def serialize(signature: Signature) -> str:
    """Render ``signature`` in canonical tag order.

    Tags with default values are omitted, domain and selector are re-encoded
    to their IDNA ASCII form, and unknown tags follow in stored order. The
    result is never folded.
    """

    segments: List[str] = [
        f"v={_text(signature.version)}",
        f"a={_text(signature.algorithm)}",
        f"d={_ascii_name(signature.domain)}",
        f"s={_ascii_name(signature.selector)}",
    ]

    canonicalization = _render_canonicalization(signature.canonicalization)
    if canonicalization:
        segments.append(f"c={canonicalization}")

    query_methods = list(signature.query_methods or ())
    if query_methods != list(DEFAULT_QUERY_METHODS):
        segments.append("q=" + ":".join(query_methods))

    if signature.identifier is not None:
        segments.append("i=" + qp_encode(signature.identifier))
    if signature.created_at is not None:
        segments.append(f"t={epoch_seconds(signature.created_at)}")
    if signature.expires_at is not None:
        segments.append(f"x={epoch_seconds(signature.expires_at)}")

    segments.append("h=" + ":".join(signature.headers or ()))

    if signature.copied_headers is not None:
        segments.append("z=" + "|".join(qp_encode(item, extra="|") for item in signature.copied_headers))
    if signature.body_length is not None:
        segments.append(f"l={signature.body_length}")

    segments.append(f"bh={_base64_text(signature.body_hash)}")
    segments.append(f"b={_base64_text(signature.data)}")

    for name, value in (signature.unknown_tags or {}).items():
        segments.append(f"{name}={value}")

    return SEGMENT_SEPARATOR.join(segments)


def epoch_seconds(value: Union[datetime, int, float]) -> int:
    """Whole seconds since the epoch; fractions are truncated toward zero."""

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.astimezone()
        seconds, remainder = divmod(value - EPOCH, timedelta(seconds=1))
        if seconds < 0 and remainder:
            seconds += 1
        return seconds
    return int(value)


def _render_canonicalization(pair: Optional[Sequence[str]]) -> str:
    header, body = pair or DEFAULT_CANONICALIZATION
    header = header or DEFAULT_CANONICALIZATION[0]
    body = body or DEFAULT_CANONICALIZATION[1]
    if body == DEFAULT_CANONICALIZATION[1]:
        return "" if header == DEFAULT_CANONICALIZATION[0] else header
    return f"{header}/{body}"


def _ascii_name(value: Optional[str]) -> str:
    if not value:
        return ""
    return domain_to_ascii(value)


def _base64_text(value: Union[str, bytes, None]) -> str:
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value


def _text(value: object) -> str:
    return "" if value is None else str(value)


__all__ = ["serialize", "epoch_seconds", "SEGMENT_SEPARATOR"]
