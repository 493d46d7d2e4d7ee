"""Text normalization helpers shared across modules."""
from __future__ import annotations

from typing import Union

from ..exceptions import InvalidInputType, SignatureSyntaxError

BytesLike = Union[bytes, bytearray, memoryview]


def to_text(data: str | BytesLike, charset: str = "utf-8") -> str:
    if isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray, memoryview)):
        try:
            return bytes(data).decode(charset)
        except UnicodeDecodeError as exc:
            raise SignatureSyntaxError("Invalid header encoding", charset) from exc
    raise InvalidInputType(
        f"Expected str or bytes-like header value, got {type(data).__name__}"
    )


def trim_wsp(value: str) -> str:
    """Strip SP and HTAB only; other whitespace is significant to the grammar."""
    return value.strip(" \t")


__all__ = ["to_text", "trim_wsp"]
