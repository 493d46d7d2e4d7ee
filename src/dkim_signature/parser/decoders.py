"""Per-tag decoding rules and the registry that maps tag codes to fields."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

import regex

from ..exceptions import SignatureSyntaxError
from ..models import DEFAULT_CANONICALIZATION, DEFAULT_QUERY_METHODS
from ..utils.encoding import domain_to_ascii, qp_decode
from ..utils.text import trim_wsp

_DIGITS = regex.compile(r"[0-9]+")
_WHITESPACE = regex.compile(r"\s+")
_HEADER_SEPARATOR = regex.compile(r"\s*:\s*")
_COPIED_SEPARATOR = regex.compile(r"\s*\|\s*")
_BASE64 = regex.compile(r"[A-Za-z0-9+/\-]+=*")
_BASE64_DATA = regex.compile(r"[A-Za-z0-9+/]")


@dataclass(slots=True, frozen=True)
class TagDecoder:
    """Decoding rule for a single tag code."""

    tag: str
    field: str
    decode: Callable[[str], Any]


class DecoderRegistry:
    """Lookup table from tag code to :class:`TagDecoder`."""

    def __init__(self) -> None:
        self._decoders: Dict[str, TagDecoder] = {}

    def register(self, decoder: TagDecoder, override: bool = False) -> None:
        if not override and decoder.tag in self._decoders:
            raise ValueError(f"Tag already registered: {decoder.tag}")
        self._decoders[decoder.tag] = decoder

    def register_tag(
        self,
        tag: str,
        field: str,
        decode: Callable[[str], Any],
        *,
        override: bool = False,
    ) -> None:
        self.register(TagDecoder(tag=tag, field=field, decode=decode), override=override)

    def lookup(self, tag: str) -> Optional[TagDecoder]:
        return self._decoders.get(tag)

    def get(self, tag: str) -> TagDecoder:
        try:
            return self._decoders[tag]
        except KeyError as exc:
            raise KeyError(f"Unknown tag: {tag}") from exc

    def all(self) -> Mapping[str, TagDecoder]:
        return dict(self._decoders)

    def __iter__(self) -> Iterator[TagDecoder]:
        return iter(list(self._decoders.values()))


def decode_version(value: str) -> Optional[int]:
    if _DIGITS.fullmatch(value) is None:
        return None
    return int(value)


def decode_lowercase(value: str) -> str:
    return value.lower()


def decode_canonicalization(value: str) -> Tuple[str, str]:
    if not value:
        return DEFAULT_CANONICALIZATION
    header, _, body = value.partition("/")
    header = trim_wsp(header).lower() or DEFAULT_CANONICALIZATION[0]
    body = trim_wsp(body).lower() or DEFAULT_CANONICALIZATION[1]
    return header, body


def decode_header_list(value: str) -> List[str]:
    return [name.lower() for name in _HEADER_SEPARATOR.split(value) if name]


def decode_query_methods(value: str) -> List[str]:
    if not value:
        return list(DEFAULT_QUERY_METHODS)
    return [method.lower() for method in value.split(":")]


def decode_copied_headers(value: str) -> List[str]:
    if not value:
        return []
    return [qp_decode(segment) for segment in _COPIED_SEPARATOR.split(value)]


def decode_body_length(value: str) -> int:
    if _DIGITS.fullmatch(value) is None:
        raise SignatureSyntaxError("Invalid body length", value)
    return int(value)


def decode_timestamp(value: str) -> datetime:
    if _DIGITS.fullmatch(value) is None:
        raise SignatureSyntaxError("Invalid timestamp value", value)
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise SignatureSyntaxError("Invalid timestamp value", value) from exc


def decode_base64(value: str) -> Optional[str]:
    compact = _WHITESPACE.sub("", value)
    if not compact:
        return None
    if _BASE64.fullmatch(compact) is None or _BASE64_DATA.search(compact) is None:
        raise SignatureSyntaxError("Invalid base64", compact)
    return compact


def load_builtin_decoders(registry: DecoderRegistry) -> DecoderRegistry:
    registry.register_tag("v", "version", decode_version)
    registry.register_tag("a", "algorithm", decode_lowercase)
    registry.register_tag("c", "canonicalization", decode_canonicalization)
    registry.register_tag("d", "domain", domain_to_ascii)
    # Python's IDNA codec never reads an all-digit label as an IPv4 address,
    # so selectors such as "20120113" need no special handling.
    registry.register_tag("s", "selector", domain_to_ascii)
    registry.register_tag("h", "headers", decode_header_list)
    registry.register_tag("q", "query_methods", decode_query_methods)
    registry.register_tag("i", "identifier", qp_decode)
    registry.register_tag("z", "copied_headers", decode_copied_headers)
    registry.register_tag("l", "body_length", decode_body_length)
    registry.register_tag("t", "created_at", decode_timestamp)
    registry.register_tag("x", "expires_at", decode_timestamp)
    registry.register_tag("bh", "body_hash", decode_base64)
    registry.register_tag("b", "data", decode_base64)
    return registry


BUILTIN_DECODERS = load_builtin_decoders(DecoderRegistry())


__all__ = [
    "TagDecoder",
    "DecoderRegistry",
    "BUILTIN_DECODERS",
    "load_builtin_decoders",
    "decode_version",
    "decode_canonicalization",
    "decode_header_list",
    "decode_query_methods",
    "decode_copied_headers",
    "decode_body_length",
    "decode_timestamp",
    "decode_base64",
]
