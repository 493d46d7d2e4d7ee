"""Tag-list tokenizer for DKIM header values."""
from __future__ import annotations

from typing import Iterator, Set, Tuple

import regex

from ..exceptions import SignatureSyntaxError
from ..utils.text import trim_wsp

TAG_NAME_PATTERN = r"[A-Za-z][A-Za-z0-9_]*"
# tval characters (%x21-3A / %x3C-7E) plus the SP / HTAB allowed between them.
TAG_VALUE_PATTERN = r"[\x21-\x3A\x3C-\x7E \t]*"

_TAG_NAME = regex.compile(TAG_NAME_PATTERN)
_TAG_VALUE = regex.compile(TAG_VALUE_PATTERN)
_SKIPPABLE = frozenset(" \t\r\n")


def is_valid_tag_name(name: str) -> bool:
    return _TAG_NAME.fullmatch(name) is not None


def is_valid_tag_value(value: str) -> bool:
    return _TAG_VALUE.fullmatch(value) is not None


def iter_tags(text: str) -> Iterator[Tuple[str, str]]:
    """Yield ``(name, value)`` pairs from an unfolded tag-list.

    The scan stops at the first violation: a malformed name, an illegal
    character in a value, or a name seen earlier in the same list.
    """

    seen: Set[str] = set()
    length = len(text)
    offset = 0
    while offset < length:
        if text[offset] in _SKIPPABLE:
            offset += 1
            continue

        assign = text.find("=", offset)
        if assign == -1:
            raise SignatureSyntaxError('Invalid tag-list: missing "="', text[offset:])
        name = trim_wsp(text[offset:assign])
        if not is_valid_tag_name(name):
            raise SignatureSyntaxError("Invalid character in tag name", name)
        if name in seen:
            raise SignatureSyntaxError("Invalid duplicate tag name", name)
        seen.add(name)

        delimiter = text.find(";", assign + 1)
        end = delimiter if delimiter != -1 else length
        value = trim_wsp(text[assign + 1 : end])
        if not is_valid_tag_value(value):
            raise SignatureSyntaxError("Invalid character in tag value", name)

        yield name, value
        offset = end + 1


__all__ = ["iter_tags", "is_valid_tag_name", "is_valid_tag_value"]
