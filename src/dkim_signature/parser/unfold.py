"""Removal of RFC 5322 folding whitespace from header values."""
from __future__ import annotations

import regex

# WSP* CRLF WSP+; a bare LF is accepted as the line break.
_FOLD = regex.compile(r"[ \t]*\r?\n[ \t]+")
_TRAILING_BREAKS = regex.compile(r"(?:\r?\n)+\Z")


def unfold(value: str) -> str:
    """Collapse every fold in ``value`` and drop the trailing line break.

    A line break that is not followed by whitespace is not a fold and is
    left in place, so the tokenizer can reject it as an illegal character.
    """

    return _TRAILING_BREAKS.sub("", _FOLD.sub("", value))


__all__ = ["unfold"]
