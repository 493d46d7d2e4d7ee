"""Value encodings used inside DKIM tag values."""
from __future__ import annotations

import regex

_QP_ESCAPE = regex.compile(rb"=([0-9A-Fa-f]{2})")
# Visible ASCII minus ";" and "=" (RFC 6376 dkim-safe-char).
_QP_SPECIALS = ";="


def qp_decode(value: str) -> str:
    """Decode DKIM quoted-printable: ``=XX`` escapes only, no soft line breaks."""

    raw = value.encode("utf-8", errors="surrogateescape")
    decoded = _QP_ESCAPE.sub(lambda match: bytes([int(match.group(1), 16)]), raw)
    # Bytes that are not UTF-8 survive as lone surrogates; qp_encode restores them.
    return decoded.decode("utf-8", errors="surrogateescape")


def qp_encode(value: str, extra: str = "") -> str:
    specials = _QP_SPECIALS + extra
    chunks = []
    for byte in value.encode("utf-8", errors="surrogateescape"):
        char = chr(byte)
        if 0x21 <= byte <= 0x7E and char not in specials:
            chunks.append(char)
        else:
            chunks.append(f"={byte:02X}")
    return "".join(chunks)


def domain_to_ascii(value: str) -> str:
    """Lowercase ``value`` and convert it to its IDNA ASCII form.

    Labels the IDNA codec refuses (empty, over-long, prohibited code points)
    collapse the whole name to ``""`` so required-tag checks report it missing.
    """

    try:
        return value.lower().encode("idna").decode("ascii")
    except UnicodeError:
        return ""


__all__ = ["qp_decode", "qp_encode", "domain_to_ascii"]
