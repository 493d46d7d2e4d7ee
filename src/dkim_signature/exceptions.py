"""Exception hierarchy for DKIM-Signature parsing."""
from __future__ import annotations


class DKIMSignatureError(Exception):
    """Base exception for all failures"""


class InvalidInputType(DKIMSignatureError, TypeError):
    """Raised when ``parse`` receives something other than text or bytes"""


class SignatureSyntaxError(DKIMSignatureError, ValueError):
    """Raised when a tag-list is malformed or misses a required tag"""

    def __init__(self, reason: str, detail: str | None = None) -> None:
        self.reason = reason
        self.detail = detail
        message = reason if detail is None else f"{reason}: {detail!r}"
        super().__init__(message)


__all__ = ["DKIMSignatureError", "InvalidInputType", "SignatureSyntaxError"]
