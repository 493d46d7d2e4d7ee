"""Domain model for a parsed or hand-built DKIM-Signature value."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from .utils.text import BytesLike

DEFAULT_VERSION = 1
DEFAULT_QUERY_METHODS: Tuple[str, ...] = ("dns/txt",)
DEFAULT_CANONICALIZATION: Tuple[str, str] = ("simple", "simple")


@dataclass(slots=True)
class Signature:
    """Tag-list fields of one ``DKIM-Signature`` header.

    Instances returned by :meth:`parse` have every required tag present.
    Instances built directly only receive defaults; nothing is validated
    until they are rendered, and rendering never fails.
    """

    version: int = DEFAULT_VERSION
    algorithm: Optional[str] = None
    domain: Optional[str] = None
    selector: Optional[str] = None
    identifier: Optional[str] = None
    query_methods: List[str] = field(default_factory=lambda: list(DEFAULT_QUERY_METHODS))
    canonicalization: Tuple[str, str] = DEFAULT_CANONICALIZATION
    headers: Optional[List[str]] = None
    copied_headers: Optional[List[str]] = None
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    body_length: Optional[int] = None
    body_hash: Optional[Union[str, bytes]] = None
    data: Optional[Union[str, bytes]] = None
    unknown_tags: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(cls, **fields: object) -> "Signature":
        return cls(**fields)  # type: ignore[arg-type]

    @classmethod
    def parse(cls, value: "str | BytesLike", *, charset: str = "utf-8") -> "Signature":
        from .parser import parse

        return parse(value, charset=charset)

    def to_string(self) -> str:
        from .serializer import serialize

        return serialize(self)

    def __str__(self) -> str:
        return self.to_string()


__all__ = [
    "Signature",
    "DEFAULT_VERSION",
    "DEFAULT_QUERY_METHODS",
    "DEFAULT_CANONICALIZATION",
]
