"""Parse orchestration: unfold, tokenize, decode and check required tags."""
from __future__ import annotations

from typing import Any, Dict

import structlog

from ..exceptions import SignatureSyntaxError
from ..models import Signature
from ..utils.text import BytesLike, to_text
from .decoders import BUILTIN_DECODERS, DecoderRegistry
from .tokenizer import iter_tags
from .unfold import unfold

logger = structlog.get_logger(__name__)

SUPPORTED_VERSION = 1

# Order decides which failure is reported when several tags are missing.
REQUIRED_FIELDS = (
    ("algorithm", "Missing algorithm"),
    ("data", "Missing data"),
    ("body_hash", "Missing body hash"),
    ("selector", "Missing selector"),
    ("domain", "Missing domain"),
    ("headers", "Missing headers"),
)


def parse(
    value: str | BytesLike,
    *,
    charset: str = "utf-8",
    registry: DecoderRegistry | None = None,
) -> Signature:
    """Parse a ``DKIM-Signature`` header value into a :class:`Signature`.

    ``value`` excludes the header name and colon. Folding whitespace is
    accepted. Any grammar violation or missing required tag raises
    :class:`SignatureSyntaxError`; a partial result is never returned.
    """

    text = unfold(to_text(value, charset))
    decoders = registry or BUILTIN_DECODERS
    fields: Dict[str, Any] = {}
    unknown_tags: Dict[str, str] = {}
    try:
        for name, raw in iter_tags(text):
            decoder = decoders.lookup(name)
            if decoder is None:
                logger.debug("signature.unknown_tag", tag=name)
                unknown_tags[name] = raw
                continue
            fields[decoder.field] = decoder.decode(raw)
        check_required(fields)
    except SignatureSyntaxError as exc:
        logger.debug("signature.rejected", reason=exc.reason)
        raise
    return Signature(unknown_tags=unknown_tags, **fields)


def check_required(fields: Dict[str, Any]) -> None:
    if "version" not in fields:
        raise SignatureSyntaxError("Missing version")
    version = fields["version"]
    if version is None:
        raise SignatureSyntaxError("Invalid version")
    if version != SUPPORTED_VERSION:
        raise SignatureSyntaxError("Unknown version", str(version))
    for field, reason in REQUIRED_FIELDS:
        if not fields.get(field):
            raise SignatureSyntaxError(reason)


__all__ = ["parse", "check_required", "REQUIRED_FIELDS", "SUPPORTED_VERSION"]
