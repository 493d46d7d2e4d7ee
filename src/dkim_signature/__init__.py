"""Parse and serialize DKIM-Signature header values (RFC 6376 tag-lists)."""
from .exceptions import DKIMSignatureError, InvalidInputType, SignatureSyntaxError
from .models import Signature
from .parser import parse, unfold
from .serializer import serialize
from .version import __version__

__all__ = [
    "Signature",
    "parse",
    "unfold",
    "serialize",
    "DKIMSignatureError",
    "InvalidInputType",
    "SignatureSyntaxError",
    "__version__",
]
