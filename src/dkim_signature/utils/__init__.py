"""Utility exports."""
from .encoding import domain_to_ascii, qp_decode, qp_encode
from .text import to_text, trim_wsp

__all__ = [
    "domain_to_ascii",
    "qp_decode",
    "qp_encode",
    "to_text",
    "trim_wsp",
]
