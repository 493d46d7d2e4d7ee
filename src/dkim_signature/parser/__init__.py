"""Parser package exports."""
from .decoders import BUILTIN_DECODERS, DecoderRegistry, TagDecoder
from .engine import parse
from .tokenizer import iter_tags
from .unfold import unfold

__all__ = ["parse", "unfold", "iter_tags", "DecoderRegistry", "TagDecoder", "BUILTIN_DECODERS"]
