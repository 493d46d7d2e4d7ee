import pytest
from hypothesis import given, strategies as st

from dkim_signature import SignatureSyntaxError, parse
from dkim_signature.parser.decoders import BUILTIN_DECODERS, decode_base64

BASE = "v=1; a=rsa-sha256; d=example.test; s=sel; h=from:to; bh=AA==; b=AA=="
DATA_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
TAG_VALUE_CHARS = "".join(chr(code) for code in range(0x21, 0x7F) if chr(code) != ";")

tag_names = st.from_regex(r"[A-Za-z][A-Za-z0-9_]{0,6}", fullmatch=True).filter(
    lambda name: BUILTIN_DECODERS.lookup(name) is None
)


@given(
    st.text(alphabet=DATA_CHARS + "-", max_size=20),
    st.sampled_from(DATA_CHARS),
    st.text(alphabet=DATA_CHARS + "-", max_size=20),
    st.integers(min_value=0, max_value=3),
)
def test_base64_alphabet_is_accepted(prefix: str, anchor: str, suffix: str, padding: int) -> None:
    value = prefix + anchor + suffix + "=" * padding
    assert decode_base64(value) == value


@given(
    st.text(alphabet=DATA_CHARS, min_size=1, max_size=10),
    st.sampled_from(list("!\"#$%&'()*,.:<>?@[\\]^_`{|}~")),
    st.text(alphabet=DATA_CHARS, min_size=1, max_size=10),
)
def test_base64_rejects_foreign_characters(prefix: str, foreign: str, suffix: str) -> None:
    with pytest.raises(SignatureSyntaxError, match="Invalid base64"):
        decode_base64(prefix + foreign + suffix)


@given(tag_names, st.text(alphabet=TAG_VALUE_CHARS, max_size=16))
def test_unknown_tags_survive_round_trip(name: str, value: str) -> None:
    signature = parse(f"{BASE}; {name}={value}")
    assert signature.unknown_tags == {name: value}
    assert signature.to_string().endswith(f"; {name}={value}")


@given(st.sampled_from(["v", "a", "d", "s", "h", "bh", "b"]), st.text(alphabet=TAG_VALUE_CHARS, max_size=8))
def test_repeated_tag_always_fails(name: str, value: str) -> None:
    with pytest.raises(SignatureSyntaxError, match="Invalid duplicate tag name"):
        parse(f"{BASE}; {name}={value}")


@given(st.integers(min_value=0, max_value=10**6).filter(lambda number: number != 1))
def test_version_other_than_one_is_unknown(version: int) -> None:
    with pytest.raises(SignatureSyntaxError, match="Unknown version"):
        parse(BASE.replace("v=1", f"v={version}"))
