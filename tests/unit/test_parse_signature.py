from datetime import datetime, timezone

from dkim_signature import Signature, parse

GMAIL_HEADER = (
    "v=1; a=rsa-sha256; c=relaxed/relaxed;\r\n"
    "       d=gmail.com; s=20120113;\r\n"
    "       h=mime-version:date:message-id:subject:from:to:content-type;\r\n"
    "       bh=DrlXO8ocnosZnW5ZN7P4S/fIdR8vwHj0TyzoPISZF2Q=;\r\n"
    "       b=gOHBExs2JcJFRrozPDw88Js0dc0AHOo6YTZqrDTedfcK/jM/mxfu5rfVzuUnKAGiS5\r\n"
    "       ZvRvXvwYjIW0B9t0DDHDOs5soIukuEXeUw9OV2QD8qc5pmOShuRQWyW5pRftTF87omkj\r\n"
    "       gV2Eik5K2f8FpNlyvuLDjMUmyP8RpLaRrii6+kRRsoJzzP41IqALmlLmJfvtnkeu5kM0\r\n"
    "       v4XnQ4hBNcaLuCmq3fZfCQFDexofECQOZ8FWE0VfdASG8HOJ6jgxuKwYtNfy11ySUSrI\r\n"
    "       wFFlrjTfiNqSD9nzQns3j+xXLtqsvviJQXJgkC8O6mLel3GDwm8LHzBoszzqZ/FiL4rg\r\n"
    "       Vdfw=="
)

GMAIL_HEADERS = [
    "mime-version",
    "date",
    "message-id",
    "subject",
    "from",
    "to",
    "content-type",
]

RFC_EXAMPLE = (
    "v=1; a=rsa-sha256; d=example.net; s=brisbane;\r\n"
    "      c=simple; q=dns/txt; i=@eng.example.net;\r\n"
    "      t=1117574938; x=1118006938;\r\n"
    "      h=from:to:subject:date;\r\n"
    "      z=From:foo@eng.example.net|To:joe@example.com|\r\n"
    "       Subject:demo=20run|Date:July=205,=202005=203:44:08=20PM=20-0700;\r\n"
    "      bh=MTIzNDU2Nzg5MDEyMzQ1Njc4OTAxMjM0NTY3ODkwMTI=;\r\n"
    "      b=dzdVyOfAKCdLXdJOc9G2q8LoXSlEniSbav+yuU4zGeeruD00lszZVoG4ZHRNiYzR"
)


def _assert_gmail_fields(signature: Signature) -> None:
    assert signature.version == 1
    assert signature.algorithm == "rsa-sha256"
    assert signature.canonicalization == ("relaxed", "relaxed")
    assert signature.domain == "gmail.com"
    assert signature.query_methods == ["dns/txt"]
    assert signature.selector == "20120113"
    assert signature.headers == GMAIL_HEADERS


def test_parse_google_mail_signature() -> None:
    signature = parse(GMAIL_HEADER)
    _assert_gmail_fields(signature)
    assert signature.body_hash == "DrlXO8ocnosZnW5ZN7P4S/fIdR8vwHj0TyzoPISZF2Q="
    assert signature.data.startswith("gOHBExs2JcJFRroz")
    assert signature.data.endswith("L4rgVdfw==")
    assert " " not in signature.data
    assert signature.unknown_tags == {}


def test_parse_keeps_unknown_tags() -> None:
    for extra in ("dara", "darn"):
        header = GMAIL_HEADER.replace("s=20120113;", f"s=20120113; {extra}=google.com; ")
        signature = parse(header)
        _assert_gmail_fields(signature)
        assert signature.unknown_tags == {extra: "google.com"}


def test_parse_mandrill_header_list_with_spaces() -> None:
    header = (
        "v=1; a=rsa-sha256; c=relaxed/relaxed; d=mandrillapp.com;\r\n"
        "      i=@mandrillapp.com; q=dns/txt; s=mandrill; t=1508540429; h=From :\r\n"
        "      Sender : Subject : To : Message-Id : Date : MIME-Version : Content-Type\r\n"
        "      : From : Subject : Date : X-Mandrill-User : List-Unsubscribe;\r\n"
        "      bh=ETZ1UqfGj/jZdVFwmNQQZ62c8njGJ6eC7j3Hpr7A6Ao=;\r\n"
        "      b=GDtwx8ATyFwiQZ/wqz8MTyaYaEFZ5MmDhD4X+0oCK5+FTko9yl2cnC+w+7OxkysOIfxopd "
        "/fdkH1Ads3fqNyB88pegcoV07cT2UxFMFmlebzn7lV8PJY26lqqesf7qLSoZlR5PwzeFiIU4 "
        "UEm6Gbvw4LGpnKdL2+T9hgAD+4mVM="
    )
    signature = parse(header)
    assert signature.algorithm == "rsa-sha256"
    assert signature.canonicalization == ("relaxed", "relaxed")
    assert signature.domain == "mandrillapp.com"
    assert signature.query_methods == ["dns/txt"]
    assert signature.selector == "mandrill"
    assert signature.identifier == "@mandrillapp.com"
    assert signature.created_at == datetime.fromtimestamp(1508540429, tz=timezone.utc)
    assert signature.headers == [
        "from",
        "sender",
        "subject",
        "to",
        "message-id",
        "date",
        "mime-version",
        "content-type",
        "from",
        "subject",
        "date",
        "x-mandrill-user",
        "list-unsubscribe",
    ]
    assert " " not in signature.data


def test_parse_rfc_example_optional_tags() -> None:
    signature = parse(RFC_EXAMPLE)
    assert signature.canonicalization == ("simple", "simple")
    assert signature.identifier == "@eng.example.net"
    assert signature.created_at == datetime(2005, 5, 31, 21, 28, 58, tzinfo=timezone.utc)
    assert int(signature.expires_at.timestamp()) == 1118006938
    assert signature.headers == ["from", "to", "subject", "date"]
    assert signature.copied_headers == [
        "From:foo@eng.example.net",
        "To:joe@example.com",
        "Subject:demo run",
        "Date:July 5, 2005 3:44:08 PM -0700",
    ]
    assert signature.body_length is None


def test_parse_accepts_bytes_input() -> None:
    raw = GMAIL_HEADER.encode("ascii")
    for value in (raw, bytearray(raw), memoryview(raw)):
        _assert_gmail_fields(parse(value))


def test_parse_decodes_bytes_with_charset() -> None:
    raw = "v=1; a=rsa-sha1; d=example.test; s=default; h=from; bh=AA==; b=AA==".encode("utf-16-le")
    signature = parse(raw, charset="utf-16-le")
    assert signature.domain == "example.test"


def test_parse_classmethod_and_trailing_semicolon() -> None:
    header = "v=1; a=RSA-SHA1; d=Example.Test; s=Default; h=From:To; l=42; bh=AA==; b=AA==;\r\n"
    signature = Signature.parse(header)
    assert signature.algorithm == "rsa-sha1"
    assert signature.domain == "example.test"
    assert signature.selector == "default"
    assert signature.headers == ["from", "to"]
    assert signature.body_length == 42


def test_parse_canonicalization_body_defaults_to_simple() -> None:
    header = "v=1; a=rsa-sha1; c=Relaxed; d=example.test; s=default; h=from; bh=AA==; b=AA=="
    assert parse(header).canonicalization == ("relaxed", "simple")


def test_parse_query_methods_are_lowercased() -> None:
    header = "v=1; a=rsa-sha1; q=DNS/TXT:Other/Method; d=example.test; s=default; h=from; bh=AA==; b=AA=="
    assert parse(header).query_methods == ["dns/txt", "other/method"]


def test_parse_internationalized_domain_to_punycode() -> None:
    header = "v=1; a=rsa-sha1; d=EXAMPLE.xn--jxalpdlp; s=xn--kxae4bafwg; h=from; bh=AA==; b=AA=="
    signature = parse(header)
    assert signature.domain == "example.xn--jxalpdlp"
    assert signature.selector == "xn--kxae4bafwg"


def test_parse_identifier_quoted_printable() -> None:
    header = "v=1; a=rsa-sha1; d=example.test; s=default; i=j=C3=B8rn@example.test; h=from; bh=AA==; b=AA=="
    assert parse(header).identifier == "jørn@example.test"
