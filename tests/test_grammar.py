from __future__ import annotations

from wareader.config import ParserConfig
from wareader.grammar import (
    BRACKETED,
    DASHED,
    HEADER_FORMS,
    is_blank,
    parse_header,
    strip_invisible,
)
from wareader.models import ParsedHeader


def test_parses_dashed_message() -> None:
    header = parse_header("12/11/23, 9:45 pm - John: Hello world")
    assert header == ParsedHeader(
        date="12/11/23",
        time="9:45 pm",
        sender="John",
        content="Hello world",
        is_system_event=False,
    )


def test_line_without_colon_is_system_event() -> None:
    header = parse_header("12/11/23, 9:46 pm - John joined using invite link")
    assert header == ParsedHeader(
        date="12/11/23",
        time="9:46 pm",
        sender="System",
        content="John joined using invite link",
        is_system_event=True,
    )


def test_non_header_returns_none() -> None:
    assert parse_header("This is just some random text") is None
    assert parse_header("") is None
    assert parse_header("9:45 pm - John: Hello") is None


def test_year_first_24_hour_date() -> None:
    header = parse_header("2023/11/12, 09:45 - John: Hello")
    assert header is not None
    assert header.date == "2023/11/12"
    assert header.time == "09:45"
    assert header.sender == "John"
    assert header.content == "Hello"


def test_bracketed_with_seconds() -> None:
    header = parse_header("[12/11/23, 9:45:30 pm] John: Hello")
    assert header is not None
    assert header.time == "9:45:30 pm"
    assert header.sender == "John"
    assert header.content == "Hello"
    assert not header.is_system_event


def test_meridiem_variants() -> None:
    for line, time in [
        ("12/11/23, 9:45 p.m. - John: Hi", "9:45 p.m."),
        ("12/11/23, 9:45PM - John: Hi", "9:45PM"),
        ("12/11/23, 9:45\u202fpm - John: Hi", "9:45\u202fpm"),
        ("[12/11/23, 9:45:30 AM] John: Hi", "9:45:30 AM"),
    ]:
        header = parse_header(line)
        assert header is not None, line
        assert header.time == time
        assert header.content == "Hi"


def test_invisible_sender_becomes_placeholder() -> None:
    line = strip_invisible("12/11/23, 9:45 pm - \u200e: hello")
    header = parse_header(line)
    assert header is not None
    assert header.sender == "Hidden"
    assert header.content == "hello"


def test_bracketed_invisible_sender_becomes_placeholder() -> None:
    line = strip_invisible("[12/11/23, 9:46:00 pm] \u200e: Hi")
    header = parse_header(line)
    assert header is not None
    assert header.sender == "Hidden"
    assert header.content == "Hi"
    assert not header.is_system_event


def test_bracketed_header_needs_a_tail() -> None:
    assert parse_header("[12/11/23, 9:46 pm]") is None


def test_no_break_space_sender_becomes_placeholder() -> None:
    header = parse_header("12/11/23, 9:45 pm - \u00a0: hello")
    assert header is not None
    assert header.sender == "Hidden"


def test_placeholder_label_comes_from_config() -> None:
    config = ParserConfig(placeholder_sender="Anonymous", system_sender="WhatsApp")
    header = parse_header("12/11/23, 9:45 pm - \u00a0: hello", config)
    assert header is not None
    assert header.sender == "Anonymous"

    event = parse_header("12/11/23, 9:45 pm - Jane left", config)
    assert event is not None
    assert event.sender == "WhatsApp"


def test_header_forms_match_independently() -> None:
    dashed = "12/11/23, 9:45 pm - John: Hello"
    bracketed = "[12/11/23, 9:45 pm] John: Hello"

    assert [f.name for f in HEADER_FORMS] == ["dashed", "bracketed"]
    assert DASHED.match(dashed) is not None
    assert DASHED.match(bracketed) is None
    assert BRACKETED.match(bracketed) is not None
    assert BRACKETED.match(dashed) is None


def test_sender_whitespace_is_trimmed() -> None:
    header = parse_header("12/11/23, 9:45 pm - John : Hello")
    assert header is not None
    assert header.sender == "John"


def test_strip_invisible_is_idempotent() -> None:
    text = "\ufeff\u200eHe\u200bllo\u200f \u2068Jane\u2069\u200d"
    once = strip_invisible(text)
    assert once == "Hello Jane"
    assert strip_invisible(once) == once


def test_is_blank() -> None:
    assert is_blank("")
    assert is_blank("   ")
    assert is_blank("\u200e\u00a0\u200b")
    assert not is_blank(" a ")
