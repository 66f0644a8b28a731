"""Header grammar for WhatsApp export lines.

A header line starts a new message; anything else continues the body of
the previous one. Two header forms are recognised, tried in order:

    12/11/23, 9:45 pm - John: Hello           (dashed)
    12/11/23, 9:46 pm - John joined           (dashed, system event)
    [12/11/23, 9:45:30 pm] John: Hello        (bracketed)
"""

from __future__ import annotations

import re

from .config import DEFAULT_CONFIG, INVISIBLE_CHARS, ParserConfig
from .models import ParsedHeader

_INVISIBLE_RE = re.compile(f"[{INVISIBLE_CHARS}]")
_BLANK_RE = re.compile(f"^[{INVISIBLE_CHARS}\\u00a0\\s]*$")

DATE_PATTERN = r"\d{1,4}[-./]\d{1,2}[-./]\d{1,4}"
# Optional seconds, then an am/pm marker that may be dotted or spaced
TIME_PATTERN = r"\d{1,2}:\d{2}(?::\d{2})?(?:\s?[ap]\.?\s?m\.?)?"
# No colon after the sender means the whole tail is a system event
_TAIL_PATTERN = r"(?P<sender>[^:]+)(?::\s(?P<content>.*))?$"


def strip_invisible(text: str) -> str:
    """Remove direction marks, zero-width characters and the BOM."""
    return _INVISIBLE_RE.sub("", text)


def is_blank(text: str) -> bool:
    """True for empty text or text made only of whitespace/invisible marks."""
    return bool(_BLANK_RE.match(text))


class HeaderForm:
    """One accepted header layout."""

    def __init__(self, name: str, pattern: str):
        self.name = name
        self.pattern = re.compile(pattern, re.IGNORECASE)

    def __repr__(self) -> str:
        return f"HeaderForm({self.name!r})"

    def match(self, line: str) -> re.Match[str] | None:
        return self.pattern.match(line)

    def parse(self, line: str, config: ParserConfig = DEFAULT_CONFIG) -> ParsedHeader | None:
        match = self.match(line)
        if match is None:
            return None

        date, time = match.group("date"), match.group("time")
        sender = match.group("sender")
        content = match.group("content")

        if content is None:
            return ParsedHeader(
                date=date,
                time=time,
                sender=config.system_sender,
                content=sender.strip(),
                is_system_event=True,
            )

        if is_blank(sender):
            sender = config.placeholder_sender
        else:
            sender = sender.strip()

        if is_blank(content):
            content = ""

        return ParsedHeader(date=date, time=time, sender=sender, content=content)


DASHED = HeaderForm(
    "dashed",
    rf"^(?P<date>{DATE_PATTERN}),?\s(?P<time>{TIME_PATTERN})\s-\s?{_TAIL_PATTERN}",
)
BRACKETED = HeaderForm(
    "bracketed",
    rf"^\[(?P<date>{DATE_PATTERN}),?\s(?P<time>{TIME_PATTERN})\]\s?{_TAIL_PATTERN}",
)

HEADER_FORMS = (DASHED, BRACKETED)


def parse_header(line: str, config: ParserConfig | None = None) -> ParsedHeader | None:
    """Match a cleaned, trimmed line against each header form in order.

    Returns None when the line is not a header, i.e. it continues the
    previous message.
    """
    config = config or DEFAULT_CONFIG
    for form in HEADER_FORMS:
        header = form.parse(line, config)
        if header is not None:
            return header
    return None
