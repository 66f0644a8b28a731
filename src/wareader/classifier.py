"""Classify message bodies: attachments, calls, edits and plain text."""

from __future__ import annotations

import re

from .config import DEFAULT_CONFIG, ParserConfig
from .models import MessageType

# The three attachment conventions WhatsApp uses across platforms
ATTACHMENT_PATTERNS = (
    re.compile(r"<attached:\s*(?P<filename>.*?)>", re.IGNORECASE),
    re.compile(r"^(?P<filename>.*?)\s+\(file attached\)$", re.IGNORECASE),
    re.compile(r"^(?P<filename>.*?)\s+<attached>$", re.IGNORECASE),
)


def resolve_media_type(filename: str, config: ParserConfig | None = None) -> MessageType:
    """Map a file name to a media kind by extension; unknown -> document."""
    config = config or DEFAULT_CONFIG
    extension = filename.rsplit(".", 1)[-1].lower()
    for media_type, extensions in config.media_extensions.items():
        if extension in extensions:
            return media_type
    return MessageType.DOCUMENT


def match_attachment(content: str) -> str | None:
    """Return the attached file name, or None for a non-attachment body."""
    for pattern in ATTACHMENT_PATTERNS:
        match = pattern.search(content)
        if match:
            filename = match.group("filename").strip()
            if filename:
                return filename
    return None


def is_call(content: str, config: ParserConfig | None = None) -> bool:
    config = config or DEFAULT_CONFIG
    text = content.strip().lower()
    for marker in config.call_markers:
        if text == marker or text.startswith((f"{marker}.", f"{marker},")):
            return True
    return False


def classify_content(
    content: str, config: ParserConfig | None = None
) -> tuple[MessageType, str]:
    """Decide the type of a header line's body and its canonical content.

    Attachments are reduced to their file name. Only the header line is
    inspected; continuation lines are appended afterwards.
    """
    config = config or DEFAULT_CONFIG

    filename = match_attachment(content)
    if filename is not None:
        return resolve_media_type(filename, config), filename

    if is_call(content, config):
        return MessageType.CALL, content

    return MessageType.TEXT, content


def strip_edited_marker(
    content: str, config: ParserConfig | None = None
) -> tuple[str, bool]:
    """Remove a trailing "<This message was edited>" tag.

    Must run on the complete body, since the tag lands on the last line of
    a multi-line message.
    """
    config = config or DEFAULT_CONFIG
    trimmed = content.rstrip()
    if trimmed.endswith(config.edited_marker):
        return trimmed[: -len(config.edited_marker)].rstrip(), True
    return content, False
