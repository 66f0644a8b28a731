"""Parse WhatsApp export text into an ordered list of Messages."""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .classifier import classify_content, strip_edited_marker
from .config import DEFAULT_CONFIG, TITLE_PREFIX_PATTERN, TITLE_SUFFIX_PATTERN, ParserConfig
from .errors import EmptyInputError, NoMessagesRecognizedError
from .grammar import is_blank, parse_header, strip_invisible
from .identity import resolve_identities
from .media import RefFactory, link_media
from .models import ChatMetadata, Message, MessageType, ParsedChat, ParsedHeader
from .timestamps import resolve_timestamp

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r?\n")
_TITLE_PREFIX_RE = re.compile(TITLE_PREFIX_PATTERN)
_TITLE_SUFFIX_RE = re.compile(TITLE_SUFFIX_PATTERN, re.IGNORECASE)


@dataclass
class _Draft:
    """A message whose body may still grow with continuation lines."""

    id: str
    timestamp: datetime | None
    sender: str
    type: MessageType
    is_self: bool
    lines: list[str] = field(default_factory=list)

    def build(self, config: ParserConfig) -> Message:
        content = "\n".join(self.lines)
        is_edited = False
        if self.type != MessageType.SYSTEM:
            content, is_edited = strip_edited_marker(content, config)

        return Message(
            id=self.id,
            timestamp=self.timestamp,
            sender=self.sender,
            content=content,
            type=self.type,
            is_self=self.is_self,
            is_edited=is_edited,
        )


def _start_draft(index: int, header: ParsedHeader, config: ParserConfig) -> _Draft:
    if header.is_system_event:
        msg_type, content = MessageType.SYSTEM, header.content
    else:
        msg_type, content = classify_content(header.content, config)

    is_self = (
        header.sender.lower() == config.self_label.lower()
        or header.sender == config.placeholder_sender
    )

    return _Draft(
        id=f"msg-{index}-{uuid.uuid4().hex[:9]}",
        timestamp=resolve_timestamp(header.date, header.time, config),
        sender=header.sender,
        type=msg_type,
        is_self=is_self,
        lines=[content],
    )


def normalize_messages(text: str, config: ParserConfig | None = None) -> list[Message]:
    """Split export text into messages, in input order.

    Header lines start a message; other lines are appended to the current
    one, blank lines included. A blank last line (the export's trailing
    newline) is dropped, and lines before the first header are ignored.
    """
    config = config or DEFAULT_CONFIG
    lines = _LINE_BREAK_RE.split(text)
    last_index = len(lines) - 1

    messages: list[Message] = []
    draft: _Draft | None = None

    for index, line in enumerate(lines):
        clean = strip_invisible(line)
        header = parse_header(clean.strip(), config)

        if header is not None:
            if draft is not None:
                messages.append(draft.build(config))
            draft = _start_draft(index, header, config)
        elif draft is not None:
            if clean.strip() or index < last_index:
                draft.lines.append(clean)

    if draft is not None:
        messages.append(draft.build(config))

    return messages


def collect_participants(
    messages: list[Message], config: ParserConfig | None = None
) -> list[str]:
    """Distinct senders in order of first appearance, without the system sender."""
    config = config or DEFAULT_CONFIG
    senders = dict.fromkeys(m.sender for m in messages)
    return [s for s in senders if s != config.system_sender]


def derive_title(file_name: str) -> str:
    """Clean an export file name, e.g. "WhatsApp Chat with Jane.zip" -> "Jane"."""
    name = Path(file_name).name if file_name else ""
    name = _TITLE_PREFIX_RE.sub("", name)
    name = _TITLE_SUFFIX_RE.sub("", name)
    return name.strip()


def parse_chat(
    text: str,
    title: str = "",
    media: Mapping[str, bytes] | None = None,
    config: ParserConfig | None = None,
    ref_factory: RefFactory | None = None,
) -> ParsedChat:
    """Run the full pipeline over one export.

    `title` may be the raw export file name; it is cleaned with
    derive_title. `media` maps attachment file names to their bytes.

    Raises EmptyInputError for blank text and NoMessagesRecognizedError
    when no line looks like a message header.
    """
    config = config or DEFAULT_CONFIG

    if is_blank(text):
        raise EmptyInputError()

    messages = normalize_messages(text, config)
    if not messages:
        raise NoMessagesRecognizedError()

    if media:
        messages = link_media(messages, media, ref_factory)

    clean_title = derive_title(title) or config.untitled
    participants = collect_participants(messages, config)
    resolution = resolve_identities(messages, participants, clean_title, config)

    unresolved = sum(1 for m in resolution.messages if not m.has_valid_timestamp)
    if unresolved:
        logger.info("%d message(s) have an unrecognised date format", unresolved)

    logger.info(
        "Parsed '%s': %d messages from %d participants",
        clean_title,
        len(resolution.messages),
        len(resolution.participants),
    )

    return ParsedChat(
        metadata=ChatMetadata(
            title=clean_title,
            participants=resolution.participants,
            message_count=len(resolution.messages),
        ),
        messages=resolution.messages,
        unresolved_timestamps=unresolved,
        ambiguous_identity=resolution.ambiguous,
    )
