"""Data models for parsed chat exports."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MessageType(str, Enum):
    TEXT = "text"
    SYSTEM = "system"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    CALL = "call"

    @property
    def is_media(self) -> bool:
        return self in (
            MessageType.IMAGE,
            MessageType.VIDEO,
            MessageType.AUDIO,
            MessageType.DOCUMENT,
        )


class ParsedHeader(BaseModel):
    """A line that matched the header grammar, before it becomes a Message."""

    model_config = ConfigDict(frozen=True)

    date: str
    time: str
    sender: str
    content: str = ""
    is_system_event: bool = False


class Message(BaseModel):
    """One chat message; attachments carry the file name as content."""

    model_config = ConfigDict(frozen=True)

    id: str
    # None when no date template matched the header
    timestamp: datetime | None = None
    sender: str
    content: str
    type: MessageType = MessageType.TEXT
    is_self: bool = False
    is_edited: bool = False
    media_ref: str | None = None

    @property
    def has_valid_timestamp(self) -> bool:
        return self.timestamp is not None


class ChatMetadata(BaseModel):
    """Title, participants and message count of a parsed chat."""

    model_config = ConfigDict(frozen=True)

    title: str
    participants: list[str] = Field(default_factory=list)
    message_count: int = 0


class IdentityResolution(BaseModel):
    """Result of rewriting placeholder and self senders."""

    model_config = ConfigDict(frozen=True)

    messages: list[Message]
    participants: list[str]
    # True when leftover placeholders had to be mapped to the self label
    ambiguous: bool = False


class ParsedChat(BaseModel):
    """Messages and metadata of one export, with data-quality counters."""

    model_config = ConfigDict(frozen=True)

    metadata: ChatMetadata
    messages: list[Message] = Field(default_factory=list)
    unresolved_timestamps: int = 0
    ambiguous_identity: bool = False


class ChatExport(BaseModel):
    """Raw input handed to the parser: transcript text plus attached files."""

    title: str
    text: str
    media: dict[str, bytes] = Field(default_factory=dict)
