"""Central configuration for labels, lookup tables and paths."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .models import MessageType

# Where `wareader export` writes JSON, override with WAREADER_OUTPUT_DIR
OUTPUT_DIR = Path(os.environ.get("WAREADER_OUTPUT_DIR", "."))

# Sender labels
SYSTEM_SENDER = "System"
PLACEHOLDER_SENDER = "Hidden"  # anonymized / invisible-character sender
SELF_LABEL = "You"
UNTITLED = "Untitled"  # counterpart name when the export has no usable title

# LRM, RLM, zero-width space/non-joiner/joiner, word joiner, BOM,
# bidi embeddings/overrides and isolates (regex character class body)
INVISIBLE_CHARS = "\u200e\u200f\u200b-\u200d\u2060\ufeff\u202a-\u202e\u2066-\u2069"

# Tried top to bottom, first successful parse wins. Day-first is preferred
# over month-first for ambiguous short dates such as 03/04/23.
# Dates are normalized to "/" separators and a lower-case "am"/"pm" before
# matching, see timestamps.normalize_datetime.
DATE_FORMATS = (
    # 12-hour with seconds
    "%d/%m/%y %I:%M:%S %p",
    "%m/%d/%y %I:%M:%S %p",
    "%d/%m/%Y %I:%M:%S %p",
    "%m/%d/%Y %I:%M:%S %p",
    # 12-hour
    "%d/%m/%y %I:%M %p",
    "%m/%d/%y %I:%M %p",
    "%d/%m/%Y %I:%M %p",
    "%m/%d/%Y %I:%M %p",
    # 24-hour with seconds
    "%d/%m/%y %H:%M:%S",
    "%m/%d/%y %H:%M:%S",
    "%d/%m/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
    # 24-hour
    "%d/%m/%y %H:%M",
    "%m/%d/%y %H:%M",
    "%d/%m/%Y %H:%M",
    "%m/%d/%Y %H:%M",
    # year first
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %I:%M:%S %p",
    "%Y/%m/%d %I:%M %p",
)

# Extensions not listed here resolve to a document
MEDIA_EXTENSIONS = {
    MessageType.IMAGE: ("jpg", "jpeg", "png", "webp", "gif"),
    MessageType.VIDEO: ("mp4", "mov", "avi"),
    MessageType.AUDIO: ("mp3", "wav", "ogg", "m4a", "opus"),
}

EDITED_MARKER = "<This message was edited>"

CALL_MARKERS = (
    "missed voice call",
    "missed video call",
    "missed group voice call",
    "missed group video call",
    "voice call",
    "video call",
)

# Stripped from archive/file names to get the chat title
TITLE_PREFIX_PATTERN = r"^WhatsApp Chat (?:with|-) "
TITLE_SUFFIX_PATTERN = r"\.(?:txt|zip)$"


class ParserConfig(BaseModel):
    """Labels and lookup tables used by every parsing stage.

    Defaults come from the module constants above; pass a customised
    instance to swap a table (e.g. a synthetic extension map in tests).
    """

    model_config = ConfigDict(frozen=True)

    system_sender: str = SYSTEM_SENDER
    placeholder_sender: str = PLACEHOLDER_SENDER
    self_label: str = SELF_LABEL
    untitled: str = UNTITLED
    date_formats: tuple[str, ...] = DATE_FORMATS
    media_extensions: dict[MessageType, tuple[str, ...]] = MEDIA_EXTENSIONS
    edited_marker: str = EDITED_MARKER
    call_markers: tuple[str, ...] = CALL_MARKERS


DEFAULT_CONFIG = ParserConfig()
