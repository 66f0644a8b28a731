"""Resolve the date/time tokens of a header line into a datetime."""

from __future__ import annotations

import logging
import re
from datetime import datetime

from .config import DEFAULT_CONFIG, ParserConfig

logger = logging.getLogger(__name__)

_MERIDIEM_RE = re.compile(r"([ap])\.?\s?m\.?", re.IGNORECASE)
_DIGIT_MERIDIEM_RE = re.compile(r"(\d)(am|pm)\b")
_DATE_SEPARATOR_RE = re.compile(r"[-.]")
_SPACES_RE = re.compile(r"\s+")


def normalize_datetime(date: str, time: str) -> str:
    """Build one "date time" string in the shape DATE_FORMATS expects.

    "12.11.23", "9:45 P.M." -> "12/11/23 9:45 pm"
    """
    date = _DATE_SEPARATOR_RE.sub("/", date.replace(",", "").strip())
    time = time.replace(",", "").lower()
    time = _MERIDIEM_RE.sub(r"\1m", time)
    time = _DIGIT_MERIDIEM_RE.sub(r"\1 \2", time)
    # Newer exports put a narrow no-break space before the marker
    return _SPACES_RE.sub(" ", f"{date} {time}").strip()


def resolve_timestamp(
    date: str, time: str, config: ParserConfig | None = None
) -> datetime | None:
    """Try each template of the configured DATE_FORMATS table in order.

    Returns None if nothing matches; callers keep the message and treat the
    timestamp as unresolved.
    """
    config = config or DEFAULT_CONFIG
    value = normalize_datetime(date, time)

    for fmt in config.date_formats:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    logger.debug("No date template matched %r", value)
    return None
