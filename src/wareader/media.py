"""Attach references to exported media files onto attachment messages."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable, Mapping
from pathlib import Path

from .models import Message

logger = logging.getLogger(__name__)

RefFactory = Callable[[str, bytes], str]


def blob_ref(filename: str, data: bytes) -> str:
    """Default handle: content hash plus file name. The bytes stay with the caller."""
    digest = hashlib.sha256(data).hexdigest()[:16]
    return f"blob:{digest}/{filename}"


def file_ref(directory: Path) -> RefFactory:
    """Reference factory for media the caller has written to `directory`."""
    directory = directory.resolve()

    def _ref(filename: str, data: bytes) -> str:
        return (directory / filename).as_uri()

    return _ref


def link_media(
    messages: list[Message],
    media: Mapping[str, bytes],
    ref_factory: RefFactory | None = None,
) -> list[Message]:
    """Return messages with `media_ref` set on attachments found in `media`.

    Lookup is by exact file name. Attachments without a matching file keep
    their type and no reference.
    """
    if not media:
        return list(messages)

    ref_factory = ref_factory or blob_ref
    linked: list[Message] = []
    missing = 0

    for msg in messages:
        if msg.type.is_media:
            data = media.get(msg.content)
            if data is not None:
                msg = msg.model_copy(update={"media_ref": ref_factory(msg.content, data)})
            else:
                missing += 1
        linked.append(msg)

    if missing:
        logger.info("%d attachment(s) have no matching media file", missing)

    return linked
