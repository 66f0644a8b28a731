"""Import pipeline: export file (.txt or .zip) → parsing → JSON."""

from __future__ import annotations

import logging
import re
import zipfile
import zlib
from pathlib import Path, PurePosixPath

from .config import ParserConfig
from .errors import MissingTranscriptError, UnsupportedFileError
from .media import file_ref
from .models import ChatExport, ParsedChat
from .parser import derive_title, parse_chat

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_RE = re.compile(r'[\\/:*?"<>|]+')


def _read_zip(zip_file: Path) -> tuple[str, dict[str, bytes]]:
    if not zipfile.is_zipfile(str(zip_file)):
        raise UnsupportedFileError(f"Not a valid ZIP file: {zip_file}")

    try:
        with zipfile.ZipFile(str(zip_file), "r") as zf:
            entries = [info for info in zf.infolist() if not info.is_dir()]
            transcript = next(
                (info for info in entries if info.filename.lower().endswith(".txt")), None
            )
            if transcript is None:
                raise MissingTranscriptError(
                    "Could not find a .txt file in the ZIP archive."
                )

            text = zf.read(transcript).decode("utf-8", errors="replace")

            # Messages reference attachments by bare file name; the last entry wins
            media: dict[str, bytes] = {}
            for info in entries:
                if info is transcript:
                    continue
                name = PurePosixPath(info.filename).name
                if name in media:
                    logger.debug(
                        "Duplicate media name %s in %s, keeping %s",
                        name,
                        zip_file,
                        info.filename,
                    )
                media[name] = zf.read(info)
    except (zipfile.BadZipFile, zlib.error) as exc:
        raise UnsupportedFileError(
            f"Could not read {zip_file.name}. It might be corrupted or in an unsupported format."
        ) from exc

    logger.debug(
        "Read %s: transcript %s, %d media file(s)",
        zip_file,
        transcript.filename,
        len(media),
    )
    return text, media


def load_export(path: str | Path) -> ChatExport:
    """Read a WhatsApp export into transcript text and attached files.

    A .zip archive contributes its first .txt entry as the transcript and
    every other file as media; a .txt file is the transcript alone.
    """
    export_path = Path(path)
    suffix = export_path.suffix.lower()

    if suffix == ".zip":
        text, media = _read_zip(export_path)
    elif suffix == ".txt":
        text = export_path.read_bytes().decode("utf-8", errors="replace")
        media = {}
    else:
        raise UnsupportedFileError(
            "Please provide a .txt file or a .zip archive containing the chat export."
        )

    return ChatExport(title=derive_title(export_path.name), text=text, media=media)


def import_chat(
    path: str | Path,
    media_dir: Path | None = None,
    config: ParserConfig | None = None,
) -> ParsedChat:
    """Load and parse an export.

    With `media_dir`, attachments are written there and messages reference
    them by file:// URI; otherwise references are in-memory blob handles.
    """
    export = load_export(path)

    ref_factory = None
    if media_dir is not None and export.media:
        media_dir.mkdir(parents=True, exist_ok=True)
        for name, data in export.media.items():
            (media_dir / name).write_bytes(data)
        ref_factory = file_ref(media_dir)
        logger.info("Wrote %d media file(s) to %s", len(export.media), media_dir)

    return parse_chat(
        export.text,
        title=export.title,
        media=export.media,
        config=config,
        ref_factory=ref_factory,
    )


def write_json(chat: ParsedChat, output_dir: Path) -> Path:
    """Write `<title>.json` holding metadata, messages and diagnostics."""
    output_dir.mkdir(parents=True, exist_ok=True)
    name = _UNSAFE_FILENAME_RE.sub("_", chat.metadata.title) or "chat"
    out_path = output_dir / f"{name}.json"
    out_path.write_text(chat.model_dump_json(indent=2), encoding="utf-8")
    return out_path
