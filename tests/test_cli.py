from __future__ import annotations

import json
import zipfile
from pathlib import Path

from click.testing import CliRunner

from wareader import __version__
from wareader.cli import cli

TRANSCRIPT = (
    "12/11/23, 9:44 pm - Messages are end-to-end encrypted\n"
    "12/11/23, 9:45 pm - Jane: Hello\n"
    "12/11/23, 9:46 pm - You: Hi!\n"
    "Missed you\n"
    "12/11/23, 9:47 pm - Jane: <attached: photo.jpg>\n"
)


def _export(tmp_path: Path, text: str = TRANSCRIPT) -> Path:
    path = tmp_path / "WhatsApp Chat with Jane.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_inspect(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, ["inspect", str(_export(tmp_path))])

    assert result.exit_code == 0, result.output
    assert "Jane" in result.output
    assert "Jane, You" in result.output
    assert "Messages:       4" in result.output
    assert "image: 1" in result.output
    assert "2023-11-12" in result.output


def test_export_writes_json(tmp_path: Path) -> None:
    out_dir = tmp_path / "out"
    result = CliRunner().invoke(
        cli, ["export", str(_export(tmp_path)), "--output-dir", str(out_dir)]
    )

    assert result.exit_code == 0, result.output
    data = json.loads((out_dir / "Jane.json").read_text(encoding="utf-8"))
    assert data["metadata"]["message_count"] == 4
    assert data["messages"][2]["content"] == "Hi!\nMissed you"


def test_empty_export_is_reported(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, ["inspect", str(_export(tmp_path, "   \n"))])

    assert result.exit_code == 1
    assert "empty" in result.output


def test_not_an_export_is_reported(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, ["inspect", str(_export(tmp_path, "just some notes\n"))])

    assert result.exit_code == 1
    assert "Export Chat" in result.output


def test_corrupted_zip_is_reported(tmp_path: Path) -> None:
    path = tmp_path / "WhatsApp Chat with Jane.zip"
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_STORED) as zf:
        zf.writestr("WhatsApp Chat with Jane.txt", TRANSCRIPT.encode("utf-8"))
    path.write_bytes(path.read_bytes().replace(b"Missed you", b"Missed yoU"))

    result = CliRunner().invoke(cli, ["inspect", str(path)])

    assert result.exit_code == 1
    assert "corrupted" in result.output
    assert "Traceback" not in result.output
