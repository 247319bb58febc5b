"""Shared fixtures for slack-archive tests.

The ``export_*`` fixtures lay out the same Slack export in every supported
packaging: a directory tree, tar archives (raw, gzip, bzip2) and a zip.
"""

from __future__ import annotations

import json
import tarfile
import zipfile
from pathlib import Path
from typing import Any, Callable

import pytest

from slack_archive.source import DirSource, LogSource, TarSource, ZipSource

# Archives place everything under this root directory
EXPORT_ROOT = "slack-export"


def _day_message(ts: str, user: str = "U001", text: str = "hello", **extra: Any) -> dict:
    """Build a minimal message record as found in a day file."""
    return {"type": "message", "user": user, "text": text, "ts": ts, **extra}


@pytest.fixture
def sample_users() -> list[dict]:
    return [
        {
            "id": "U001",
            "name": "alice",
            "profile": {"real_name": "Alice Liddell", "display_name": "alice"},
        },
        {
            "id": "U002",
            "name": "bob",
            "profile": {"real_name": "", "display_name": "bobby"},
        },
        {
            "id": "U003",
            "name": "nobody",
            "profile": {},
        },
        {
            "id": "U004",
            "name": "helper",
            "is_bot": True,
            "profile": {"real_name": "Helper Bot", "bot_id": "B001"},
        },
    ]


@pytest.fixture
def sample_channels() -> list[dict]:
    return [
        {"id": "C002", "name": "random"},
        {"id": "C001", "name": "general"},
        {"id": "C003", "name": "dev"},
    ]


@pytest.fixture
def export_files(sample_users: list[dict], sample_channels: list[dict]) -> dict[str, bytes]:
    """Logical path to content of every file in the sample export."""
    general_jan = [
        _day_message("1704067200.000100", user="U001", text="happy new year"),
        _day_message("1704067300.000200", user="U001", text="anyone here?"),
        _day_message("1704067400.000300", user="U002", subtype="channel_join", text="joined"),
    ]
    general_feb = [
        _day_message(
            "1706745600.000100",
            user="U002",
            text="thread root",
            thread_ts="1706745600.000100",
        ),
        _day_message(
            "1706745700.000200",
            user="U001",
            text="reply",
            thread_ts="1706745600.000100",
        ),
    ]
    files = {
        "users.json": json.dumps(sample_users),
        "channels.json": json.dumps(sample_channels),
        "emoji.json": json.dumps({"party": "https://emoji.example.com/party.gif"}),
        "data.json": '{"foo":"bar","baz":123}\n',
        "subdir/data01.json": "{}\n",
        "subdir/data02.json": '{"foo":"bar"}\n',
        "subdir/data03.txt": "Hello World\n",
        "subdir/subsubdir/deep.json": "[]\n",
        "C001/2024-01-01.json": json.dumps(general_jan),
        "C001/2024-02-01.json": json.dumps(general_feb),
        "C001/notes.txt": "not a day file\n",
        "C002/2024-03-10.json": json.dumps([_day_message("1710028800.000100")]),
    }
    return {name: content.encode("utf-8") for name, content in files.items()}


def _write_tree(base: Path, files: dict[str, bytes]) -> Path:
    for name, content in files.items():
        path = base / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return base


@pytest.fixture
def export_dir(tmp_path: Path, export_files: dict[str, bytes]) -> Path:
    return _write_tree(tmp_path / "tree" / EXPORT_ROOT, export_files)


@pytest.fixture
def make_tar(tmp_path: Path, export_dir: Path) -> Callable[[str], Path]:
    """Return a factory building the export as tar with the given mode (w, w:gz, w:bz2)."""
    suffixes = {"w": ".tar", "w:gz": ".tar.gz", "w:bz2": ".tar.bz2"}

    def factory(mode: str) -> Path:
        path = tmp_path / f"export{suffixes[mode]}"
        with tarfile.open(path, mode) as tf:
            # Directory entries included, as produced by `tar c slack-export`
            tf.add(export_dir, arcname=EXPORT_ROOT)
        return path

    return factory


@pytest.fixture
def export_zip(tmp_path: Path, export_files: dict[str, bytes]) -> Path:
    """The export as a zip holding file entries only (no directory entries)."""
    path = tmp_path / "export.zip"
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in export_files.items():
            zf.writestr(f"{EXPORT_ROOT}/{name}", content)
    return path


@pytest.fixture(params=["dir", "tar", "tar.gz", "tar.bz2", "zip"])
def any_source(
    request: pytest.FixtureRequest,
    export_dir: Path,
    make_tar: Callable[[str], Path],
    export_zip: Path,
) -> LogSource:
    """The sample export opened through each LogSource variant."""
    kind = request.param
    if kind == "dir":
        return DirSource(export_dir)
    if kind == "tar":
        return TarSource(make_tar("w"), EXPORT_ROOT)
    if kind == "tar.gz":
        return TarSource(make_tar("w:gz"), EXPORT_ROOT)
    if kind == "tar.bz2":
        return TarSource(make_tar("w:bz2"), EXPORT_ROOT)
    return ZipSource(export_zip, EXPORT_ROOT)


@pytest.fixture
def write_day_files(tmp_path: Path) -> Callable[[dict[str, list[dict]]], DirSource]:
    """Return a factory writing day files (logical path -> records) under tmp_path."""

    def factory(files: dict[str, list[dict]]) -> DirSource:
        _write_tree(tmp_path, {name: json.dumps(msgs).encode() for name, msgs in files.items()})
        return DirSource(tmp_path)

    return factory
