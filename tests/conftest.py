"""
Pytest fixtures for smart organizer tests.

Provides reusable fixtures for temporary directories, sample files and
output capture.
"""

import os
from datetime import datetime, timedelta
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Directory to organize."""
    root = tmp_path / "target"
    root.mkdir()
    return root


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """Directory holding the run log, kept apart from the target."""
    work = tmp_path / "work"
    work.mkdir()
    return work


@pytest.fixture
def sample_files(temp_dir: Path) -> dict:
    """
    Create one file per default category at the top of the target.

    Returns a dict mapping file name to path.
    """
    files = {}
    for name, content in [
        ("photo.jpg", b"\xff\xd8\xff\xe0 fake jpeg"),
        ("report.pdf", b"%PDF-1.4 fake pdf"),
        ("song.mp3", b"ID3 fake mp3"),
    ]:
        f = temp_dir / name
        f.write_bytes(content)
        files[name] = f
    return files


@pytest.fixture
def nested_files(temp_dir: Path) -> list:
    """Create a.jpg, sub/b.png and sub/deep/c.gif."""
    (temp_dir / "sub" / "deep").mkdir(parents=True)
    paths = [
        temp_dir / "a.jpg",
        temp_dir / "sub" / "b.png",
        temp_dir / "sub" / "deep" / "c.gif",
    ]
    for p in paths:
        p.write_text(f"content of {p.name}")
    return paths


@pytest.fixture
def duplicate_files(temp_dir: Path) -> list:
    """Create a/photo.jpg and b/photo.jpg with the same content and day."""
    content = b"same bytes in both copies"
    stamp = (datetime.now() - timedelta(days=3)).timestamp()

    files = []
    for folder in ("a", "b"):
        (temp_dir / folder).mkdir()
        f = temp_dir / folder / "photo.jpg"
        f.write_bytes(content)
        os.utime(f, (stamp, stamp))
        files.append(f)
    return files


@pytest.fixture
def capture_output() -> list:
    """Create a list to capture output from operations."""
    return []


@pytest.fixture
def output_callback(capture_output: list):
    """Create an output callback that captures messages."""
    def callback(message: str) -> None:
        capture_output.append(message)
    return callback
