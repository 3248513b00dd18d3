"""
Filesystem helpers for the smart organizer.

Everything here works on a single path or directory and keeps no state
between calls, so each helper can be unit tested in isolation.
"""

import os
import shutil
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .config import Config, DEFAULT_CONFIG


# (file name, modified day as YYYY-MM-DD, size in bytes)
Fingerprint = Tuple[str, str, int]


def collect_files(root: Path, skip: Iterable[str] = ()) -> List[Path]:
    """
    Find every file under ``root``, at any depth.

    Hidden entries (names starting with a dot) are ignored, as are
    directories whose name is in ``skip``. Category folders are passed in
    ``skip`` so files that were already sorted are not picked up again.

    Args:
        root: Directory to walk
        skip: Directory names to leave out

    Returns:
        File paths in walk order

    Raises:
        OSError: If any directory cannot be read
    """
    skip = set(skip)
    files: List[Path] = []
    pending = [root]

    while pending:
        current = pending.pop()
        subdirs = []
        for entry in sorted(current.iterdir()):
            name = entry.name
            if name.startswith("."):
                continue
            if entry.is_dir():
                if name not in skip:
                    subdirs.append(entry)
            else:
                files.append(entry)
        # Reversed so the first subdirectory is walked first
        pending.extend(reversed(subdirs))

    return files


def is_junk(file_path: Path, config: Config = DEFAULT_CONFIG) -> bool:
    """
    Check if a file is hidden or an OS/tool artifact that is never organized.

    Covers dotfiles (``.DS_Store`` included), ``Thumbs.db``,
    ``desktop.ini`` and the run log written by this tool.
    """
    name = file_path.name
    if not name:
        return True
    return (
        config.is_hidden(name)
        or name in config.junk_names
        or name == config.log_filename
    )


def get_extension(file_path: Path) -> Optional[str]:
    """
    Get the extension of a file, without the dot.

    Returns None when the name has no extension (``README``) or is a bare
    dotfile (``.bashrc``). The case is kept as it appears in the name.
    """
    stem, dot, ext = file_path.name.rpartition(".")
    if not dot or not stem:
        return None
    return ext


def get_file_mtime(file_path: Path) -> datetime:
    """
    Get the modification time of a file as a datetime object.

    Args:
        file_path: Path to the file

    Returns:
        Datetime of last modification (local time)
    """
    return datetime.fromtimestamp(file_path.stat().st_mtime)


def get_file_size_bytes(file_path: Path) -> int:
    """
    Get the size of a file in bytes.

    Args:
        file_path: Path to the file

    Returns:
        File size in bytes
    """
    return file_path.stat().st_size


def make_fingerprint(file_path: Path, size: int, mtime: datetime) -> Fingerprint:
    """Build the duplicate-detection key: name, modified day, size."""
    return (file_path.name, mtime.strftime("%Y-%m-%d"), size)


def resolve_collision(
    directory: Path,
    original_name: str,
    extension: str,
    today: Optional[date] = None,
) -> Path:
    """
    Pick a destination path in ``directory`` that does not exist yet.

    Tries, in order:
        photo.jpg
        photo_2026-02-12.jpg
        photo_2026-02-12_v2.jpg, photo_2026-02-12_v3.jpg, ...

    Args:
        directory: Destination directory
        original_name: File name to place
        extension: Extension used for renamed candidates (no dot)
        today: Date used in the suffix (optional, for testing)

    Returns:
        A path that did not exist when checked
    """
    candidate = directory / original_name
    if not candidate.exists():
        return candidate

    if today is None:
        today = date.today()
    stem = Path(original_name).stem
    stamp = today.strftime("%Y-%m-%d")

    dated = directory / f"{stem}_{stamp}.{extension}"
    if not dated.exists():
        return dated

    version = 2
    while True:
        versioned = directory / f"{stem}_{stamp}_v{version}.{extension}"
        if not versioned.exists():
            return versioned
        version += 1


class MoveOutcome(Enum):
    """How a file reached its destination."""
    RENAMED = "renamed"                                # Same-volume rename
    COPIED = "copied"                                  # Copied, then source removed
    COPIED_SOURCE_RETAINED = "copied_source_retained"  # Copied, source could not be removed


def move_file(source: Path, destination: Path) -> Tuple[MoveOutcome, Optional[OSError]]:
    """
    Move a file, falling back to copy-then-delete when rename fails.

    Rename fails across filesystems (EXDEV) and on some platforms when the
    destination is locked. The copy keeps content and timestamps.

    Args:
        source: File to move
        destination: Full destination path (parent must exist)

    Returns:
        The outcome, plus the removal error for COPIED_SOURCE_RETAINED

    Raises:
        OSError: If the copy fails; the source is left in place
    """
    try:
        os.rename(source, destination)
        return MoveOutcome.RENAMED, None
    except OSError:
        pass

    existed = destination.exists()
    try:
        shutil.copy2(source, destination)
    except OSError:
        # Drop a half-written copy
        if not existed and destination.exists():
            destination.unlink()
        raise

    try:
        source.unlink()
    except OSError as e:
        return MoveOutcome.COPIED_SOURCE_RETAINED, e
    return MoveOutcome.COPIED, None


def relative_display(file_path: Path, base: Path) -> str:
    """Show a path relative to ``base`` when possible."""
    try:
        return str(file_path.relative_to(base))
    except ValueError:
        return str(file_path)
