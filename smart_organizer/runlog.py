"""
Append-only record of what a real (non dry-run) organize run moved.

Each run adds a header block followed by one ``source -> destination``
line per moved file:

    ========================================
    Run started:  2026-02-12 09:30:00
    Directory:    /home/user/Downloads
    Dry-run:      False
    ========================================

    photo.jpg -> Images/photo.jpg
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

SEPARATOR = "=" * 40


class RunLog:
    """
    Context manager around the log file.

    Example:
        with RunLog(Path("organizer_log.txt")) as log:
            log.write_header(directory, dry_run=False)
            log.record("photo.jpg", "Images/photo.jpg")
    """

    def __init__(self, path: Path):
        self.path = path
        self._file: Optional[TextIO] = None

    def open(self) -> "RunLog":
        """Open the log for appending. Raises OSError if it cannot be opened."""
        self._file = self.path.open("a", encoding="utf-8")
        return self

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "RunLog":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def write_header(
        self,
        directory: Path,
        dry_run: bool,
        now: Optional[datetime] = None,
    ) -> None:
        if now is None:
            now = datetime.now()
        self._write(
            f"\n{SEPARATOR}\n"
            f"Run started:  {now.strftime('%Y-%m-%d %H:%M:%S')}\n"
            f"Directory:    {directory}\n"
            f"Dry-run:      {dry_run}\n"
            f"{SEPARATOR}\n\n"
        )

    def record(self, source: str, destination: str, retained: bool = False) -> None:
        """Add one moved file."""
        suffix = " (source retained)" if retained else ""
        self._write(f"{source} -> {destination}{suffix}\n")

    def _write(self, text: str) -> None:
        if self._file is None:
            raise ValueError(f"Run log {self.path} is not open")
        self._file.write(text)
        self._file.flush()
