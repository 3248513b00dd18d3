"""
The organize pass: walk, classify and move every file under a directory.

Operations never print directly. Messages go through an output callback so
the CLI (or a test) decides where they end up.
"""

from contextlib import ExitStack
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .config import Config, DEFAULT_CONFIG, RunOptions
from .runlog import RunLog
from .utils import (
    Fingerprint,
    MoveOutcome,
    collect_files,
    get_extension,
    get_file_mtime,
    get_file_size_bytes,
    is_junk,
    make_fingerprint,
    move_file,
    relative_display,
    resolve_collision,
)


class FileOutcome(Enum):
    """What happened to one discovered file."""
    MOVED = "moved"
    PREVIEWED = "previewed"      # Dry run: would have been moved
    RETAINED = "retained"        # Copied to destination, source could not be removed
    SKIPPED = "skipped"
    DUPLICATE = "duplicate"
    ERROR = "error"


@dataclass
class FileEvent:
    """One line of the per-file report."""
    source: str
    outcome: FileOutcome
    destination: Optional[str] = None
    message: str = ""


@dataclass
class OperationResult:
    """Counters and events for one organize run."""
    moved: int = 0
    duplicates: int = 0
    skipped: int = 0
    errors: int = 0
    events: List[FileEvent] = field(default_factory=list)
    error_messages: List[str] = field(default_factory=list)

    # Destinations of files whose source was left behind after copying
    retained: List[str] = field(default_factory=list)


class DuplicateTracker:
    """
    Remembers the fingerprint of every file seen during a run.

    Duplicates are matched on name, modified day and size only. Content
    is never read, so this is a cheap heuristic and not a hash comparison.
    """

    def __init__(self):
        self._seen: Dict[Fingerprint, Path] = {}

    def check_and_record(self, fingerprint: Fingerprint, file_path: Path) -> Optional[Path]:
        """
        Return the first file seen with ``fingerprint``, or record this one.

        Returns:
            Path of the earlier file if this is a duplicate, otherwise None
        """
        first_seen = self._seen.get(fingerprint)
        if first_seen is not None:
            return first_seen
        self._seen[fingerprint] = file_path
        return None

    def __len__(self) -> int:
        return len(self._seen)


# Type aliases for callbacks
OutputCallback = Callable[[str], None]
EventCallback = Callable[[FileEvent], None]


def _default_output(message: str) -> None:
    """Default output callback that prints to stdout."""
    print(message)


def format_event(event: FileEvent) -> str:
    """Render an event as a report line."""
    if event.outcome is FileOutcome.MOVED:
        return f"  [MOVED] {event.source} -> {event.destination}"
    if event.outcome is FileOutcome.PREVIEWED:
        return f"  [WOULD MOVE] {event.source} -> {event.destination}"
    if event.outcome is FileOutcome.RETAINED:
        return f"  [COPIED] {event.source} -> {event.destination} (source retained: {event.message})"
    if event.outcome is FileOutcome.DUPLICATE:
        return f"  [DUPLICATE] {event.source} (duplicate of {event.message})"
    if event.outcome is FileOutcome.SKIPPED:
        return f"  [SKIPPED] {event.source} ({event.message})"
    return f"  [ERROR] {event.source}: {event.message}"


def organize_files(
    options: RunOptions,
    config: Config = DEFAULT_CONFIG,
    output: OutputCallback = _default_output,
    work_dir: Optional[Path] = None,
    on_event: Optional[EventCallback] = None,
    today: Optional[date] = None,
) -> OperationResult:
    """
    Organize every file under ``options.path`` into category subfolders.

    Files are handled one at a time in walk order. A file that fails to
    move is counted in ``errors`` and the run carries on; anything else
    that goes wrong (unreadable directory, unreadable metadata, log file
    that cannot be opened) aborts the run.

    Args:
        options: Directory and flags for this run
        config: Category table to use
        output: Callback for output messages
        work_dir: Directory holding the run log (default: current directory)
        on_event: Optional callback receiving each FileEvent
        today: Date used when renaming colliding files (optional, for testing)

    Returns:
        OperationResult with counters and per-file events

    Raises:
        NotADirectoryError: If ``options.path`` is not a directory
        OSError: On a run-aborting filesystem error
    """
    result = OperationResult()
    root = options.path

    if not root.is_dir():
        raise NotADirectoryError(f"'{root}' is not a valid directory")

    files = collect_files(root, skip=config.category_names)

    if not files:
        output("No files to organize.")
        return result

    output(f"Found {len(files)} file(s)\n")

    if work_dir is None:
        work_dir = Path.cwd()

    def emit(event: FileEvent) -> None:
        result.events.append(event)
        output(format_event(event))
        if on_event is not None:
            on_event(event)

    tracker = DuplicateTracker() if options.find_duplicates else None

    with ExitStack() as stack:
        log: Optional[RunLog] = None
        if not options.dry_run:
            log = stack.enter_context(RunLog(work_dir / config.log_filename))
            log.write_header(root, options.dry_run)

        for file_path in files:
            if is_junk(file_path, config):
                continue

            source = relative_display(file_path, root)

            extension = get_extension(file_path)
            if extension is None:
                result.skipped += 1
                emit(FileEvent(source, FileOutcome.SKIPPED, message="no extension"))
                continue

            size = get_file_size_bytes(file_path)
            mtime = get_file_mtime(file_path)

            if tracker is not None:
                fingerprint = make_fingerprint(file_path, size, mtime)
                first_seen = tracker.check_and_record(fingerprint, file_path)
                if first_seen is not None:
                    result.duplicates += 1
                    emit(FileEvent(
                        source,
                        FileOutcome.DUPLICATE,
                        message=relative_display(first_seen, root),
                    ))
                    continue

            category = config.categorize(extension)
            if category is None:
                result.skipped += 1
                emit(FileEvent(source, FileOutcome.SKIPPED, message="no category"))
                continue

            dest_dir = root / category
            if options.keep_structure:
                sub_path = file_path.relative_to(root).parent
                if sub_path.parts:
                    dest_dir = dest_dir / sub_path

            destination = resolve_collision(dest_dir, file_path.name, extension.lower(), today=today)
            dest_display = relative_display(destination, root)

            if options.dry_run:
                result.moved += 1
                emit(FileEvent(source, FileOutcome.PREVIEWED, destination=dest_display))
                continue

            try:
                dest_dir.mkdir(parents=True, exist_ok=True)
                outcome, remove_error = move_file(file_path, destination)
            except OSError as e:
                error_msg = f"{source}: {e}"
                result.error_messages.append(error_msg)
                result.errors += 1
                emit(FileEvent(source, FileOutcome.ERROR, destination=dest_display, message=str(e)))
                continue

            result.moved += 1
            if outcome is MoveOutcome.COPIED_SOURCE_RETAINED:
                result.retained.append(dest_display)
                log.record(source, dest_display, retained=True)
                emit(FileEvent(
                    source,
                    FileOutcome.RETAINED,
                    destination=dest_display,
                    message=str(remove_error),
                ))
            else:
                log.record(source, dest_display)
                emit(FileEvent(source, FileOutcome.MOVED, destination=dest_display))

    return result
