"""
Smart Organizer - Sort files into category folders by extension.

This package walks a directory tree, moves each file into a folder named
after its category (Images, Documents, ...), renames on collisions, and can
leave likely duplicates in place.
"""

__version__ = "1.1.0"

from .config import Config, RunOptions, load_config
from .operations import (
    DuplicateTracker,
    FileEvent,
    FileOutcome,
    OperationResult,
    organize_files,
)
from .utils import collect_files, is_junk, move_file, resolve_collision

__all__ = [
    "Config",
    "RunOptions",
    "load_config",
    "DuplicateTracker",
    "FileEvent",
    "FileOutcome",
    "OperationResult",
    "organize_files",
    "collect_files",
    "is_junk",
    "move_file",
    "resolve_collision",
]
