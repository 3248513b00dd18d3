"""
Configuration for the smart organizer.

Uses dataclasses so the category table and run options are easy to build
in tests. Categories can be overridden with a ``config.toml`` file:

    [categories]
    Images = ["jpg", "png"]
    Books = ["epub", "mobi"]
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - Python < 3.11
    import tomli as tomllib


CONFIG_FILENAME = "config.toml"
LOG_FILENAME = "organizer_log.txt"


def _default_categories() -> Dict[str, List[str]]:
    return {
        "Images": ["jpg", "jpeg", "png", "gif", "bmp", "webp", "svg"],
        "Documents": ["pdf", "doc", "docx", "txt", "rtf", "odt", "xlsx", "csv"],
        "Videos": ["mp4", "mkv", "mov", "avi", "webm"],
        "Music": ["mp3", "wav", "flac", "aac", "ogg"],
        "Archives": ["zip", "rar", "7z", "tar", "gz"],
    }


def normalize_extension(extension: str) -> str:
    """Lower-case an extension and drop a leading dot (".JPG" -> "jpg")."""
    return extension.strip().lstrip(".").lower()


@dataclass
class Config:
    """
    Category table and junk rules for an organize run.

    ``categories`` keeps insertion order. When two categories claim the
    same extension the one listed first wins.

    Example:
        config = Config()
        config.categorize("JPG")   # "Images"

        config = Config(categories={"Books": ["epub"]})
    """

    categories: Dict[str, List[str]] = field(default_factory=_default_categories)

    # Exact file names that are never organized
    junk_names: List[str] = field(
        default_factory=lambda: ["Thumbs.db", "desktop.ini", LOG_FILENAME]
    )

    log_filename: str = LOG_FILENAME

    def __post_init__(self) -> None:
        self.categories = {
            name: [normalize_extension(ext) for ext in extensions]
            for name, extensions in self.categories.items()
        }

    def categorize(self, extension: str) -> Optional[str]:
        """
        Get the category for a file extension.

        Args:
            extension: Extension with or without the dot, any case

        Returns:
            Category name, or None if no category claims the extension
        """
        ext = normalize_extension(extension)
        if not ext:
            return None
        for category, extensions in self.categories.items():
            if ext in extensions:
                return category
        return None

    @property
    def category_names(self) -> List[str]:
        """Category folder names, skipped when walking the tree."""
        return list(self.categories)

    def overlapping_extensions(self) -> Dict[str, List[str]]:
        """Map each extension claimed by several categories to those categories."""
        owners: Dict[str, List[str]] = {}
        for category, extensions in self.categories.items():
            for ext in extensions:
                owners.setdefault(ext, [])
                if category not in owners[ext]:
                    owners[ext].append(category)
        return {ext: names for ext, names in owners.items() if len(names) > 1}

    def is_hidden(self, name: str) -> bool:
        """Check if a file/folder name is hidden (starts with dot)."""
        return name.startswith(".")


@dataclass(frozen=True)
class RunOptions:
    """Settings for a single organize run."""

    path: Path
    dry_run: bool = False
    find_duplicates: bool = False
    keep_structure: bool = False


class ConfigError(ValueError):
    """Raised when a configuration file has the wrong shape."""


def parse_categories(data: dict) -> Dict[str, List[str]]:
    """
    Validate the ``categories`` table of a parsed TOML document.

    Raises:
        ConfigError: If the table is not a mapping of names to string lists
    """
    categories = data.get("categories")
    if categories is None:
        return _default_categories()
    if not isinstance(categories, dict):
        raise ConfigError("'categories' must be a table")

    parsed: Dict[str, List[str]] = {}
    for name, extensions in categories.items():
        if not name.strip() or name in (".", "..") or "/" in name or "\\" in name:
            raise ConfigError(f"category name '{name}' is not a valid folder name")
        if not isinstance(extensions, list) or not all(isinstance(e, str) for e in extensions):
            raise ConfigError(f"category '{name}' must be a list of strings")
        parsed[name] = extensions
    return parsed


def load_config(
    path: Path,
    output: Callable[[str], None] = print,
) -> Config:
    """
    Load the category table from a TOML file.

    A missing or broken file never stops a run: the built-in defaults are
    used instead and a message explains why.

    Args:
        path: Path to the TOML file
        output: Callback for messages

    Returns:
        Config built from the file, or the default Config
    """
    if not path.is_file():
        output(f"No {path.name} found, using defaults")
        return Config()

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
        config = Config(categories=parse_categories(data))
    except (ValueError, OSError) as e:
        # ValueError covers TOMLDecodeError, ConfigError and non-UTF-8 bytes
        output(f"[WARNING] {path.name} has errors ({e}), using defaults")
        return Config()

    output(f"Loaded {path.name}")

    for ext, owners in config.overlapping_extensions().items():
        output(
            f"[WARNING] '.{ext}' is listed under {', '.join(owners)}; "
            f"files go to {owners[0]}"
        )

    return config


# Default configuration instance
DEFAULT_CONFIG = Config()
