"""
Command-line interface for the smart organizer.

Handles argument parsing, loads the category table and prints the summary.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import CONFIG_FILENAME, LOG_FILENAME, Config, RunOptions, load_config
from .operations import OperationResult, organize_files

BANNER_WIDTH = 39


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="smart-organizer",
        description="Sort files into category folders by extension",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Default categories:
  Images     - jpg, jpeg, png, gif, bmp, webp, svg
  Documents  - pdf, doc, docx, txt, rtf, odt, xlsx, csv
  Videos     - mp4, mkv, mov, avi, webm
  Music      - mp3, wav, flac, aac, ogg
  Archives   - zip, rar, 7z, tar, gz

Override them with a {CONFIG_FILENAME} in the current directory:
  [categories]
  Books = ["epub", "mobi"]

Every real run appends the moves it made to {LOG_FILENAME}.
        """
    )

    parser.add_argument(
        "--path", "-p",
        type=str,
        default=".",
        help="Directory to organize (default: current directory)"
    )

    parser.add_argument(
        "--dry-run", "-d",
        action="store_true",
        help="Preview changes without moving files"
    )

    parser.add_argument(
        "--find-duplicates",
        action="store_true",
        help="Leave files with the same name, modified day and size as an earlier file in place"
    )

    parser.add_argument(
        "--keep-structure",
        action="store_true",
        help="Keep each file's subfolder path inside its category folder"
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Category file to load (default: ./{CONFIG_FILENAME})"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def print_summary(result: OperationResult, dry_run: bool) -> None:
    print()
    label = "would be moved" if dry_run else "organized"
    print(f"{result.moved} file(s) {label}")

    if result.duplicates:
        print(f"   {result.duplicates} duplicate(s) found")
    if result.skipped:
        print(f"   {result.skipped} file(s) skipped")
    if result.retained:
        print(f"   {len(result.retained)} file(s) copied but the original could not be removed")
    if result.errors:
        print(f"   {result.errors} error(s)")

    if dry_run:
        print("   Run without --dry-run to apply.")
    else:
        print(f"   See {LOG_FILENAME} for details.")


def run(
    args: argparse.Namespace,
    config: Optional[Config] = None,
    work_dir: Optional[Path] = None,
) -> int:
    """
    Run the organizer with the given arguments.

    Args:
        args: Parsed command-line arguments
        config: Category table (default: loaded from the config file)
        work_dir: Directory for the config file and run log (default: cwd)

    Returns:
        Exit code (0 for success, 1 for error, 2 if some files failed to move)
    """
    if work_dir is None:
        work_dir = Path.cwd()

    print("=" * BANNER_WIDTH)
    print(f"      Smart File Organizer  v{__version__}")
    print("=" * BANNER_WIDTH + "\n")

    if config is None:
        config_path = Path(args.config).expanduser() if args.config else work_dir / CONFIG_FILENAME
        config = load_config(config_path)

    directory = Path(args.path).expanduser().resolve()

    if not directory.is_dir():
        print(f"Error: '{directory}' is not a valid directory", file=sys.stderr)
        return 1

    if args.dry_run:
        print("[DRY RUN] Preview mode - no files will be moved\n")

    print(f"Target: {directory}\n")

    options = RunOptions(
        path=directory,
        dry_run=args.dry_run,
        find_duplicates=args.find_duplicates,
        keep_structure=args.keep_structure,
    )

    try:
        result = organize_files(options, config=config, work_dir=work_dir)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_summary(result, args.dry_run)

    return 2 if result.errors else 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
