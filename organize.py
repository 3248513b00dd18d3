#!/usr/bin/env python3
"""
Smart File Organizer - Sort a folder's files into category subfolders.

Scans a directory (and every subfolder) and moves each file into a folder
named after its category, based on the file extension.

SAFETY POLICY:
    This script NEVER deletes files. It only moves them.
    - Files are moved to category subfolders (Images/, Documents/, etc.)
    - If a file already exists at destination, the date is added to the
      name, then a version number (photo_2026-02-12_v2.jpg)
    - Category folders are never scanned again, so running twice is safe
    - Every move is appended to organizer_log.txt
    - Use --dry-run to preview changes before applying them

Usage:
    python organize.py --path <directory>                    # Organize files
    python organize.py --path <directory> --dry-run          # Preview only
    python organize.py --path <directory> --find-duplicates  # Leave likely duplicates in place
    python organize.py --path <directory> --keep-structure   # Keep subfolders inside categories

Example:
    python organize.py --path ~/Downloads --dry-run  # See what would happen
    python organize.py --path ~/Downloads            # Actually organize the files
"""

import sys

from smart_organizer.cli import main


if __name__ == "__main__":
    sys.exit(main())
