# -*- coding: utf-8 -*-
"""
src/fontpair/utils/font_paths.py

Locating font files on disk for batch ranking.
"""

import logging
import os
import platform
from pathlib import Path
from typing import List

from ..config import FONT_EXTENSIONS

logger = logging.getLogger(__name__)


def get_system_font_dirs() -> List[Path]:
    """Platform-specific directories that usually hold installed fonts."""
    system = platform.system()
    if system == "Windows":
        win_dir = os.environ.get("windir", "C:/Windows")
        return [Path(win_dir) / "Fonts"]
    if system == "Darwin":  # macOS
        return [
            Path("/System/Library/Fonts"),
            Path("/Library/Fonts"),
            Path.home() / "Library/Fonts",
        ]
    return [
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path.home() / ".local/share/fonts",
        Path.home() / ".fonts",
    ]


def find_font_files(*directories: Path) -> List[Path]:
    """
    Recursively collects TTF/OTF/WOFF/WOFF2 files below the given directories.

    Args:
        directories: Roots to scan. Missing directories are skipped.

    Returns:
        A sorted list of unique font file paths.
    """
    found = set()
    for directory in directories:
        directory = Path(directory)
        if not directory.is_dir():
            logger.debug(f"Skipping missing font directory {directory}")
            continue
        for path in directory.rglob("*"):
            if path.is_file() and path.suffix.lower() in FONT_EXTENSIONS:
                found.add(path.resolve())
    logger.info(f"Found {len(found)} font files")
    return sorted(found)
