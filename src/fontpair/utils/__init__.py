# -*- coding: utf-8 -*-
"""
The Utilities Package for FontPair.

Helpers that sit outside the analysis core:

- scratch_files: temporary font files for path-only libraries.
- font_paths: discovering font files on disk.
- clipboard_manager: copying results to the system clipboard.
"""

from .clipboard_manager import copy_to_clipboard
from .font_paths import find_font_files, get_system_font_dirs
from .scratch_files import remove_scratch_file, write_scratch_file

__all__ = [
    "copy_to_clipboard",
    "find_font_files",
    "get_system_font_dirs",
    "remove_scratch_file",
    "write_scratch_file",
]
