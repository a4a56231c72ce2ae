# -*- coding: utf-8 -*-
"""
src/fontpair/utils/scratch_files.py

Scratch files for handing font bytes to libraries that only open paths
(FreeType through Pillow). Every file created here must be removed by its
owner, on error paths too.
"""

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "fontpair-"


def write_scratch_file(data: bytes, suffix: str = ".ttf") -> Path:
    """
    Writes bytes to a new uniquely named file in the system temp directory.

    Returns:
        Path: The file's path. The caller owns it and must call
              remove_scratch_file() when done.
    """
    fd, name = tempfile.mkstemp(prefix=SCRATCH_PREFIX, suffix=suffix)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
    except BaseException:
        remove_scratch_file(path)
        raise
    logger.debug(f"Wrote {len(data)} bytes to scratch file {path}")
    return path


def remove_scratch_file(path: Path) -> None:
    """Deletes a scratch file; a file that is already gone is not an error."""
    try:
        path.unlink()
        logger.debug(f"Removed scratch file {path}")
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove scratch file {path}: {e}")

