# -*- coding: utf-8 -*-
"""
src/fontpair/utils/clipboard_manager.py

Clipboard hand-off for analysis output (`fontpair analyze --copy`).
"""

import logging

import pyperclip

logger = logging.getLogger(__name__)

CLIPBOARD_HINT = "On Linux the clipboard needs 'xclip', 'xsel' or 'wl-clipboard'."


def copy_to_clipboard(text: str) -> bool:
    """
    Puts an analysis payload on the system clipboard.

    Args:
        text (str): Usually the JSON form of a result.

    Returns:
        bool: False when no clipboard mechanism is reachable (headless
        servers, CI); the caller decides whether that matters.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.warning(f"Clipboard unavailable, result not copied: {e}. {CLIPBOARD_HINT}")
        return False
    logger.info(f"Copied {len(text)} characters of analysis output to the clipboard")
    return True
