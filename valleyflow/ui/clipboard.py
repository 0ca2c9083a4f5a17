"""Clipboard access for copying history entries."""

import logging

import pyperclip

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str) -> bool:
    """Copy text to the system clipboard.

    Returns:
        True on success. Failures are logged and reported as False.
    """
    try:
        pyperclip.copy(text)
        logger.debug(f"Copied {len(text)} chars to clipboard")
        return True
    except pyperclip.PyperclipException as e:
        logger.error(f"Failed to copy to clipboard: {e}")
        return False
