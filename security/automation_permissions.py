#!/usr/bin/env python3
"""
Automation Permission Handling for the Fantastical MCP server
Classifies macOS automation failures and holds the remediation text shown
when Calendar access has not been granted
"""

import logging
from enum import Enum

# AppleEvent error raised when the user has not granted automation access
CALENDAR_PERMISSION_ERROR = -1743
CALENDAR_PERMISSION_TEXT = "Not authorised to send Apple events to Calendar"

CALENDAR_PERMISSION_MESSAGE = """Calendar app permission denied.

This tool reads events from the macOS Calendar app (which Fantastical syncs with).
To fix this, grant Calendar automation permission:

1. Open System Settings → Privacy & Security → Automation
2. Find the app running this MCP server (e.g., Terminal, iTerm, VS Code, or Python)
3. Enable the "Calendar" toggle

Note: If running in a subprocess (like an editor or assistant), you may need to grant permission
to the parent application or the Python process itself.

As a workaround, I can open Fantastical to show your calendar instead."""

FALLBACK_NOTE = "Fallback: Opened Fantastical to today's view."

logger = logging.getLogger("FantasticalMCP_Permissions")


class ErrorKind(Enum):
    """Failure classes attached to automation errors"""
    GENERIC = "generic"
    PERMISSION_DENIED = "permission_denied"


def classify_error(text: str) -> ErrorKind:
    """Tag raw error text (stderr or exec failure) with its kind"""
    if str(CALENDAR_PERMISSION_ERROR) in text or CALENDAR_PERMISSION_TEXT in text:
        logger.warning("Calendar automation permission denied")
        return ErrorKind.PERMISSION_DENIED
    return ErrorKind.GENERIC


def permission_message(with_fallback: bool = False) -> str:
    """Remediation text, optionally noting that fallback navigation happened"""
    if with_fallback:
        return f"{CALENDAR_PERMISSION_MESSAGE}\n\n{FALLBACK_NOTE}"
    return CALENDAR_PERMISSION_MESSAGE
