#!/usr/bin/env python3
"""
AppleScript and URL-scheme execution for the Fantastical MCP server
Runs osascript programs or opens application URLs and returns captured output
"""

import asyncio
import logging
from enum import Enum
from typing import Optional

from fantastical_mcp import config as fm_config
from security.automation_permissions import ErrorKind, classify_error

APPLESCRIPT_ERROR_PREFIX = "AppleScript error: "
OPEN_URL_ERROR_PREFIX = "Open URL error: "

logger = logging.getLogger("FantasticalMCP_AppleScript")


class ScriptMode(Enum):
    SINGLE = "single"
    MULTILINE = "multiline"
    URL = "url"


class AutomationError(RuntimeError):
    """Failure of an osascript run or URL open.

    The kind is computed once from the raw error text so callers never
    have to sniff the message themselves.
    """

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.kind = kind if kind is not None else classify_error(message)

    @property
    def is_permission_denied(self) -> bool:
        return self.kind is ErrorKind.PERMISSION_DENIED


def quote_single_statement(script: str) -> str:
    """Wrap a one-line statement in single quotes for the shell"""
    return "'" + script.replace("'", "'\\''") + "'"


def quote_multiline_program(script: str) -> str:
    """Wrap a multi-line program in double quotes for the shell"""
    escaped = script.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_command(script: str, mode: ScriptMode) -> str:
    """Shell command line for the given script and mode"""
    if mode is ScriptMode.SINGLE:
        return f"osascript -e {quote_single_statement(script)}"
    if mode is ScriptMode.MULTILINE:
        return f"osascript -e {quote_multiline_program(script)}"
    if mode is ScriptMode.URL:
        return f'open "{script}"'
    raise ValueError(f"Unsupported script mode: {mode}")


async def _exec_shell(command: str, timeout: Optional[float]):
    process = await asyncio.create_subprocess_shell(
        command,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise
    return (
        process.returncode,
        stdout.decode("utf-8", errors="replace"),
        stderr.decode("utf-8", errors="replace"),
    )


async def run_command(script: str, mode: ScriptMode) -> str:
    """Run a script (or open a URL) and return trimmed stdout.

    Raises AutomationError when the process exits non-zero, or when it
    writes to stderr without producing any stdout.
    """
    prefix = OPEN_URL_ERROR_PREFIX if mode is ScriptMode.URL else APPLESCRIPT_ERROR_PREFIX
    command = build_command(script, mode)
    timeout = fm_config.get_settings().get("command_timeout")
    logger.debug(f"Running {mode.value} command ({len(command)} chars)")

    try:
        returncode, stdout, stderr = await _exec_shell(command, timeout)
    except asyncio.TimeoutError:
        logger.warning(f"{mode.value} command timed out after {timeout} seconds")
        raise AutomationError(f"{prefix}Command timed out after {timeout} seconds")
    except OSError as e:
        logger.warning(f"Could not start {mode.value} command: {e}")
        raise AutomationError(f"{prefix}{e}") from e

    if returncode != 0:
        logger.warning(f"{mode.value} command exited with code {returncode}")
        raise AutomationError(f"{prefix}Command failed: {command}\n{stderr.strip()}")

    if stderr.strip() and not stdout.strip():
        logger.warning(f"{mode.value} command wrote only to stderr")
        raise AutomationError(f"{prefix}{stderr.strip()}")

    return stdout.strip()


async def run_applescript(script: str) -> str:
    """Run a single AppleScript statement"""
    return await run_command(script, ScriptMode.SINGLE)


async def run_applescript_multiline(script: str) -> str:
    """Run a multi-line AppleScript program"""
    return await run_command(script, ScriptMode.MULTILINE)


async def open_url(url: str) -> None:
    """Open an already percent-encoded application URL.

    Navigation must go through URLs: Fantastical's `parse sentence` verb
    types into the event dialog instead of navigating.
    """
    await run_command(url, ScriptMode.URL)


async def is_app_running(process_name: str) -> bool:
    """Check through System Events whether a process is running"""
    script = f'tell application "System Events" to return exists (processes where name is "{process_name}")'
    try:
        result = await run_applescript(script)
    except AutomationError as e:
        logger.debug(f"Running check for {process_name} failed: {e}")
        return False
    return result.strip().lower() == "true"


async def is_fantastical_running() -> bool:
    return await is_app_running(fm_config.get_settings()["companion_app"])
