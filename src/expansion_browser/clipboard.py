"""System clipboard access through platform command-line tools."""

from __future__ import annotations

import asyncio
import logging
import platform
import subprocess
from collections.abc import Sequence

from expansion_browser.errors import ClipboardWriteFailure, EmptyResultSet
from expansion_browser.models import Record

logger = logging.getLogger(__name__)

# Subprocess timeout in seconds
SUBPROCESS_TIMEOUT = 5


def get_clipboard_command_plan(system: str) -> tuple[list[list[str]], str] | None:
    """Return clipboard command candidates and input encoding for a platform."""
    if system == "Darwin":
        return ([["pbcopy"]], "utf-8")
    if system == "Linux":
        return (
            [
                ["wl-copy"],
                ["xclip", "-selection", "clipboard"],
                ["xsel", "--clipboard", "--input"],
            ],
            "utf-8",
        )
    if system == "Windows":
        return ([["clip"]], "utf-16")
    return None


def write_clipboard(text: str, system: str | None = None) -> None:
    """Copy text to the system clipboard, trying each platform tool in turn.

    Raises:
        ClipboardWriteFailure: If the platform is unsupported, the text cannot
            be encoded for it, or every tool fails.
    """
    system = system or platform.system()
    plan = get_clipboard_command_plan(system)
    if plan is None:
        raise ClipboardWriteFailure(f"unsupported platform {system}")
    commands, encoding = plan
    try:
        payload = text.encode(encoding)
    except UnicodeError as e:
        raise ClipboardWriteFailure(f"text cannot be encoded as {encoding}") from e
    last_error: Exception | None = None
    for command in commands:
        try:
            subprocess.run(  # nosec B603
                command,
                input=payload,
                check=True,
                shell=False,
                timeout=SUBPROCESS_TIMEOUT,
            )
            return
        except (
            FileNotFoundError,
            subprocess.CalledProcessError,
            subprocess.TimeoutExpired,
            OSError,
        ) as e:
            last_error = e
    raise ClipboardWriteFailure(str(last_error)) from last_error


async def copy_text(text: str) -> bool:
    """Copy text without blocking the event loop. Returns True on success.

    Failures are logged at warning level and reported as False.
    """
    try:
        await asyncio.to_thread(write_clipboard, text)
    except ClipboardWriteFailure as e:
        logger.warning("Clipboard copy failed: %s", e)
        return False
    return True


def build_bulk_payload(records: Sequence[Record]) -> str:
    """Join every record's expansion with a newline (no trailing newline).

    Raises:
        EmptyResultSet: If there is nothing to copy.
    """
    if not records:
        raise EmptyResultSet("no records to copy")
    return "\n".join(record.expansion for record in records)


__all__ = [
    "SUBPROCESS_TIMEOUT",
    "build_bulk_payload",
    "copy_text",
    "get_clipboard_command_plan",
    "write_clipboard",
]
