"""Copy and export actions: run the I/O, then report the outcome as a toast.

Every failure is converted into an error toast here; nothing propagates to
the caller, so the TUI can fire these off and forget them.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path

from expansion_browser.action_messages import (
    COPY_FAILURE_MESSAGE,
    COPY_SUCCESS_MESSAGE,
    NOTHING_TO_COPY_MESSAGE,
    build_bulk_copy_notification,
    build_export_failure_notification,
    build_export_success_notification,
)
from expansion_browser.clipboard import build_bulk_payload, copy_text
from expansion_browser.errors import EmptyResultSet
from expansion_browser.export import (
    EXPORT_FORMATS,
    export_filename,
    get_export_dir,
    write_export_file,
)
from expansion_browser.feedback import CopyMarker, Notifier
from expansion_browser.models import Record, RowKey, UserConfig

logger = logging.getLogger(__name__)

CopyFn = Callable[[str], Awaitable[bool]]


class CatalogActions:
    """User actions on records, reporting through a Notifier."""

    def __init__(
        self,
        notifier: Notifier,
        marker: CopyMarker,
        config: UserConfig,
        copy_fn: CopyFn = copy_text,
    ) -> None:
        self._notifier = notifier
        self._marker = marker
        self._config = config
        self._copy_fn = copy_fn

    async def copy_single(self, record: Record, key: RowKey) -> bool:
        """Copy one expansion verbatim and mark its row on success."""
        if await self._copy_fn(record.expansion):
            self._marker.mark(key)
            self._notifier.show(COPY_SUCCESS_MESSAGE, "success")
            return True
        self._notifier.show(COPY_FAILURE_MESSAGE, "error")
        return False

    async def copy_bulk(self, records: Sequence[Record]) -> bool:
        """Copy every expansion in the filtered set, one per line."""
        try:
            payload = build_bulk_payload(records)
        except EmptyResultSet:
            self._notifier.show(NOTHING_TO_COPY_MESSAGE, "info")
            return False
        if await self._copy_fn(payload):
            self._notifier.show(build_bulk_copy_notification(len(records)), "success")
            return True
        self._notifier.show(COPY_FAILURE_MESSAGE, "error")
        return False

    async def export(self, records: Sequence[Record], fmt: str) -> Path | None:
        """Write the records to ``<export dir>/<catalog name>.<fmt>``.

        Empty sets are exported as-is (header-only CSV, empty JSON array).
        The file is written in a worker thread.
        """
        mime, formatter, format_name = EXPORT_FORMATS[fmt]
        content = formatter(records)
        export_dir = get_export_dir(self._config)
        try:
            filepath = await asyncio.to_thread(
                write_export_file,
                content=content,
                export_dir=export_dir,
                filename=export_filename(self._config.catalog_name, fmt),
            )
        except (OSError, UnicodeError) as exc:
            logger.warning("%s export to %s failed: %s", format_name, export_dir, exc)
            self._notifier.show(build_export_failure_notification(format_name, str(exc)), "error")
            return None
        logger.debug("Exported %d records as %s to %s", len(records), mime, filepath)
        self._notifier.show(build_export_success_notification(format_name), "success")
        return filepath


__all__ = [
    "CatalogActions",
    "CopyFn",
]
