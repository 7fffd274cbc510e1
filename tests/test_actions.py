"""Tests for copy/export actions and the toasts they produce."""

from __future__ import annotations

import json
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from expansion_browser.actions import CatalogActions
from expansion_browser.clipboard import copy_text
from expansion_browser.feedback import CopyMarker, Notifier
from expansion_browser.models import Record, RowKey


def _make_actions(config, copy_result: bool = True):
    scheduler = MagicMock()
    toasts = []
    notifier = Notifier(scheduler, on_change=toasts.append)
    marker = CopyMarker(scheduler)
    copy_fn = AsyncMock(return_value=copy_result)
    actions = CatalogActions(notifier, marker, config, copy_fn)
    return actions, notifier, marker, copy_fn, toasts


class TestCopySingle:
    @pytest.mark.asyncio
    async def test_success_marks_row_and_toasts(self, make_record, sample_config):
        actions, notifier, marker, copy_fn, _ = _make_actions(sample_config())
        record = make_record("A1", "Good morning!")
        key = RowKey("A1", 0)

        assert await actions.copy_single(record, key) is True

        copy_fn.assert_awaited_once_with("Good morning!")
        assert marker.is_marked(key)
        assert notifier.current.text == "Copied to clipboard!"
        assert notifier.current.kind == "success"

    @pytest.mark.asyncio
    async def test_multiline_expansion_is_copied_verbatim(self, make_record, sample_config):
        actions, _, _, copy_fn, _ = _make_actions(sample_config())
        await actions.copy_single(make_record("M", "line1\nline2"), RowKey("M", 0))
        copy_fn.assert_awaited_once_with("line1\nline2")

    @pytest.mark.asyncio
    async def test_failure_toasts_error_without_marking(self, make_record, sample_config):
        actions, notifier, marker, _, _ = _make_actions(sample_config(), copy_result=False)

        assert await actions.copy_single(make_record(), RowKey("A1", 0)) is False

        assert marker.current is None
        assert notifier.current.text == "Failed to copy"
        assert notifier.current.kind == "error"


class TestCopyBulk:
    @pytest.mark.asyncio
    async def test_copies_all_expansions_joined(self, sample_records, sample_config):
        actions, notifier, _, copy_fn, _ = _make_actions(sample_config())

        assert await actions.copy_bulk(sample_records) is True

        copy_fn.assert_awaited_once_with("\n".join(r.expansion for r in sample_records))
        assert notifier.current.text == "Copied 6 items!"

    @pytest.mark.asyncio
    async def test_single_item_message_is_singular(self, make_record, sample_config):
        actions, notifier, _, _, _ = _make_actions(sample_config())
        await actions.copy_bulk([make_record()])
        assert notifier.current.text == "Copied 1 item!"

    @pytest.mark.asyncio
    async def test_empty_set_toasts_once_and_never_writes(self, sample_config):
        actions, notifier, _, copy_fn, toasts = _make_actions(sample_config())

        assert await actions.copy_bulk([]) is False

        copy_fn.assert_not_awaited()
        assert [t.text for t in toasts if t is not None] == ["Nothing to copy"]
        assert notifier.current.kind == "info"

    @pytest.mark.asyncio
    async def test_failure_reports_error_not_success(self, sample_records, sample_config):
        actions, notifier, _, _, toasts = _make_actions(sample_config(), copy_result=False)

        assert await actions.copy_bulk(sample_records) is False

        assert [t.kind for t in toasts if t is not None] == ["error"]
        assert notifier.current.text == "Failed to copy"


class TestUnencodableText:
    """Records holding lone surrogates must fail with a toast, never raise."""

    @pytest.mark.asyncio
    async def test_copy_single_reports_failure(self, sample_config):
        scheduler = MagicMock()
        notifier = Notifier(scheduler)
        marker = CopyMarker(scheduler)
        actions = CatalogActions(notifier, marker, sample_config(), copy_text)
        record = Record("X", "bad \ud83d emoji", "universal")

        with patch("expansion_browser.clipboard.subprocess.run") as run:
            assert await actions.copy_single(record, RowKey("X", 0)) is False

        run.assert_not_called()
        assert marker.current is None
        assert notifier.current.text == "Failed to copy"
        assert notifier.current.kind == "error"

    @pytest.mark.asyncio
    async def test_copy_bulk_reports_failure(self, make_record, sample_config):
        scheduler = MagicMock()
        notifier = Notifier(scheduler)
        actions = CatalogActions(notifier, CopyMarker(scheduler), sample_config(), copy_text)
        records = [make_record(), Record("X", "\udc00", "english")]

        with patch("expansion_browser.clipboard.subprocess.run") as run:
            assert await actions.copy_bulk(records) is False

        run.assert_not_called()
        assert notifier.current.kind == "error"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fmt", ["csv", "json"])
    async def test_export_reports_failure(self, fmt, sample_config, tmp_path):
        actions, notifier, _, _, _ = _make_actions(sample_config())
        record = Record("X", "bad \ud83d emoji", "universal")

        assert await actions.export([record], fmt) is None

        assert notifier.current.kind == "error"
        assert notifier.current.text.startswith(f"Failed to export {fmt.upper()}")
        assert list((tmp_path / "exports").glob(f"*.{fmt}")) == []


class TestExport:
    @pytest.mark.asyncio
    async def test_csv_export_writes_file_and_toasts(
        self, sample_records, sample_config, tmp_path
    ):
        config = sample_config()
        actions, notifier, _, _, _ = _make_actions(config)

        path = await actions.export(sample_records, "csv")

        assert path == tmp_path / "exports" / "gboard_shortcuts.csv"
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "Shortcut,Expansion,Language"
        assert len(lines) == 7
        assert notifier.current.text == "CSV Exported Successfully"

    @pytest.mark.asyncio
    async def test_json_export_of_empty_set(self, sample_config, tmp_path):
        actions, notifier, _, _, _ = _make_actions(sample_config(catalog_name="mine"))

        path = await actions.export([], "json")

        assert path == tmp_path / "exports" / "mine.json"
        assert json.loads(path.read_text(encoding="utf-8")) == []
        assert notifier.current.text == "JSON Exported Successfully"

    @pytest.mark.asyncio
    async def test_write_failure_toasts_error(self, sample_records, sample_config):
        actions, notifier, _, _, _ = _make_actions(sample_config())

        with patch(
            "expansion_browser.actions.write_export_file",
            side_effect=PermissionError("denied"),
        ):
            assert await actions.export(sample_records, "csv") is None

        assert notifier.current.kind == "error"
        assert "Failed to export CSV" in notifier.current.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("fmt", "mime"), [("csv", "text/csv"), ("json", "application/json")])
    async def test_export_logs_mime_type(self, fmt, mime, sample_records, sample_config, caplog):
        actions, _, _, _, _ = _make_actions(sample_config())

        with caplog.at_level(logging.DEBUG, logger="expansion_browser.actions"):
            await actions.export(sample_records, fmt)

        assert f"Exported 6 records as {mime}" in caplog.text
