"""Integration tests for the Textual app, driven through the pilot."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from textual.widgets import Input, OptionList

from expansion_browser.app import ExpansionBrowser
from expansion_browser.models import RowKey, SessionState
from expansion_browser.widgets import CategoryTabBar, PaginationBar, ToastBar


def _make_app(records, config, **kwargs):
    kwargs.setdefault("restore_session", False)
    kwargs.setdefault("copy_fn", AsyncMock(return_value=True))
    return ExpansionBrowser(records, config=config, **kwargs)


@pytest.mark.asyncio
async def test_app_renders_first_page(make_catalog, sample_config):
    app = _make_app(make_catalog(150), sample_config())
    with patch("expansion_browser.app.save_config", return_value=True):
        async with app.run_test():
            option_list = app.query_one("#record-list", OptionList)
            assert option_list.option_count == 100
            assert app.query_one(PaginationBar).has_class("visible")
            assert app._page_view.total_pages == 2


@pytest.mark.asyncio
async def test_next_page_then_category_change_resets_page(make_catalog, sample_config):
    app = _make_app(make_catalog(150), sample_config())
    with patch("expansion_browser.app.save_config", return_value=True):
        async with app.run_test() as pilot:
            await pilot.press("right_square_bracket")
            await pilot.pause()
            assert app.query_state.current_page == 2
            assert app.query_one("#record-list", OptionList).option_count == 50

            await pilot.press("3")
            await pilot.pause()
            assert app.query_state.category_filter == "spanish"
            assert app.query_state.current_page == 1
            assert len(app.filtered_records) == 50
            assert app.query_one(CategoryTabBar).active == "spanish"
            assert not app.query_one(PaginationBar).has_class("visible")


@pytest.mark.asyncio
async def test_next_page_on_last_page_is_noop(make_catalog, sample_config):
    app = _make_app(make_catalog(150), sample_config())
    with patch("expansion_browser.app.save_config", return_value=True):
        async with app.run_test() as pilot:
            await pilot.press("right_square_bracket", "right_square_bracket")
            await pilot.pause()
            assert app.query_state.current_page == 2
            await pilot.press("left_square_bracket", "left_square_bracket")
            await pilot.pause()
            assert app.query_state.current_page == 1


@pytest.mark.asyncio
async def test_typing_a_search_filters_immediately(sample_records, sample_config):
    app = _make_app(sample_records, sample_config())
    with patch("expansion_browser.app.save_config", return_value=True):
        async with app.run_test() as pilot:
            await pilot.press("slash")
            for ch in "hola":
                await pilot.press(ch)
            await pilot.pause()
            assert [r.keyword for r in app.filtered_records] == ["D4"]
            assert app.query_one("#record-list", OptionList).option_count == 1


@pytest.mark.asyncio
async def test_no_results_shows_empty_state(sample_records, sample_config):
    app = _make_app(sample_records, sample_config())
    with patch("expansion_browser.app.save_config", return_value=True):
        async with app.run_test() as pilot:
            app.query_one("#search-input", Input).value = "zzz-no-match"
            await pilot.pause()
            assert app.filtered_records == []
            option_list = app.query_one("#record-list", OptionList)
            assert option_list.option_count == 1
            assert option_list.get_option_at_index(0).disabled


@pytest.mark.asyncio
async def test_copy_current_marks_row_and_shows_toast(sample_records, sample_config):
    copy_fn = AsyncMock(return_value=True)
    app = _make_app(sample_records, sample_config(), copy_fn=copy_fn)
    with patch("expansion_browser.app.save_config", return_value=True):
        async with app.run_test() as pilot:
            await pilot.press("c")
            await pilot.pause(0.05)
            copy_fn.assert_awaited_once_with("Good morning!")
            assert app.copy_marker.is_marked(RowKey("A1", 0))
            assert app.notifier.current.text == "Copied to clipboard!"
            assert app.query_one(ToastBar).has_class("visible")


@pytest.mark.asyncio
async def test_copy_visible_on_empty_set_does_not_write(sample_records, sample_config):
    copy_fn = AsyncMock(return_value=True)
    app = _make_app(sample_records, sample_config(), copy_fn=copy_fn)
    with patch("expansion_browser.app.save_config", return_value=True):
        async with app.run_test() as pilot:
            app.query_one("#search-input", Input).value = "zzz-no-match"
            await pilot.pause()
            app.action_copy_visible()
            await pilot.pause()
            copy_fn.assert_not_awaited()
            assert app.notifier.current.text == "Nothing to copy"


@pytest.mark.asyncio
async def test_export_csv_writes_filtered_set(sample_records, sample_config, tmp_path):
    app = _make_app(sample_records, sample_config())
    with patch("expansion_browser.app.save_config", return_value=True):
        async with app.run_test() as pilot:
            await pilot.press("2")
            await pilot.pause()
            app.action_export_csv()
            # The file is written off the event loop
            await asyncio.gather(*app._background_tasks)
            await pilot.pause()
            export_file = tmp_path / "exports" / "gboard_shortcuts.csv"
            lines = export_file.read_text(encoding="utf-8").splitlines()
            assert lines[0] == "Shortcut,Expansion,Language"
            assert [line.split(",")[0] for line in lines[1:]] == ['"C3"', '"F6"']
            assert app.notifier.current.text == "CSV Exported Successfully"


@pytest.mark.asyncio
async def test_session_is_restored_and_saved(make_catalog, sample_config):
    config = sample_config(
        session=SessionState(category_filter="english", search_text="", current_page=1),
        page_size=10,
    )
    app = _make_app(make_catalog(90), config, restore_session=True)
    with patch("expansion_browser.app.save_config", return_value=True) as save:
        async with app.run_test() as pilot:
            assert app.query_state.category_filter == "english"
            assert len(app.filtered_records) == 30
            await pilot.press("right_square_bracket")
            await pilot.pause()
            app.on_unmount()
            saved = save.call_args[0][0]
            assert saved.session.category_filter == "english"
            assert saved.session.current_page == 2


@pytest.mark.asyncio
async def test_page_size_override_is_not_saved(make_catalog, sample_config):
    app = _make_app(make_catalog(30), sample_config(), page_size=10)
    with patch("expansion_browser.app.save_config", return_value=True) as save:
        async with app.run_test():
            assert app.query_one("#record-list", OptionList).option_count == 10
            assert app._page_view.total_pages == 3
            app.on_unmount()
            assert save.call_args[0][0].page_size == 100
