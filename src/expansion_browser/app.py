#!/usr/bin/env python3
"""Text Expansion Browser TUI - Browse a catalog of keyword→expansion shortcuts.

Usage:
    expansion-browser                       # Use catalog.json in the current directory
    expansion-browser -i shortcuts.csv      # Use a custom file
    expansion-browser --no-restore          # Start fresh session
    expansion-browser --export csv --category spanish --search hola

Key bindings:
    /       - Focus the search box (escape returns to the list)
    1-4     - Language filter: all / universal / spanish / english
    [ / ]   - Previous / next page
    c       - Copy the highlighted expansion (enter or click also copies)
    C       - Copy every visible expansion, one per line
    E       - Export the filtered set as CSV
    J       - Export the filtered set as JSON
    j/k     - Navigate down/up (vim-style)
    q       - Quit
"""

from __future__ import annotations

import asyncio
import logging
import sys
import time
from collections.abc import Sequence
from typing import Any

from textual import on
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.widgets import Header, Input, Label, OptionList
from textual.widgets.option_list import Option

from expansion_browser.action_messages import build_results_summary
from expansion_browser.actions import CatalogActions, CopyFn
from expansion_browser.catalog import CatalogStore
from expansion_browser.cli import main as _cli_main
from expansion_browser.clipboard import copy_text
from expansion_browser.config import coerce_page_size, save_config
from expansion_browser.feedback import CopyMarker, Notifier
from expansion_browser.models import (
    CATEGORY_LABELS,
    FILTER_ALL,
    RECORD_CATEGORIES,
    PageView,
    Record,
    RowKey,
    SessionState,
    ToastMessage,
    UserConfig,
)
from expansion_browser.pagination import QueryState, paginate
from expansion_browser.query import filter_records
from expansion_browser.themes import TEXTUAL_THEME, THEME_NAME
from expansion_browser.ui_constants import APP_BINDINGS, APP_CSS, FOOTER_BINDINGS
from expansion_browser.widgets import (
    CategoryTabBar,
    ContextFooter,
    PaginationBar,
    ToastBar,
    render_empty_state,
    render_record_option,
    set_ascii_icons,
)

logger = logging.getLogger(__name__)

EMPTY_OPTION_ID = "empty"
_ROW_PREFIX = "row-"


class ExpansionBrowser(App):
    """A TUI application to browse a text-expansion catalog."""

    TITLE = "Text Expansion Manager"

    CSS = APP_CSS

    BINDINGS = APP_BINDINGS

    def __init__(
        self,
        records: Sequence[Record],
        config: UserConfig | None = None,
        restore_session: bool = True,
        ascii_icons: bool = False,
        copy_fn: CopyFn = copy_text,
        page_size: int | None = None,
    ) -> None:
        super().__init__()
        # Register and activate the theme so $th-* CSS variables resolve before compose()
        self.register_theme(TEXTUAL_THEME)
        self.theme = THEME_NAME
        self.catalog = CatalogStore(records)
        self._config = config or UserConfig()
        self._config.page_size = coerce_page_size(self._config.page_size)
        # Per-run override; never written back to the config
        self._page_size = (
            coerce_page_size(page_size) if page_size is not None else self._config.page_size
        )
        self._restore_session = restore_session

        self.query_state = QueryState()
        self.filtered_records: list[Record] = list(self.catalog)
        self._page_view: PageView = paginate(self.filtered_records, self._page_size, 1)

        # Background task tracking (prevent GC of fire-and-forget tasks)
        self._background_tasks: set[asyncio.Task[Any]] = set()

        # Transient feedback; timers are scheduled on the app's event loop
        self.notifier = Notifier(self._schedule, on_change=self._render_toast)
        self.copy_marker = CopyMarker(self._schedule, on_change=self._on_copy_marker_changed)
        self._actions = CatalogActions(self.notifier, self.copy_marker, self._config, copy_fn)

        set_ascii_icons(ascii_icons)

    def _schedule(self, delay: float, callback: Any) -> Any:
        return self.set_timer(delay, callback)

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main-pane"):
            yield Label(self._format_stats_header(), id="stats-header")
            yield Input(
                placeholder=" Search shortcuts or expansions... (e.g. 'A1', 'morning', 'hola')",
                id="search-input",
            )
            yield CategoryTabBar(self.catalog.stats, self.query_state.category_filter)
            yield Label("", id="status-bar")
            yield OptionList(id="record-list")
            yield PaginationBar()
        yield ToastBar()
        yield ContextFooter()

    def on_mount(self) -> None:
        """Called when app is mounted. Restores session state if enabled."""
        self.sub_title = f"{len(self.catalog)} expansions loaded"

        if self._restore_session:
            session = self._config.session
            self.query_state = QueryState(
                category_filter=session.category_filter,
                search_text=session.search_text,
                current_page=session.current_page,
            )
            if session.search_text:
                self.query_one("#search-input", Input).value = session.search_text
            self.query_one(CategoryTabBar).set_active(session.category_filter)

        self._apply_filter()
        self.query_one(ContextFooter).render_bindings(FOOTER_BINDINGS)

        logger.debug(
            "App mounted: %d records, page_size=%d",
            len(self.catalog),
            self._page_size,
        )

        try:
            self._get_record_list().focus()
        except NoMatches:
            pass

    def on_unmount(self) -> None:
        """Save session state on exit."""
        self._config.session = SessionState(
            category_filter=self.query_state.category_filter,
            search_text=self.query_state.search_text,
            current_page=self.query_state.current_page,
        )
        save_config(self._config)

    # ------------------------------------------------------------------
    # Filtering and pagination
    # ------------------------------------------------------------------

    def _format_stats_header(self) -> str:
        stats = self.catalog.stats
        parts = [f"[bold]{stats[FILTER_ALL]:,}[/] expansions"]
        parts.extend(
            f"{CATEGORY_LABELS[category]} {stats[category]:,}" for category in RECORD_CATEGORIES
        )
        return " " + " · ".join(parts)

    def _apply_filter(self) -> None:
        """Recompute the filtered set from the current query state."""
        perf_start = time.perf_counter() if logger.isEnabledFor(logging.DEBUG) else None
        state = self.query_state
        self.filtered_records = filter_records(
            self.catalog, state.category_filter, state.search_text
        )
        self._refresh_page(highlight=0)

        logger.debug(
            "Filter applied: category=%s, search=%r, matched=%d/%d records",
            state.category_filter,
            state.search_text,
            len(self.filtered_records),
            len(self.catalog),
        )
        if perf_start is not None:
            logger.debug(
                "Filter->list refresh latency: %.2fms",
                (time.perf_counter() - perf_start) * 1000.0,
            )

    def _refresh_page(self, highlight: int | None = None) -> None:
        """Re-slice the current page and redraw list, status and pagination."""
        self._page_view = paginate(
            self.filtered_records, self._page_size, self.query_state.current_page
        )
        self.query_state.current_page = self._page_view.current_page
        self._refresh_list_view(highlight)
        self._update_status_bar()
        self._update_pagination_bar()

    def _build_options(self) -> list[Option]:
        view = self._page_view
        if not view.items:
            return [Option(render_empty_state(), id=EMPTY_OPTION_ID, disabled=True)]
        options = []
        for offset, record in enumerate(view.items):
            position = view.start_position + offset
            copied = self.copy_marker.is_marked(RowKey(record.keyword, position))
            options.append(
                Option(render_record_option(record, copied), id=f"{_ROW_PREFIX}{position}")
            )
        return options

    def _refresh_list_view(self, highlight: int | None = None) -> None:
        """Rebuild the option list for the current page.

        With highlight=None the current highlight is preserved.
        """
        try:
            option_list = self._get_record_list()
        except NoMatches:
            return
        previous = option_list.highlighted
        option_list.clear_options()
        option_list.add_options(self._build_options())
        if not self._page_view.items:
            return
        target = highlight if highlight is not None else previous
        if target is not None:
            option_list.highlighted = max(0, min(target, len(self._page_view.items) - 1))

    def _update_status_bar(self) -> None:
        try:
            status = self.query_one("#status-bar", Label)
        except NoMatches:
            return
        status.update(build_results_summary(len(self.filtered_records), len(self.catalog)))

    def _update_pagination_bar(self) -> None:
        view = self._page_view
        try:
            bar = self.query_one(PaginationBar)
        except NoMatches:
            return
        bar.update_page(view.current_page, view.total_pages, view.show_controls)

    def _get_record_list(self) -> OptionList:
        return self.query_one("#record-list", OptionList)

    def _row_at(self, option_index: int | None) -> tuple[Record, RowKey] | None:
        """Map an option index on the current page to (record, row key)."""
        view = self._page_view
        if option_index is None or not 0 <= option_index < len(view.items):
            return None
        record = view.items[option_index]
        return record, RowKey(record.keyword, view.start_position + option_index)

    # ------------------------------------------------------------------
    # Transient feedback
    # ------------------------------------------------------------------

    def _render_toast(self, toast: ToastMessage | None) -> None:
        try:
            self.query_one(ToastBar).show_toast(toast)
        except NoMatches:
            pass

    def _on_copy_marker_changed(self, _key: RowKey | None) -> None:
        self._refresh_list_view()

    def _track_task(self, coro: Any) -> asyncio.Task[Any]:
        """Create an asyncio task and track it to prevent garbage collection."""
        task = asyncio.create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        task.add_done_callback(self._on_task_done)
        return task

    @staticmethod
    def _on_task_done(task: asyncio.Task[Any]) -> None:
        """Log unhandled exceptions from background tasks."""
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Unhandled exception in background task: %s", exc, exc_info=exc)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    @on(Input.Changed, "#search-input")
    def on_search_changed(self, event: Input.Changed) -> None:
        """Re-filter on every keystroke; a changed query resets to page 1."""
        if self.query_state.set_search_text(event.value):
            self._apply_filter()

    @on(Input.Submitted, "#search-input")
    def on_search_submitted(self, _event: Input.Submitted) -> None:
        self._get_record_list().focus()

    @on(CategoryTabBar.SelectCategory)
    def on_category_selected(self, event: CategoryTabBar.SelectCategory) -> None:
        self.action_set_category(event.category_filter)

    @on(PaginationBar.NavigatePage)
    def on_page_navigate(self, event: PaginationBar.NavigatePage) -> None:
        if event.direction > 0:
            self.action_next_page()
        else:
            self.action_prev_page()

    @on(OptionList.OptionSelected, "#record-list")
    def on_record_selected(self, event: OptionList.OptionSelected) -> None:
        """Selecting a row (enter or click) copies its expansion."""
        self._copy_row(event.option_index)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_set_category(self, category_filter: str) -> None:
        """Switch the language filter; a change resets to page 1."""
        if self.query_state.set_category_filter(category_filter):
            self.query_one(CategoryTabBar).set_active(category_filter)
            self._apply_filter()

    def action_next_page(self) -> None:
        before = self.query_state.current_page
        if self.query_state.go_next(self._page_view.total_pages) != before:
            self._refresh_page(highlight=0)

    def action_prev_page(self) -> None:
        before = self.query_state.current_page
        if self.query_state.go_previous() != before:
            self._refresh_page(highlight=0)

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    def action_leave_search(self) -> None:
        self._get_record_list().focus()

    def action_cursor_down(self) -> None:
        self._get_record_list().action_cursor_down()

    def action_cursor_up(self) -> None:
        self._get_record_list().action_cursor_up()

    def _copy_row(self, option_index: int | None) -> None:
        row = self._row_at(option_index)
        if row is None:
            return
        record, key = row
        self._track_task(self._actions.copy_single(record, key))

    def action_copy_current(self) -> None:
        """Copy the highlighted row's expansion."""
        self._copy_row(self._get_record_list().highlighted)

    def action_copy_visible(self) -> None:
        """Copy every expansion in the filtered set (all pages)."""
        self._track_task(self._actions.copy_bulk(list(self.filtered_records)))

    def action_export_csv(self) -> None:
        self._track_task(self._actions.export(list(self.filtered_records), "csv"))

    def action_export_json(self) -> None:
        self._track_task(self._actions.export(list(self.filtered_records), "json"))


def main() -> int:
    """Main entry point wrapper for CLI/bootstrap logic."""
    return _cli_main(app_factory=ExpansionBrowser)


if __name__ == "__main__":
    sys.exit(main())
