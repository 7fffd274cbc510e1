"""Widget chrome: category tabs, pagination strip, toast bar, and footer hints."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Label, Static

from expansion_browser.models import CATEGORY_FILTERS, CATEGORY_LABELS, FILTER_ALL, ToastMessage
from expansion_browser.query import escape_rich_text
from expansion_browser.themes import THEME_COLORS


class ContextFooter(Static):
    """Footer showing the relevant keybindings."""

    DEFAULT_CSS = """
    ContextFooter {
        dock: bottom;
        height: 1;
        background: $th-background;
        color: $th-muted;
        padding: 0 1;
        border-top: solid $th-panel-alt;
    }
    """

    def render_bindings(self, bindings: list[tuple[str, str]]) -> None:
        """Update the footer with a list of (key, label) binding hints."""
        accent = THEME_COLORS["accent"]
        muted = THEME_COLORS["muted"]
        parts = [
            f"[bold {accent}]{escape_rich_text(key)}[/] [{muted}]{label}[/]"
            for key, label in bindings
        ]
        self.update("  ".join(parts))


class CategoryTabBar(Horizontal):
    """Tabs for the category filter, each showing its record count."""

    class SelectCategory(Message):
        """Request to switch the category filter."""

        def __init__(self, category_filter: str) -> None:
            super().__init__()
            self.category_filter = category_filter

    DEFAULT_CSS = """
    CategoryTabBar {
        height: auto;
        padding: 0 1;
        background: $th-panel;
        border-bottom: solid $th-panel-alt;
    }

    CategoryTabBar .category-tab {
        padding: 0 2;
        margin-right: 1;
        color: $th-muted;
    }

    CategoryTabBar .category-tab:hover {
        color: $th-text;
    }

    CategoryTabBar .category-tab.active {
        color: $th-accent-alt;
        text-style: bold;
    }
    """

    def __init__(self, stats: dict[str, int], active: str = FILTER_ALL) -> None:
        super().__init__()
        self._stats = stats
        self._active = active

    def _tab_text(self, index: int, category_filter: str) -> str:
        count = self._stats.get(category_filter, 0)
        return f"{index + 1}: {CATEGORY_LABELS[category_filter]} ({count})"

    def compose(self) -> ComposeResult:
        for i, category_filter in enumerate(CATEGORY_FILTERS):
            classes = "category-tab active" if category_filter == self._active else "category-tab"
            yield Label(
                self._tab_text(i, category_filter),
                classes=classes,
                id=f"tab-{category_filter}",
            )

    @property
    def active(self) -> str:
        return self._active

    def set_active(self, category_filter: str) -> None:
        """Highlight the tab for category_filter."""
        self._active = category_filter
        for tab in self.query(".category-tab"):
            tab.set_class(tab.id == f"tab-{category_filter}", "active")

    def on_click(self, event: object) -> None:
        """Handle clicks on a tab."""
        from textual.events import Click

        if not isinstance(event, Click):
            return
        widget = event.widget
        if not isinstance(widget, Label):
            return
        widget_id = widget.id or ""
        if widget_id.startswith("tab-"):
            category_filter = widget_id.removeprefix("tab-")
            if category_filter in CATEGORY_FILTERS:
                self.post_message(self.SelectCategory(category_filter))


class PaginationBar(Horizontal):
    """Page indicator with prev/next arrows, only visible with more than one page."""

    class NavigatePage(Message):
        """Request to move one page (+1 = next, -1 = previous)."""

        def __init__(self, direction: int) -> None:
            super().__init__()
            self.direction = direction

    DEFAULT_CSS = """
    PaginationBar {
        height: auto;
        padding: 0 1;
        background: $th-panel;
        align-horizontal: center;
        display: none;
    }

    PaginationBar.visible {
        display: block;
    }

    PaginationBar .page-arrow {
        padding: 0 1;
        color: $th-text;
    }

    PaginationBar .page-arrow.disabled {
        color: $th-muted;
    }

    PaginationBar #page-label {
        padding: 0 1;
        color: $th-muted;
    }
    """

    def compose(self) -> ComposeResult:
        yield Label("<", classes="page-arrow", id="page-prev")
        yield Label("", id="page-label")
        yield Label(">", classes="page-arrow", id="page-next")

    def update_page(self, current_page: int, total_pages: int, visible: bool) -> None:
        """Refresh label and arrow states."""
        self.set_class(visible, "visible")
        self.query_one("#page-label", Label).update(f"Page {current_page} of {total_pages}")
        self.query_one("#page-prev", Label).set_class(current_page <= 1, "disabled")
        self.query_one("#page-next", Label).set_class(current_page >= total_pages, "disabled")

    def on_click(self, event: object) -> None:
        """Handle clicks on the arrows."""
        from textual.events import Click

        if not isinstance(event, Click):
            return
        widget = event.widget
        if widget is None:
            return
        if widget.id == "page-prev":
            self.post_message(self.NavigatePage(-1))
        elif widget.id == "page-next":
            self.post_message(self.NavigatePage(1))


class ToastBar(Static):
    """Renders the latest toast from the Notifier; hidden when there is none."""

    DEFAULT_CSS = """
    ToastBar {
        dock: bottom;
        height: auto;
        padding: 0 2;
        margin-bottom: 1;
        display: none;
    }

    ToastBar.visible {
        display: block;
    }

    ToastBar.success {
        background: $th-green;
        color: $th-background;
    }

    ToastBar.error {
        background: $th-pink;
        color: $th-text;
    }

    ToastBar.info {
        background: $th-accent;
        color: $th-background;
    }
    """

    def show_toast(self, toast: ToastMessage | None) -> None:
        """Display toast, or hide the bar when toast is None."""
        for kind in ("success", "error", "info"):
            self.remove_class(kind)
        if toast is None:
            self.remove_class("visible")
            self.update("")
            return
        prefix = "✓ " if toast.kind == "success" else ""
        self.update(f"{prefix}{escape_rich_text(toast.text)}")
        self.add_class(toast.kind)
        self.add_class("visible")


__all__ = [
    "CategoryTabBar",
    "ContextFooter",
    "PaginationBar",
    "ToastBar",
]
