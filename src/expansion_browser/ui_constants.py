"""Internal UI constants for the ExpansionBrowser app."""

from __future__ import annotations

from textual.binding import Binding, BindingType

APP_CSS = """
Screen {
    background: $th-background;
}

Header {
    background: $th-panel-alt;
    color: $th-text;
}

#main-pane {
    height: 1fr;
    border: tall $th-highlight;
    background: $th-panel;
}

#main-pane:focus-within {
    border: tall $th-accent;
}

#stats-header {
    padding: 0 1;
    background: $th-panel;
    color: $th-accent;
    text-style: bold;
}

#search-input {
    width: 100%;
    border: tall $th-accent;
    background: $th-background;
}

#search-input:focus {
    border: tall $th-accent-alt;
}

#record-list {
    height: 1fr;
    scrollbar-gutter: stable;
    scrollbar-background: $th-scrollbar-bg;
    scrollbar-color: $th-scrollbar-thumb;
    scrollbar-color-hover: $th-scrollbar-hover;
    scrollbar-color-active: $th-scrollbar-active;
}

#record-list > .option-list--option-highlighted {
    background: $th-highlight;
}

#record-list:focus > .option-list--option-highlighted {
    background: $th-highlight-focus;
}

#status-bar {
    padding: 0 1;
    color: $th-muted;
}
"""

# Footer hints, in display order
FOOTER_BINDINGS: list[tuple[str, str]] = [
    ("/", "search"),
    ("1-4", "language"),
    ("c", "copy"),
    ("C", "copy visible"),
    ("E", "CSV"),
    ("J", "JSON"),
    ("[ ]", "page"),
    ("q", "quit"),
]

APP_BINDINGS: list[BindingType] = [
    Binding("q", "quit", "Quit", show=False),
    Binding("slash", "focus_search", "Search", show=False),
    Binding("escape", "leave_search", "Leave search", show=False),
    Binding("1", "set_category('all')", "All", show=False),
    Binding("2", "set_category('universal')", "Universal", show=False),
    Binding("3", "set_category('spanish')", "Spanish", show=False),
    Binding("4", "set_category('english')", "English", show=False),
    Binding("left_square_bracket", "prev_page", "Previous page", show=False),
    Binding("right_square_bracket", "next_page", "Next page", show=False),
    Binding("c", "copy_current", "Copy", show=False),
    Binding("C", "copy_visible", "Copy Visible", show=False),
    Binding("E", "export_csv", "Export CSV", show=False),
    Binding("J", "export_json", "Export JSON", show=False),
    Binding("j", "cursor_down", "Down", show=False),
    Binding("k", "cursor_up", "Up", show=False),
]

__all__ = [
    "APP_BINDINGS",
    "APP_CSS",
    "FOOTER_BINDINGS",
]
