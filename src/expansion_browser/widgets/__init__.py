"""Widget classes extracted from app.py for modular UI composition."""

from expansion_browser.widgets.chrome import (
    CategoryTabBar,
    ContextFooter,
    PaginationBar,
    ToastBar,
)
from expansion_browser.widgets.listing import (
    EXPANSION_PREVIEW_MAX_LEN,
    category_label,
    render_empty_state,
    render_record_option,
    set_ascii_icons,
)

__all__ = [
    "EXPANSION_PREVIEW_MAX_LEN",
    "CategoryTabBar",
    "ContextFooter",
    "PaginationBar",
    "ToastBar",
    "category_label",
    "render_empty_state",
    "render_record_option",
    "set_ascii_icons",
]
