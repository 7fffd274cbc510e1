"""List rendering helpers for catalog rows."""

from __future__ import annotations

from expansion_browser.models import CATEGORY_LABELS, Record
from expansion_browser.query import escape_rich_text, truncate_text
from expansion_browser.themes import THEME_COLORS, get_category_color

EXPANSION_PREVIEW_MAX_LEN = 160  # Max expansion length shown in a list row

_ICON_SETS: dict[str, dict[str, str]] = {
    "unicode": {"copied": "✓ Copied", "copy": "⧉ Copy"},
    "ascii": {"copied": "[v] Copied", "copy": "[ ] Copy"},
}
_ACTIVE_ICON_SET = _ICON_SETS["unicode"]


def set_ascii_icons(enabled: bool) -> None:
    """Switch row indicators between Unicode and ASCII modes."""
    global _ACTIVE_ICON_SET
    _ACTIVE_ICON_SET = _ICON_SETS["ascii"] if enabled else _ICON_SETS["unicode"]


def category_label(category: str) -> str:
    """Human-readable language label; unknown tags are shown as-is."""
    return CATEGORY_LABELS.get(category, category.title())


def render_record_option(record: Record, copied: bool = False) -> str:
    """Render one record as Rich markup for the result list.

    Multi-line expansions are flattened so each row stays a fixed height.
    """
    keyword = escape_rich_text(record.keyword)
    preview = " ".join(record.expansion.split())
    expansion = escape_rich_text(truncate_text(preview, EXPANSION_PREVIEW_MAX_LEN))
    badge_color = get_category_color(record.category)
    badge = f"[{badge_color}]{escape_rich_text(category_label(record.category))}[/]"
    if copied:
        action = f"[bold {THEME_COLORS['green']}]{_ACTIVE_ICON_SET['copied']}[/]"
    else:
        action = f"[{THEME_COLORS['muted']}]{_ACTIVE_ICON_SET['copy']}[/]"
    return f"[bold {THEME_COLORS['accent']}]{keyword}[/]  {expansion}\n  {badge}  {action}"


def render_empty_state() -> str:
    """Placeholder shown when no record matches."""
    return (
        "[dim italic]No expansions found.[/]\n"
        "[dim]Try adjusting your search or filter.[/]"
    )


__all__ = [
    "EXPANSION_PREVIEW_MAX_LEN",
    "category_label",
    "render_empty_state",
    "render_record_option",
    "set_ascii_icons",
]
