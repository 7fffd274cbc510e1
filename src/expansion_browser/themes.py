"""Color palette, category and toast colors, and the Textual theme builder."""

from __future__ import annotations

from textual.theme import Theme as TextualTheme

THEME_NAME = "expansion-monokai"

DEFAULT_THEME = {
    "background": "#272822",
    "panel": "#1e1e1e",
    "panel_alt": "#3e3d32",
    "text": "#f8f8f2",
    "muted": "#75715e",
    "accent": "#66d9ef",
    "accent_alt": "#e6db74",
    "green": "#a6e22e",
    "yellow": "#e6db74",
    "orange": "#fd971f",
    "pink": "#f92672",
    "purple": "#ae81ff",
    "highlight": "#49483e",
    "highlight_focus": "#5a5950",
    "scrollbar_background": "#3e3d32",
    "scrollbar": "#75715e",
    "scrollbar_active": "#66d9ef",
    "scrollbar_hover": "#a8a8a2",
}

THEME_COLORS = DEFAULT_THEME.copy()

# Language badge colors (spanish red, english green, universal blue)
CATEGORY_COLORS: dict[str, str] = {
    "universal": THEME_COLORS["accent"],
    "spanish": THEME_COLORS["pink"],
    "english": THEME_COLORS["green"],
}
DEFAULT_CATEGORY_COLOR = "#888888"


def get_category_color(category: str) -> str:
    """Return the badge color for a record category."""
    return CATEGORY_COLORS.get(category, DEFAULT_CATEGORY_COLOR)


def _build_textual_theme(name: str, colors: dict[str, str]) -> TextualTheme:
    """Convert an app color dict to a Textual Theme with $th-* CSS variables."""
    variables = {
        "th-background": colors["background"],
        "th-panel": colors["panel"],
        "th-panel-alt": colors["panel_alt"],
        "th-highlight": colors["highlight"],
        "th-highlight-focus": colors["highlight_focus"],
        "th-accent": colors["accent"],
        "th-accent-alt": colors["accent_alt"],
        "th-muted": colors["muted"],
        "th-text": colors["text"],
        "th-green": colors["green"],
        "th-pink": colors["pink"],
        "th-orange": colors["orange"],
        "th-scrollbar-bg": colors["scrollbar_background"],
        "th-scrollbar-thumb": colors["scrollbar"],
        "th-scrollbar-active": colors["scrollbar_active"],
        "th-scrollbar-hover": colors["scrollbar_hover"],
    }
    return TextualTheme(
        name=name,
        primary=colors["accent"],
        secondary=colors["accent_alt"],
        accent=colors["green"],
        foreground=colors["text"],
        background=colors["background"],
        surface=colors["panel"],
        panel=colors["panel_alt"],
        warning=colors["orange"],
        error=colors["pink"],
        success=colors["green"],
        dark=True,
        variables=variables,
    )


TEXTUAL_THEME = _build_textual_theme(THEME_NAME, DEFAULT_THEME)


__all__ = [
    "CATEGORY_COLORS",
    "DEFAULT_CATEGORY_COLOR",
    "DEFAULT_THEME",
    "TEXTUAL_THEME",
    "THEME_COLORS",
    "THEME_NAME",
    "get_category_color",
]
