"""Data models and constants for the Expansion Browser application."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

# Application identity, single source of truth for platformdirs config paths
CONFIG_APP_NAME = "expansion-browser"

# Category tags carried by catalog records
CATEGORY_UNIVERSAL = "universal"
CATEGORY_SPANISH = "spanish"
CATEGORY_ENGLISH = "english"
RECORD_CATEGORIES = (CATEGORY_UNIVERSAL, CATEGORY_SPANISH, CATEGORY_ENGLISH)

# Category filter options, in tab order
FILTER_ALL = "all"
CATEGORY_FILTERS = (FILTER_ALL, *RECORD_CATEGORIES)
CATEGORY_LABELS: dict[str, str] = {
    FILTER_ALL: "All",
    CATEGORY_UNIVERSAL: "Universal",
    CATEGORY_SPANISH: "Spanish",
    CATEGORY_ENGLISH: "English",
}

# Pagination
DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 1000

# Transient feedback lifetimes (seconds)
TOAST_TIMEOUT = 3.0
COPY_MARKER_TIMEOUT = 1.5

# Export naming
DEFAULT_CATALOG_NAME = "gboard_shortcuts"
DEFAULT_EXPORT_DIR = "expansion-exports"  # Relative to home directory

TOAST_KINDS = ("success", "error", "info")


@dataclass(frozen=True, slots=True)
class Record:
    """One keyword→expansion catalog entry."""

    keyword: str
    expansion: str
    category: str


class RowKey(NamedTuple):
    """Per-row identity: keywords are not unique, so pair with filtered position."""

    keyword: str
    position: int


@dataclass(frozen=True, slots=True)
class ToastMessage:
    """A transient user notification."""

    id: int
    text: str
    kind: str = "success"  # "success" | "error" | "info"


@dataclass(frozen=True, slots=True)
class PageView:
    """One page of a filtered result set."""

    items: list[Record]
    total_pages: int
    current_page: int
    total_items: int
    page_size: int

    @property
    def start_position(self) -> int:
        """Position of the first item on this page within the filtered set."""
        return (self.current_page - 1) * self.page_size

    @property
    def show_controls(self) -> bool:
        """Pagination controls are only useful with more than one page."""
        return self.total_items > self.page_size


@dataclass(slots=True)
class SessionState:
    """State to restore on next run (filters and page)."""

    category_filter: str = FILTER_ALL
    search_text: str = ""
    current_page: int = 1

    def __post_init__(self) -> None:
        if self.category_filter not in CATEGORY_FILTERS:
            self.category_filter = FILTER_ALL
        if self.current_page < 1:
            self.current_page = 1


@dataclass(slots=True)
class UserConfig:
    """User configuration including session state and preferences."""

    session: SessionState = field(default_factory=SessionState)
    page_size: int = DEFAULT_PAGE_SIZE
    export_dir: str = ""  # Empty = use ~/expansion-exports/
    catalog_name: str = DEFAULT_CATALOG_NAME
    version: int = 1


__all__ = [
    "CATEGORY_ENGLISH",
    "CATEGORY_FILTERS",
    "CATEGORY_LABELS",
    "CATEGORY_SPANISH",
    "CATEGORY_UNIVERSAL",
    "CONFIG_APP_NAME",
    "COPY_MARKER_TIMEOUT",
    "DEFAULT_CATALOG_NAME",
    "DEFAULT_EXPORT_DIR",
    "DEFAULT_PAGE_SIZE",
    "FILTER_ALL",
    "MAX_PAGE_SIZE",
    "RECORD_CATEGORIES",
    "TOAST_KINDS",
    "TOAST_TIMEOUT",
    "PageView",
    "Record",
    "RowKey",
    "SessionState",
    "ToastMessage",
    "UserConfig",
]
