"""Record filtering, category statistics, and text formatting utilities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from rich.markup import escape as escape_markup

from expansion_browser.models import CATEGORY_FILTERS, FILTER_ALL, RECORD_CATEGORIES, Record

# ============================================================================
# Text Formatting Utilities
# ============================================================================


def truncate_text(text: str, max_len: int, suffix: str = "...") -> str:
    """Truncate text to max_len characters, adding suffix if truncated.

    Args:
        text: The text to truncate.
        max_len: Maximum length before truncation (not including suffix).
        suffix: String to append when truncated.

    Returns:
        Original text if within limit, otherwise truncated with suffix.
    """
    if len(text) <= max_len:
        return text
    return text[:max_len] + suffix


def escape_rich_text(text: str) -> str:
    """Escape text for safe Rich markup rendering."""
    return escape_markup(text) if text else ""


# ============================================================================
# Filtering (extracted for testability)
# ============================================================================


def matches_category(record: Record, category_filter: str) -> bool:
    """Return True if the record passes the category step."""
    return category_filter == FILTER_ALL or record.category == category_filter


def matches_search(record: Record, search_text: str) -> bool:
    """Case-insensitive substring match against keyword OR expansion.

    An empty search text matches everything. No trimming is applied, so a
    lone space only matches records that contain one.
    """
    if not search_text:
        return True
    needle = search_text.lower()
    return needle in record.keyword.lower() or needle in record.expansion.lower()


def filter_records(
    records: Iterable[Record],
    category_filter: str = FILTER_ALL,
    search_text: str = "",
) -> list[Record]:
    """Derive the filtered set for a (category filter, search text) pair.

    Pure and order-preserving: the result is a subsequence of ``records``.

    Raises:
        ValueError: If ``category_filter`` is not a known filter option.
    """
    if category_filter not in CATEGORY_FILTERS:
        raise ValueError(f"Unknown category filter: {category_filter!r}")
    return [
        record
        for record in records
        if matches_category(record, category_filter) and matches_search(record, search_text)
    ]


def count_by_category(records: Sequence[Record]) -> dict[str, int]:
    """Return totals keyed by filter option (``all`` plus each record category)."""
    counts = {FILTER_ALL: len(records)}
    for category in RECORD_CATEGORIES:
        counts[category] = 0
    for record in records:
        if record.category in counts and record.category != FILTER_ALL:
            counts[record.category] += 1
    return counts


__all__ = [
    "count_by_category",
    "escape_rich_text",
    "filter_records",
    "matches_category",
    "matches_search",
    "truncate_text",
]
