"""Exception types raised by the catalog, clipboard and export layers."""

from __future__ import annotations


class ExpansionBrowserError(Exception):
    """Base class for application errors."""


class ClipboardWriteFailure(ExpansionBrowserError):
    """The system clipboard could not be written (no tool, denied, or timed out)."""


class EmptyResultSet(ExpansionBrowserError):
    """A bulk action was attempted on a filtered set with zero records."""


class CatalogLoadError(ExpansionBrowserError):
    """The catalog source could not be read or parsed."""


__all__ = [
    "CatalogLoadError",
    "ClipboardWriteFailure",
    "EmptyResultSet",
    "ExpansionBrowserError",
]
