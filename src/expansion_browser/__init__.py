"""Browse, search, copy and export a catalog of text-expansion shortcuts."""

__version__ = "0.1.0"
