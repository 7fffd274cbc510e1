"""Catalog loading and the read-only record store.

Catalogs come as a JSON array (short ``k``/``e``/``s`` keys as in the bundled
shortcut data, or long ``keyword``/``expansion``/``category`` keys) or as a CSV
file in the export format. Rows with an empty keyword or expansion are skipped.
"""

from __future__ import annotations

import csv
import io
import json
import logging
import time
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import Any, overload

import httpx

from expansion_browser.errors import CatalogLoadError
from expansion_browser.models import CATEGORY_UNIVERSAL, FILTER_ALL, Record
from expansion_browser.query import count_by_category

logger = logging.getLogger(__name__)

CATALOG_FETCH_TIMEOUT = 30
CATALOG_USER_AGENT = "expansion-browser/0.1"

# Raw data tags universal entries with the filter keyword itself
_CATEGORY_ALIASES = {FILTER_ALL: CATEGORY_UNIVERSAL}

_SHORT_KEYS = ("k", "e", "s")
_LONG_KEYS = ("keyword", "expansion", "category")
_CSV_COLUMNS = ("Shortcut", "Expansion", "Language")


def normalize_category(raw: str) -> str:
    """Lowercase a category tag and map aliases onto canonical names."""
    tag = raw.strip().lower()
    return _CATEGORY_ALIASES.get(tag, tag) or CATEGORY_UNIVERSAL


def _is_encodable(text: str) -> bool:
    """True if text survives UTF-8 encoding (no lone surrogates)."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _make_record(keyword: Any, expansion: Any, category: Any) -> Record | None:
    """Build a Record, or None when the row is empty or cannot be encoded."""
    if not isinstance(keyword, str) or not isinstance(expansion, str):
        return None
    if not keyword or not expansion:
        return None
    category_str = category if isinstance(category, str) else ""
    if not all(_is_encodable(text) for text in (keyword, expansion, category_str)):
        logger.debug("Rejecting record %r: text is not valid Unicode", keyword)
        return None
    return Record(keyword=keyword, expansion=expansion, category=normalize_category(category_str))


def _record_from_mapping(entry: dict[str, Any]) -> Record | None:
    keys = _SHORT_KEYS if "k" in entry or "e" in entry else _LONG_KEYS
    return _make_record(entry.get(keys[0]), entry.get(keys[1]), entry.get(keys[2], ""))


def parse_catalog_json(text: str) -> list[Record]:
    """Parse a JSON catalog document.

    Raises:
        CatalogLoadError: If the document is not a JSON array.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise CatalogLoadError("catalog JSON must be an array of records")

    records: list[Record] = []
    skipped = 0
    for entry in data:
        record = _record_from_mapping(entry) if isinstance(entry, dict) else None
        if record is None:
            skipped += 1
            continue
        records.append(record)
    if skipped:
        logger.warning("Skipped %d invalid catalog entries", skipped)
    return records


def parse_catalog_csv(text: str) -> list[Record]:
    """Parse a CSV catalog in the export format (Shortcut,Expansion,Language).

    Raises:
        CatalogLoadError: If the header is missing a required column.
    """
    reader = csv.DictReader(io.StringIO(text))
    fieldnames = reader.fieldnames or []
    missing = [col for col in _CSV_COLUMNS if col not in fieldnames]
    if missing:
        raise CatalogLoadError(f"CSV catalog is missing columns: {', '.join(missing)}")

    records: list[Record] = []
    skipped = 0
    for row in reader:
        record = _make_record(row.get("Shortcut"), row.get("Expansion"), row.get("Language"))
        if record is None:
            skipped += 1
            continue
        records.append(record)
    if skipped:
        logger.warning("Skipped %d invalid catalog rows", skipped)
    return records


def parse_catalog_text(text: str, fmt: str) -> list[Record]:
    """Dispatch to the parser for ``fmt`` ("json" or "csv")."""
    if fmt == "json":
        return parse_catalog_json(text)
    if fmt == "csv":
        return parse_catalog_csv(text)
    raise CatalogLoadError(f"unsupported catalog format: {fmt!r}")


def _format_from_suffix(name: str) -> str:
    return "csv" if name.lower().endswith(".csv") else "json"


def load_catalog_file(path: Path) -> list[Record]:
    """Read and parse a catalog file; the format follows the file suffix."""
    t0 = time.monotonic()
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise CatalogLoadError(f"failed to read {path}: {e}") from e
    records = parse_catalog_text(text, _format_from_suffix(path.name))
    logger.debug(
        "Loaded %d records from %s in %.1fms",
        len(records),
        path,
        (time.monotonic() - t0) * 1000.0,
    )
    return records


def fetch_catalog_url(url: str, *, timeout: float = CATALOG_FETCH_TIMEOUT) -> list[Record]:
    """Download and parse a catalog over HTTP(S)."""
    try:
        response = httpx.get(
            url,
            headers={"User-Agent": CATALOG_USER_AGENT},
            timeout=timeout,
            follow_redirects=True,
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise CatalogLoadError(f"server returned HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise CatalogLoadError(f"network error: {e}") from e

    content_type = response.headers.get("content-type", "")
    fmt = "csv" if "csv" in content_type else _format_from_suffix(httpx.URL(url).path)
    return parse_catalog_text(response.text, fmt)


class CatalogStore(Sequence[Record]):
    """Immutable ordered sequence of catalog records, loaded once."""

    __slots__ = ("_records", "_stats")

    def __init__(self, records: Iterable[Record]) -> None:
        self._records: tuple[Record, ...] = tuple(records)
        self._stats = count_by_category(self._records)

    @overload
    def __getitem__(self, index: int) -> Record: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Record, ...]: ...

    def __getitem__(self, index: int | slice) -> Record | tuple[Record, ...]:
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    @property
    def stats(self) -> dict[str, int]:
        """Totals keyed by filter option, computed once at load."""
        return dict(self._stats)


__all__ = [
    "CATALOG_FETCH_TIMEOUT",
    "CatalogStore",
    "fetch_catalog_url",
    "load_catalog_file",
    "normalize_category",
    "parse_catalog_csv",
    "parse_catalog_json",
    "parse_catalog_text",
]
