"""Export formatting: CSV and JSON serialization plus atomic file writes."""

from __future__ import annotations

import csv
import io
import json
import os
import re
import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path

from expansion_browser.models import DEFAULT_EXPORT_DIR, Record, UserConfig

CSV_HEADER = "Shortcut,Expansion,Language"

# Any line break style collapses to one space so each record stays on one row
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def collapse_newlines(text: str) -> str:
    """Replace every line break in text with a single space."""
    return _LINE_BREAK_RE.sub(" ", text)


def record_to_dict(record: Record) -> dict[str, str]:
    """Serialize a Record using the in-memory field names."""
    return {
        "keyword": record.keyword,
        "expansion": record.expansion,
        "category": record.category,
    }


def format_records_as_csv(records: Sequence[Record]) -> str:
    """Format records as CSV: one fully-quoted row per record.

    The header is written unquoted. Embedded double quotes are doubled by
    csv.writer and expansions are flattened to a single line.
    """
    output = io.StringIO()
    output.write(CSV_HEADER + "\n")
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for record in records:
        writer.writerow(
            [
                record.keyword,
                collapse_newlines(record.expansion),
                record.category,
            ]
        )
    return output.getvalue()


def format_records_as_json(records: Sequence[Record]) -> str:
    """Format records as a pretty-printed JSON array."""
    return json.dumps([record_to_dict(r) for r in records], indent=2, ensure_ascii=False)


# format key -> (MIME type, formatter, display name)
EXPORT_FORMATS: dict[str, tuple[str, Callable[[Sequence[Record]], str], str]] = {
    "csv": ("text/csv", format_records_as_csv, "CSV"),
    "json": ("application/json", format_records_as_json, "JSON"),
}


def export_filename(catalog_name: str, fmt: str) -> str:
    """Return the suggested download filename, e.g. ``gboard_shortcuts.csv``."""
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format: {fmt!r}")
    return f"{catalog_name}.{fmt}"


def get_export_dir(config: UserConfig) -> Path:
    """Return the configured export directory path."""
    return Path(config.export_dir or Path.home() / DEFAULT_EXPORT_DIR).expanduser()


def write_export_file(*, content: str, export_dir: Path, filename: str) -> Path:
    """Write export content using atomic temp-file replacement."""
    filepath = export_dir / filename
    export_dir.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=export_dir, suffix=".tmp", prefix=f".{filename}-")
    closed = False
    try:
        os.write(fd, content.encode("utf-8"))
        os.close(fd)
        closed = True
        os.replace(tmp_path, filepath)
    except BaseException:
        if not closed:
            os.close(fd)
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
    return filepath


__all__ = [
    "CSV_HEADER",
    "EXPORT_FORMATS",
    "collapse_newlines",
    "export_filename",
    "format_records_as_csv",
    "format_records_as_json",
    "get_export_dir",
    "record_to_dict",
    "write_export_file",
]
