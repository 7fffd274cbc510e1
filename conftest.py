"""Shared test fixtures for Expansion Browser tests."""

from __future__ import annotations

from typing import Any

import pytest

from expansion_browser.models import CATEGORY_UNIVERSAL, Record, UserConfig
from expansion_browser.widgets.listing import set_ascii_icons

# ── Module-level state isolation ─────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _reset_icon_set():
    """Restore Unicode row indicators after each test.

    ExpansionBrowser.__init__ and the ASCII-mode tests switch the module-level
    icon set; without this fixture later tests would render ASCII markers.
    """
    yield
    set_ascii_icons(False)


# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def make_record():
    """Factory fixture for creating Record instances with sensible defaults."""

    def _make(
        keyword: str = "A1",
        expansion: str = "Good morning!",
        category: str = CATEGORY_UNIVERSAL,
    ) -> Record:
        return Record(keyword=keyword, expansion=expansion, category=category)

    return _make


@pytest.fixture
def sample_records(make_record) -> list[Record]:
    """A small mixed-language catalog."""
    return [
        make_record("A1", "Good morning!", "english"),
        make_record("B2", "Buenos días", "spanish"),
        make_record("C3", "Hello, world", "universal"),
        make_record("D4", "Hola amigo", "spanish"),
        make_record("E5", "See you later", "english"),
        make_record("F6", "👍", "universal"),
    ]


@pytest.fixture
def make_catalog(make_record):
    """Factory for N numbered records, cycling through the three categories."""

    def _make(count: int) -> list[Record]:
        categories = ("universal", "spanish", "english")
        return [
            make_record(f"K{i}", f"Expansion number {i}", categories[i % 3])
            for i in range(count)
        ]

    return _make


@pytest.fixture
def sample_config(tmp_path):
    """Factory fixture for creating UserConfig with optional overrides.

    Exports go to a temp directory unless export_dir is given.
    """

    def _make(**kwargs: Any) -> UserConfig:
        kwargs.setdefault("export_dir", str(tmp_path / "exports"))
        return UserConfig(**kwargs)

    return _make
