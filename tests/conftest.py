"""Shared pytest fixtures for the test suite."""

import os
import tempfile
import shutil
from pathlib import Path

import pytest

# Use offscreen platform for headless CI/CD
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

from gallery_tool.page import Page


PAGE_SIZE = 12


def make_records(ids):
    """Minimal API-style records for the given identifiers."""
    return [
        {
            "id": item_id,
            "title": f"Artwork {item_id}",
            "place_of_origin": "France",
            "artist_display": f"Artist {item_id}",
            "inscriptions": None,
            "date_start": 1880 + (item_id % 50),
            "date_end": None,
        }
        for item_id in ids
    ]


def build_page(page_number, page_size=PAGE_SIZE, ids=None, total_count=1000):
    """Page whose identifiers default to the 1-based virtual position."""
    if ids is None:
        first = (page_number - 1) * page_size + 1
        ids = list(range(first, first + page_size))
    return Page.from_records(page_number, page_size, make_records(ids), total_count)


class FakeProvider:
    """In-memory page provider.

    Args:
        errors: Maps page numbers to exceptions raised instead of a page
        gate: Optional threading.Event that fetch_page waits on
        total_count: Total reported with every page
    """

    def __init__(self, errors=None, gate=None, total_count=1000):
        self.errors = errors or {}
        self.gate = gate
        self.total_count = total_count
        self.calls = []

    def fetch_page(self, page_number, page_size):
        self.calls.append(page_number)
        if self.gate is not None:
            self.gate.wait(3)
        if page_number in self.errors:
            raise self.errors[page_number]
        first = (page_number - 1) * page_size + 1
        last = min(first + page_size - 1, self.total_count)
        return build_page(page_number, page_size, ids=list(range(first, last + 1)), total_count=self.total_count)


@pytest.fixture(scope="session")
def qapp():
    """Reusable QApplication instance (created once per test session)."""
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def temp_dir():
    """Temporary directory that is automatically cleaned up after each test."""
    path = tempfile.mkdtemp()
    yield Path(path)
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def page_factory():
    """Factory building pages of 12 items with ids equal to position + 1."""
    return build_page


@pytest.fixture
def provider_factory():
    """Factory for FakeProvider instances."""
    return FakeProvider


@pytest.fixture
def page_one():
    """Page 1 with identifiers 1..12 at positions 0..11."""
    return build_page(1)


@pytest.fixture
def page_two():
    """Page 2 with identifiers 13..24 at positions 12..23."""
    return build_page(2)
