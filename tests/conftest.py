"""Shared fixtures for the EPUB tests."""

from __future__ import annotations

import io
import zipfile
from datetime import datetime, timezone
from typing import Callable

import pytest

from epubpack import export
from epubpack.model import Epub


FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock(monkeypatch: pytest.MonkeyPatch) -> datetime:
    """Pin the export timestamp to ``FIXED_TIME``."""

    monkeypatch.setattr(export, "_utc_now", lambda: FIXED_TIME)
    return FIXED_TIME


@pytest.fixture
def export_book() -> Callable[[Epub], bytes]:
    """Return a helper exporting a document to bytes."""

    def _export(book: Epub) -> bytes:
        sink = io.BytesIO()
        book.export(sink)
        return sink.getvalue()

    return _export


@pytest.fixture
def open_epub(
    export_book: Callable[[Epub], bytes]
) -> Callable[[Epub], zipfile.ZipFile]:
    """Return a helper exporting a document and opening the archive."""

    def _open(book: Epub) -> zipfile.ZipFile:
        return zipfile.ZipFile(io.BytesIO(export_book(book)))

    return _open
