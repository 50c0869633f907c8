"""Exceptions raised by the EPUB model and exporter."""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """A required value was missing, empty or whitespace only."""
