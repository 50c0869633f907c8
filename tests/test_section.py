"""Tests for sections."""

from __future__ import annotations

import pytest

from epubpack import InvalidArgumentError, Section


def test_section_keeps_values() -> None:
    """Title and body are stored unchanged."""

    section = Section("Chapter 1", "<p>One</p>", "book.css")

    assert section.title == "Chapter 1"
    assert section.body_html == "<p>One</p>"
    assert section.css_path == "book.css"
    assert section.has_css


def test_section_trims_css_path() -> None:
    """Surrounding whitespace is removed from the style sheet path."""

    section = Section("Chapter 1", "<p>One</p>", "  styles/book.css \n")
    assert section.css_path == "styles/book.css"


@pytest.mark.parametrize("css_path", [None, "", "   "])
def test_section_without_css(css_path: str | None) -> None:
    """Missing or blank style sheet paths mean no style sheet."""

    section = Section("Chapter 1", "<p>One</p>", css_path)

    assert section.css_path == ""
    assert not section.has_css


def test_section_css_defaults_to_none() -> None:
    """Sections have no style sheet unless one is given."""

    assert not Section("Chapter 1", "<p>One</p>").has_css


@pytest.mark.parametrize("title", [None, "", "  "])
def test_section_rejects_blank_title(title: str | None) -> None:
    with pytest.raises(InvalidArgumentError):
        Section(title, "<p>One</p>")


@pytest.mark.parametrize("body", [None, "", "\n\t"])
def test_section_rejects_blank_body(body: str | None) -> None:
    with pytest.raises(InvalidArgumentError):
        Section("Chapter 1", body)


@pytest.mark.parametrize("title", [1, 2.0, b"One"])
def test_section_rejects_non_text_title(title: object) -> None:
    with pytest.raises(InvalidArgumentError, match="must be a string"):
        Section(title, "<p>One</p>")  # type: ignore[arg-type]
