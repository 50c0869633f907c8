"""Chapter of XHTML content in the EPUB."""

from __future__ import annotations

from attrs import define, field

from .utils import require_text, strip_or_empty


@define(slots=True, frozen=True)
class Section:
    """Chapter of XHTML content in the EPUB.

    Attributes:
        title: Title shown in the table of contents.
        body_html: Markup placed verbatim inside the ``<body>`` element.
        css_path: Relative path to the style sheet for the section, or an
            empty string when the section has none.
    """

    title: str = field(validator=require_text)
    body_html: str = field(validator=require_text)
    css_path: str = field(default="", converter=strip_or_empty)

    @property
    def has_css(self) -> bool:
        return bool(self.css_path)
