"""EPUB document made of sections and resources."""

from __future__ import annotations

import logging
from typing import BinaryIO

from attrs import define, field

from .resource import Resource, ResourceType
from .section import Section
from .types import ByteSource, ResourceList, SectionList
from .utils import require_text

logger = logging.getLogger(__name__)

DEFAULT_TOC_TITLE = "Table of Contents"


@define(slots=True)
class Epub:
    """EPUB document made of sections and resources.

    ``title`` and ``author`` are validated on construction and again on every
    assignment.

    Attributes:
        title: Title of the book.
        author: Author of the book.
        language: Language code of the content. When unset, the exporter
            uses the language of the current locale.
        uid: Unique identifier (URL, ISBN, ...). When unset, a fresh UUID is
            generated on every export.
        toc_title: Heading of the navigation document.
        sections: Sections in reading order.
        resources: Embedded files in insertion order.
    """

    title: str = field(validator=require_text)
    author: str = field(validator=require_text)
    language: str | None = None
    uid: str | None = None
    toc_title: str = DEFAULT_TOC_TITLE
    sections: SectionList = field(factory=list, repr=False)
    resources: ResourceList = field(factory=list, repr=False)

    def add_section(
        self, title: str, body_html: str, css_path: str | None = ""
    ) -> None:
        """Create a section and append it to the reading order.

        Args:
            title: Title of the new section.
            body_html: Markup placed inside the ``<body>`` element.
            css_path: Relative path to a style sheet for the section.
        """

        self.sections.append(Section(title, body_html, css_path))
        logger.debug("Added section %d: %s", len(self.sections), title)

    def add_resource(
        self,
        path: str,
        resource_type: ResourceType,
        source: ByteSource | None,
        is_cover: bool = False,
    ) -> None:
        """Create a resource from ``source`` and append it.

        Args:
            path: Output path of the file inside the package.
            resource_type: Kind of file.
            source: Readable binary stream, drained and closed here, or raw
                bytes.
            is_cover: Mark an image resource as the cover.
        """

        resource = Resource(path, resource_type, source, is_cover)
        self.resources.append(resource)
        logger.debug(
            "Added resource %d: %s (%d bytes)",
            len(self.resources),
            resource.output_path,
            len(resource.data),
        )

    def export(self, sink: BinaryIO | None) -> None:
        """Write the document as an EPUB archive to ``sink``.

        Args:
            sink: Writable binary file object; it is left open.
        """

        # Deferred: ``epubpack.export`` imports this package.
        from ..export import export_epub

        export_epub(self, sink)
