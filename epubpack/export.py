"""Serialize an EPUB document into a ZIP container.

The archive layout is fixed:

- ``mimetype`` (stored, always first)
- ``META-INF/container.xml``
- ``OEBPS/content.opf``
- ``OEBPS/toc.ncx``
- ``OEBPS/nav.xhtml``
- ``OEBPS/section<N>.html`` for every section
- ``OEBPS/<output path>`` for every resource

Sections and resources are identified by position (``section1``,
``resource1``, ...), never by caller supplied names.
"""

from __future__ import annotations

import html
import locale
import logging
import uuid
import zipfile
from datetime import datetime, timezone
from typing import TYPE_CHECKING, BinaryIO

from .errors import InvalidArgumentError
from .model.utils import is_blank

if TYPE_CHECKING:
    from .model.epub import Epub
    from .model.resource import Resource
    from .model.section import Section

logger = logging.getLogger(__name__)

MIMETYPE = "application/epub+zip"
MIMETYPE_PATH = "mimetype"
CONTAINER_PATH = "META-INF/container.xml"
PACKAGE_DIR = "OEBPS"
PACKAGE_FILE = "content.opf"
NCX_FILE = "toc.ncx"
NAV_FILE = "nav.xhtml"

XHTML_MEDIA_TYPE = "application/xhtml+xml"
NCX_MEDIA_TYPE = "application/x-dtbncx+xml"
MODIFIED_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
FALLBACK_LANGUAGE = "en"

CONTAINER_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{PACKAGE_DIR}/{PACKAGE_FILE}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

CONTENT_OPF_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<package xmlns="http://www.idpf.org/2007/opf" unique-identifier="bookid" version="3.0">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>{title}</dc:title>
    <dc:creator>{author}</dc:creator>
    <dc:identifier id="bookid">{uid}</dc:identifier>
    <dc:language>{language}</dc:language>
    <meta property="dcterms:modified">{modified}</meta>
{cover_meta}  </metadata>
  <manifest>
{items}  </manifest>
  <spine toc="ncx">
{itemrefs}  </spine>
</package>
"""

TOC_NCX_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <head>
    <meta name="dtb:uid" content="{uid}"/>
    <meta name="dtb:depth" content="1"/>
    <meta name="dtb:totalPageCount" content="0"/>
    <meta name="dtb:maxPageNumber" content="0"/>
  </head>
  <docTitle>
    <text>{title}</text>
  </docTitle>
  <navMap>
{nav_points}  </navMap>
</ncx>
"""

NAV_POINT_TEMPLATE = """    <navPoint id="{section_id}" playOrder="{order}">
      <navLabel>
        <text>{title}</text>
      </navLabel>
      <content src="{href}"/>
    </navPoint>
"""

NAV_XHTML_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops">
<head>
<title>{toc_title}</title>
</head>
<body>
<nav epub:type="toc" id="toc">
<h1>{toc_title}</h1>
<ol>
{entries}</ol>
</nav>
</body>
</html>
"""

SECTION_HTML_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml">
<head>
<title>{title}</title>
{css_link}</head>
<body>
{body}
</body>
</html>
"""


def _escape(value: str) -> str:
    """Escape text for use in XML content or attribute values."""
    return html.escape(value, quote=True)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def section_id(index: int) -> str:
    """Return the manifest id of the section at zero-based ``index``."""
    return f"section{index + 1}"


def section_href(index: int) -> str:
    """Return the file name of the section at zero-based ``index``."""
    return f"{section_id(index)}.html"


def resource_id(index: int) -> str:
    """Return the manifest id of the resource at zero-based ``index``."""
    return f"resource{index + 1}"


def resolve_language(document: Epub) -> str:
    """Return the document language or the language of the current locale.

    Args:
        document: Document being exported.

    Returns:
        Language tag such as ``"en-US"``.
    """

    if not is_blank(document.language):
        return document.language

    # Fall back to the runtime locale, e.g. ``en_US`` becomes ``en-US``.
    try:
        lang, _encoding = locale.getlocale()
    except ValueError:
        lang = None
    if not lang or lang in ("C", "POSIX"):
        logger.debug("No locale language; using %s", FALLBACK_LANGUAGE)
        return FALLBACK_LANGUAGE
    return lang.replace("_", "-")


def resolve_uid(document: Epub) -> str:
    """Return the document identifier, generating one when it is unset."""

    if not is_blank(document.uid):
        return document.uid

    generated = str(uuid.uuid4())
    logger.debug("Generated identifier %s", generated)
    return generated


def build_content_opf(
    document: Epub, uid: str, language: str, modified: str
) -> str:
    """Render the package document.

    Args:
        document: Document being exported.
        uid: Resolved unique identifier.
        language: Resolved language tag.
        modified: Modification timestamp in ``MODIFIED_FORMAT``.

    Returns:
        Content of ``content.opf``.
    """

    items: list[str] = []
    itemrefs: list[str] = []

    # Sections come first in the manifest and define the spine order.
    for index, _section in enumerate(document.sections):
        items.append(
            f'    <item id="{section_id(index)}" href="{section_href(index)}"'
            f' media-type="{XHTML_MEDIA_TYPE}"/>\n'
        )
        itemrefs.append(f'    <itemref idref="{section_id(index)}"/>\n')

    cover_meta = ""
    for index, resource in enumerate(document.resources):
        items.append(_manifest_resource_item(index, resource))
        if resource.is_cover and not cover_meta:
            cover_meta = (
                f'    <meta name="cover" content="{resource_id(index)}"/>\n'
            )

    # Navigation documents close the manifest.
    items.append(
        f'    <item id="ncx" href="{NCX_FILE}"'
        f' media-type="{NCX_MEDIA_TYPE}"/>\n'
    )
    items.append(
        f'    <item id="nav" href="{NAV_FILE}"'
        f' media-type="{XHTML_MEDIA_TYPE}" properties="nav"/>\n'
    )

    return CONTENT_OPF_TEMPLATE.format(
        title=_escape(document.title),
        author=_escape(document.author),
        uid=_escape(uid),
        language=_escape(language),
        modified=modified,
        cover_meta=cover_meta,
        items="".join(items),
        itemrefs="".join(itemrefs),
    )


def _manifest_resource_item(index: int, resource: Resource) -> str:
    properties = ' properties="cover-image"' if resource.is_cover else ""
    return (
        f'    <item id="{resource_id(index)}"'
        f' href="{_escape(resource.output_path)}"'
        f' media-type="{resource.media_type}"{properties}/>\n'
    )


def build_toc_ncx(document: Epub, uid: str) -> str:
    """Render the legacy NCX navigation document.

    Args:
        document: Document being exported.
        uid: Resolved unique identifier, repeated in ``dtb:uid``.

    Returns:
        Content of ``toc.ncx``.
    """

    nav_points = "".join(
        NAV_POINT_TEMPLATE.format(
            section_id=section_id(index),
            order=index + 1,
            title=_escape(section.title),
            href=section_href(index),
        )
        for index, section in enumerate(document.sections)
    )
    return TOC_NCX_TEMPLATE.format(
        uid=_escape(uid),
        title=_escape(document.title),
        nav_points=nav_points,
    )


def build_nav_xhtml(document: Epub) -> str:
    """Render the navigation document with one list entry per section."""

    entries = "".join(
        f'<li><a href="{section_href(index)}">'
        f"{_escape(section.title)}</a></li>\n"
        for index, section in enumerate(document.sections)
    )
    return NAV_XHTML_TEMPLATE.format(
        toc_title=_escape(document.toc_title or ""),
        entries=entries,
    )


def build_section_html(section: Section) -> str:
    """Render one section as an XHTML document.

    The body markup is inserted verbatim.
    """

    css_link = ""
    if section.has_css:
        css_link = (
            '<link type="text/css" rel="stylesheet"'
            f' href="{_escape(section.css_path)}"/>\n'
        )
    return SECTION_HTML_TEMPLATE.format(
        title=_escape(section.title),
        css_link=css_link,
        body=section.body_html,
    )


def _write_entry(
    archive: zipfile.ZipFile,
    name: str,
    data: str | bytes,
    date_time: tuple[int, int, int, int, int, int],
    compress_type: int = zipfile.ZIP_DEFLATED,
) -> None:
    """Write one member to ``archive`` with a fixed date and compression."""

    info = zipfile.ZipInfo(name, date_time=date_time)
    info.compress_type = compress_type
    info.external_attr = 0o644 << 16
    archive.writestr(info, data)
    logger.debug("Wrote %s", name)


def export_epub(document: Epub, sink: BinaryIO | None) -> None:
    """Write ``document`` as an EPUB archive to ``sink``.

    The sink is left open. If writing fails part way, the sink holds an
    incomplete archive.

    Args:
        document: Document to export.
        sink: Writable binary file object.

    Raises:
        InvalidArgumentError: If ``sink`` is ``None``.
    """

    if sink is None:
        raise InvalidArgumentError("Export sink must not be None")

    language = resolve_language(document)
    uid = resolve_uid(document)
    now = _utc_now()
    modified = now.strftime(MODIFIED_FORMAT)
    date_time = now.timetuple()[:6]

    with zipfile.ZipFile(sink, "w") as archive:
        # The mimetype must be the first member and stored uncompressed so
        # readers can identify the file from its leading bytes.
        _write_entry(
            archive, MIMETYPE_PATH, MIMETYPE, date_time, zipfile.ZIP_STORED
        )
        _write_entry(archive, CONTAINER_PATH, CONTAINER_XML, date_time)
        _write_entry(
            archive,
            f"{PACKAGE_DIR}/{PACKAGE_FILE}",
            build_content_opf(document, uid, language, modified),
            date_time,
        )
        _write_entry(
            archive,
            f"{PACKAGE_DIR}/{NCX_FILE}",
            build_toc_ncx(document, uid),
            date_time,
        )
        _write_entry(
            archive,
            f"{PACKAGE_DIR}/{NAV_FILE}",
            build_nav_xhtml(document),
            date_time,
        )

        for index, section in enumerate(document.sections):
            _write_entry(
                archive,
                f"{PACKAGE_DIR}/{section_href(index)}",
                build_section_html(section),
                date_time,
            )

        for resource in document.resources:
            _write_entry(
                archive,
                f"{PACKAGE_DIR}/{resource.output_path}",
                resource.data,
                date_time,
            )

    logger.debug(
        "Exported %r with %d sections and %d resources",
        document.title,
        len(document.sections),
        len(document.resources),
    )
