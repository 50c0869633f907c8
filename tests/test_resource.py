"""Tests for embedded resources."""

from __future__ import annotations

import io

import attrs
import pytest

from epubpack import InvalidArgumentError, Resource, ResourceType

CSS_BYTES = b"body { font-family: serif; }\n"
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


def test_resource_reads_stream() -> None:
    """The whole stream is copied into the resource."""

    stream = io.BytesIO(CSS_BYTES)
    resource = Resource("styles/book.css", ResourceType.CSS, stream)

    assert resource.output_path == "styles/book.css"
    assert resource.resource_type is ResourceType.CSS
    assert resource.media_type == "text/css"
    assert resource.data == CSS_BYTES


def test_resource_closes_stream() -> None:
    """The source stream is closed once it has been read."""

    stream = io.BytesIO(PNG_BYTES)
    Resource("cover.png", ResourceType.PNG, stream)

    assert stream.closed


def test_resource_closes_stream_when_read_fails() -> None:
    """A failing read still releases the stream."""

    class BrokenStream(io.BytesIO):
        def read(self, *args: object) -> bytes:
            raise OSError("disk error")

    stream = BrokenStream(b"data")
    with pytest.raises(OSError):
        Resource("cover.png", ResourceType.PNG, stream)

    assert stream.closed


def test_resource_accepts_bytes() -> None:
    """Bytes-like sources are copied as-is."""

    resource = Resource("font.ttf", ResourceType.TTF, bytearray(b"\x00\x01"))
    assert resource.data == b"\x00\x01"
    assert isinstance(resource.data, bytes)


@pytest.mark.parametrize("path", [None, "", " ", "\t\n"])
def test_resource_rejects_blank_path(path: str | None) -> None:
    """Blank output paths are rejected."""

    with pytest.raises(InvalidArgumentError):
        Resource(path, ResourceType.CSS, io.BytesIO(CSS_BYTES))


def test_resource_rejects_non_text_path() -> None:
    with pytest.raises(InvalidArgumentError, match="must be a string"):
        Resource(42, ResourceType.CSS, CSS_BYTES)  # type: ignore[arg-type]


def test_resource_rejects_missing_source() -> None:
    """A ``None`` source is rejected."""

    with pytest.raises(InvalidArgumentError):
        Resource("book.css", ResourceType.CSS, None)


@pytest.mark.parametrize(
    ("resource_type", "media_type"),
    [
        (ResourceType.CSS, "text/css"),
        (ResourceType.JPEG, "image/jpeg"),
        (ResourceType.GIF, "image/gif"),
        (ResourceType.PNG, "image/png"),
        (ResourceType.SVG, "image/svg+xml"),
        (ResourceType.TTF, "font/ttf"),
        (ResourceType.OTF, "font/otf"),
    ],
)
def test_media_type_follows_type(
    resource_type: ResourceType, media_type: str
) -> None:
    """Every resource type maps to its manifest media type."""

    resource = Resource("file", resource_type, b"x")
    assert resource.media_type == media_type


@pytest.mark.parametrize(
    ("resource_type", "expected"),
    [
        (ResourceType.CSS, False),
        (ResourceType.JPEG, True),
        (ResourceType.GIF, True),
        (ResourceType.PNG, True),
        (ResourceType.SVG, True),
        (ResourceType.TTF, False),
        (ResourceType.OTF, False),
    ],
)
def test_only_images_can_be_covers(
    resource_type: ResourceType, expected: bool
) -> None:
    """Style sheets and fonts never report as cover."""

    flagged = Resource("file", resource_type, b"x", is_cover=True)
    unflagged = Resource("file", resource_type, b"x")

    assert flagged.is_cover is expected
    assert unflagged.is_cover is False


def test_resource_is_immutable() -> None:
    """Resources cannot be changed after creation."""

    resource = Resource("book.css", ResourceType.CSS, CSS_BYTES)
    with pytest.raises(attrs.exceptions.FrozenInstanceError):
        resource.output_path = "other.css"  # type: ignore[misc]


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("css", ResourceType.CSS),
        ("PNG", ResourceType.PNG),
        (" jpg ", ResourceType.JPEG),
        ("jpeg", ResourceType.JPEG),
        ("otf", ResourceType.OTF),
    ],
)
def test_resource_type_from_name(name: str, expected: ResourceType) -> None:
    """Type names are matched case-insensitively."""

    assert ResourceType.from_name(name) is expected


def test_resource_type_from_unknown_name() -> None:
    """Unknown type names are rejected."""

    with pytest.raises(InvalidArgumentError):
        ResourceType.from_name("bmp")
