"""Binary or text file embedded in the EPUB."""

from __future__ import annotations

from enum import Enum

from attrs import define, field

from ..errors import InvalidArgumentError
from .utils import read_source, require_text


class ResourceType(Enum):
    """Kinds of files that can be embedded in an EPUB."""

    CSS = "css"
    JPEG = "jpeg"
    GIF = "gif"
    PNG = "png"
    SVG = "svg"
    TTF = "ttf"
    OTF = "otf"

    @classmethod
    def from_name(cls, name: str) -> ResourceType:
        """Return the member matching ``name`` case-insensitively.

        Args:
            name: Type name such as ``"png"``; ``"jpg"`` is accepted as an
                alias for JPEG.

        Returns:
            The matching resource type.

        Raises:
            InvalidArgumentError: If ``name`` does not name a known type.
        """

        key = str(name).strip().lower()
        if key == "jpg":
            key = "jpeg"
        try:
            return cls(key)
        except ValueError as exc:
            raise InvalidArgumentError(
                f"Unknown resource type: {name!r}"
            ) from exc


MEDIA_TYPES: dict[ResourceType, str] = {
    ResourceType.CSS: "text/css",
    ResourceType.JPEG: "image/jpeg",
    ResourceType.GIF: "image/gif",
    ResourceType.PNG: "image/png",
    ResourceType.SVG: "image/svg+xml",
    ResourceType.TTF: "font/ttf",
    ResourceType.OTF: "font/otf",
}

IMAGE_TYPES = frozenset(
    {ResourceType.JPEG, ResourceType.GIF, ResourceType.PNG, ResourceType.SVG}
)


@define(slots=True, frozen=True)
class Resource:
    """Binary or text file embedded in the EPUB.

    The source is read completely when the resource is created, so the
    caller's stream can be discarded afterwards.

    Attributes:
        output_path: Path of the file inside the package, relative to the
            package document.
        resource_type: Kind of file, which selects the manifest media type.
        data: Raw content of the file.
    """

    output_path: str = field(validator=require_text)
    resource_type: ResourceType
    data: bytes = field(converter=read_source, alias="source", repr=False)
    _is_cover: bool = field(default=False, converter=bool, alias="is_cover")

    @property
    def media_type(self) -> str:
        """MIME type written to the manifest."""
        return MEDIA_TYPES[self.resource_type]

    @property
    def is_image(self) -> bool:
        return self.resource_type in IMAGE_TYPES

    @property
    def is_cover(self) -> bool:
        """Whether this resource is the cover image.

        Only image resources can be covers; the stored flag is ignored for
        style sheets and fonts.
        """
        return self._is_cover and self.is_image
