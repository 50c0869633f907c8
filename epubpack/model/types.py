"""Common type aliases for model structures."""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO, Union

if TYPE_CHECKING:
    from .resource import Resource  # noqa: F401
    from .section import Section  # noqa: F401


SectionList = list["Section"]
ResourceList = list["Resource"]
ByteSource = Union[BinaryIO, bytes, bytearray, memoryview]
