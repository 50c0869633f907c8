"""In-memory model of an EPUB document."""

from .epub import Epub
from .resource import Resource, ResourceType
from .section import Section

__all__ = ["Epub", "Resource", "ResourceType", "Section"]
