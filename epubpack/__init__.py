"""Assemble EPUB ebooks from sections and resources."""

from .errors import InvalidArgumentError
from .export import export_epub
from .model import Epub, Resource, ResourceType, Section

__all__ = [
    "Epub",
    "InvalidArgumentError",
    "Resource",
    "ResourceType",
    "Section",
    "export_epub",
]
