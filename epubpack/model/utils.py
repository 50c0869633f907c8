"""Validation and input helpers shared by the model classes."""

from __future__ import annotations

from contextlib import closing
from typing import Any

from ..errors import InvalidArgumentError
from .types import ByteSource


def is_blank(value: object) -> bool:
    """Return ``True`` for non-strings and empty or whitespace-only strings."""

    return not isinstance(value, str) or not value.strip()


def require_text(instance: Any, attribute: Any, value: str | None) -> None:
    """Reject blank strings.

    Used as an ``attrs`` validator so the check runs both in ``__init__`` and
    on every later assignment of the attribute.

    Args:
        instance: Object being initialized or updated.
        attribute: ``attrs`` attribute description.
        value: Candidate value.

    Raises:
        InvalidArgumentError: If ``value`` is not a string or is blank.
    """

    if value is not None and not isinstance(value, str):
        raise InvalidArgumentError(
            f"{type(instance).__name__}.{attribute.name} must be a string,"
            f" not {type(value).__name__}"
        )
    if is_blank(value):
        raise InvalidArgumentError(
            f"{type(instance).__name__}.{attribute.name} must not be empty"
        )


def strip_or_empty(value: str | None) -> str:
    """Trim ``value``, mapping ``None`` to an empty string."""

    return value.strip() if value is not None else ""


def read_source(source: ByteSource | None) -> bytes:
    """Read all bytes from ``source``.

    Streams are drained and closed, even when reading fails. Bytes-like
    objects are copied.

    Args:
        source: Readable binary stream or bytes-like object.

    Returns:
        The full content of ``source``.

    Raises:
        InvalidArgumentError: If ``source`` is ``None``.
    """

    if source is None:
        raise InvalidArgumentError("Resource source must not be None")

    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)

    with closing(source):
        return bytes(source.read())
