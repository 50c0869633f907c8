"""Build an ``Epub`` from a YAML or JSON book description."""

from __future__ import annotations

try:
    import orjson  # type: ignore[import-not-found]
except ImportError:  # pragma: no cover - optional dependency
    orjson = None  # type: ignore[assignment]

import json
import logging
from pathlib import Path
from typing import Any, Dict

import yaml  # type: ignore[import-untyped]

from .errors import InvalidArgumentError
from .model import Epub, ResourceType

logger = logging.getLogger(__name__)

JSONDict = Dict[str, Any]


def _json_loads(data: str) -> object:
    """Deserialize JSON text, preferring ``orjson`` when installed."""

    if orjson is not None:
        return orjson.loads(data)
    return json.loads(data)


def read_book_file(path: Path) -> JSONDict:
    """Read a book description from ``path``.

    Args:
        path: Location of the ``.json``, ``.yaml`` or ``.yml`` file.

    Returns:
        Parsed description mapping.

    Raises:
        InvalidArgumentError: If the file cannot be parsed or does not hold
            a mapping.
    """

    text = path.read_text(encoding="utf-8")

    # Decode JSON or YAML depending on file extension.
    try:
        if path.suffix == ".json":
            data = _json_loads(text)
        else:
            data = yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise InvalidArgumentError(f"{path}: cannot parse: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidArgumentError(
            f"{path}: book description must be a mapping"
        )
    return data


def load_book(path: Path) -> Epub:
    """Create an ``Epub`` from the book description at ``path``.

    Relative ``body_file`` and ``file`` entries are resolved against the
    directory holding the description. Scalars such as ``title: 1984`` are
    read as text.

    Args:
        path: Location of the book description.

    Returns:
        Populated document, ready to export.

    Raises:
        InvalidArgumentError: If the description is malformed or a file it
            references cannot be read.
    """

    data = read_book_file(path)
    base_dir = path.parent

    book = Epub(_text(data.get("title")), _text(data.get("author")))
    book.language = _text(data.get("language"))
    book.uid = _text(data.get("uid"))
    if data.get("toc_title"):
        book.toc_title = _text(data["toc_title"])

    for number, entry in enumerate(data.get("sections") or [], start=1):
        entry = _entry(entry, "Section", number)
        book.add_section(
            _text(entry.get("title")),
            _section_body(entry, base_dir, number),
            _text(entry.get("css")),
        )

    for number, entry in enumerate(data.get("resources") or [], start=1):
        entry = _entry(entry, "Resource", number)
        source_file = entry.get("file")
        if not source_file:
            raise InvalidArgumentError(f"Resource {number} has no file")

        resource_type = ResourceType.from_name(_text(entry.get("type")) or "")
        source = _read_bytes(base_dir / str(source_file), "Resource", number)
        book.add_resource(
            _text(entry.get("path")),
            resource_type,
            source,
            bool(entry.get("cover", False)),
        )

    logger.debug(
        "Loaded %s: %d sections, %d resources",
        path,
        len(book.sections),
        len(book.resources),
    )
    return book


def _text(value: Any) -> str | None:
    """Return scalar ``value`` as a string, keeping ``None``."""

    return None if value is None else str(value)


def _entry(entry: Any, kind: str, number: int) -> JSONDict:
    """Return ``entry`` if it is a mapping."""

    if not isinstance(entry, dict):
        raise InvalidArgumentError(
            f"{kind} {number} must be a mapping, got {entry!r}"
        )
    return entry


def _read_bytes(path: Path, kind: str, number: int) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise InvalidArgumentError(
            f"{kind} {number}: cannot read {path}: {exc.strerror or exc}"
        ) from exc


def _section_body(entry: JSONDict, base_dir: Path, number: int) -> str:
    """Return inline ``body`` markup or the content of ``body_file``."""

    if entry.get("body"):
        return str(entry["body"])
    if entry.get("body_file"):
        body_path = base_dir / str(entry["body_file"])
        try:
            return _read_bytes(body_path, "Section", number).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidArgumentError(
                f"Section {number}: {body_path} is not UTF-8 text"
            ) from exc
    raise InvalidArgumentError(f"Section {number} has no body")
