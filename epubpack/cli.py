"""Command line entry point for building EPUB files."""

import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from epubpack.book_file import load_book
from epubpack.errors import InvalidArgumentError

# Level below DEBUG used by ``--trace``.
TRACE = 1
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _package_version() -> str:
    try:
        return version("epubpack")
    except PackageNotFoundError:
        return "0.0.1-dev"


def _log_level(debug: bool, trace: bool) -> int:
    """Pick the root log level; ``--trace`` wins over ``--debug``."""

    if trace:
        return TRACE
    return logging.DEBUG if debug else logging.INFO


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Log each archive entry as it is written.",
)
@click.option(
    "--trace/--no-trace",
    default=False,
    help="Log everything, including library internals.",
)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False),
    envvar="EPUBPACK_LOG_FILE",
    help="Append log records to FILE instead of stderr.",
)
@click.version_option(_package_version(), prog_name="epubpack")
def cli(debug: bool, trace: bool, log_file: Optional[str] = None) -> None:
    """Build EPUB ebooks from YAML or JSON book descriptions.

    Settings may also come from a ``.env`` file in the working directory.
    """

    load_dotenv()
    level = _log_level(debug, trace)
    logging.basicConfig(filename=log_file, level=level, format=LOG_FORMAT)
    logging.getLogger(__name__).debug(
        "Logging at level %s", logging.getLevelName(level)
    )


@cli.command()
@click.argument(
    "book_file",
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=True, dir_okay=True),
    default=None,
    help="Write the EPUB to FILE or DIRECTORY instead of next to BOOK_FILE.",
)
def build(book_file: str, output_path: Optional[str] = None) -> None:
    """Build an EPUB from a YAML or JSON book description.

    Args:
        book_file: Path of the book description.
        output_path: Optional file or directory for the archive. If a
            directory is provided, the file name is generated from the book
            file name.
    """

    source = Path(book_file)

    # Default to ``<stem>.epub`` next to the description, or inside the
    # directory given as output.
    final_path = source.with_suffix(".epub")
    if output_path:
        final_path = Path(output_path)
        if final_path.is_dir():
            final_path = final_path / f"{source.stem}.epub"

    try:
        book = load_book(source)
        with final_path.open("wb") as sink:
            book.export(sink)
    except InvalidArgumentError as exc:
        raise click.ClickException(str(exc)) from exc
    except OSError as exc:
        raise click.ClickException(
            f"{exc.filename or final_path}: {exc.strerror or exc}"
        ) from exc

    logging.getLogger(__name__).info("Wrote %s", final_path)
    click.echo(str(final_path))
