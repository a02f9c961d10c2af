#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/cli.py
"""Command-line interface for myst-jats.

Write a single article body::

    $ myst-jats paper.json

Write a complete article with front matter and indentation::

    $ myst-jats paper.json --frontmatter myst.yml --full-article --spaces 2 -o paper.xml

Bundle several documents as sub-articles; ``--frontmatter`` is then the
project frontmatter::

    $ myst-jats intro.json methods.json --frontmatter project.yml --full-article

Each input is either an mdast JSON root (``{"type": "root", ...}``) or an
object ``{"mdast": {...}, "frontmatter": {...}, "citations": {...}}``.

"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from myst_jats import __version__
from myst_jats.api import JatsResult, write_multi_article_jats, write_single_article_jats
from myst_jats.citations import Citations
from myst_jats.constants import EXIT_DIAGNOSTIC_ERROR, EXIT_INPUT_ERROR, EXIT_SUCCESS
from myst_jats.diagnostics import Diagnostic
from myst_jats.exceptions import MystJatsError
from myst_jats.frontmatter import Frontmatter
from myst_jats.jats.document import ArticleContent
from myst_jats.logging_utils import configure_logging
from myst_jats.options import JatsOptions
from myst_jats.utils.io_utils import read_json_file, read_yaml_file, write_content

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'") from e
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    help_text = JatsOptions.field_help()
    parser = argparse.ArgumentParser(
        prog="myst-jats",
        description="Write JATS 1.3 XML from MyST document trees (mdast JSON).",
    )
    parser.add_argument("input", nargs="+", help="mdast JSON file(s); more than one writes a multi-article bundle")
    parser.add_argument("-o", "--out", help="Output file (default: standard output)")
    parser.add_argument("--frontmatter", help="YAML or JSON frontmatter file (project frontmatter for bundles)")
    parser.add_argument("--citations", help="JSON file with resolved citations ({order, data})")
    parser.add_argument("--full-article", action="store_true", help=help_text["full_article"])
    parser.add_argument("--spaces", type=_non_negative_int, default=None, help=help_text["spaces"])
    parser.add_argument("--doctype", action="store_true", help=help_text["doctype"])
    parser.add_argument("--article-type", help=help_text["article_type"])
    parser.add_argument("--specific-use", help=help_text["specific_use"])
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any error diagnostic was reported",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log records to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _load_input(path: str, citations: Optional[Citations]) -> ArticleContent:
    data = read_json_file(path)
    if isinstance(data, dict) and "mdast" in data:
        frontmatter = Frontmatter.from_dict(data.get("frontmatter"))
        if data.get("citations"):
            citations = Citations.from_dict(data["citations"])
        return ArticleContent(tree=data["mdast"], frontmatter=frontmatter, citations=citations)
    return ArticleContent(tree=data, citations=citations)


def _print_diagnostics(messages: Sequence[Diagnostic]) -> None:
    """Print diagnostics as a table on standard error."""
    from rich.console import Console
    from rich.table import Table

    console = Console(stderr=True)
    table = Table(title="JATS Diagnostics")
    table.add_column("Severity")
    table.add_column("Source", style="cyan")
    table.add_column("Line", justify="right")
    table.add_column("Message", no_wrap=False)

    for message in messages:
        severity = "[red]error[/red]" if message.severity == "error" else "[yellow]warning[/yellow]"
        line = str(message.line) if message.line is not None else ""
        text = f"{message.message}\n[dim]{message.url}[/dim]" if message.url else message.message
        table.add_row(severity, message.source, line, text)

    console.print(table)


def run(parsed_args: argparse.Namespace) -> JatsResult:
    """Load the inputs named on the command line and write JATS.

    Raises
    ------
    MystJatsError
        If an input cannot be read or loaded

    """
    frontmatter_data: Any = read_yaml_file(parsed_args.frontmatter) if parsed_args.frontmatter else None
    citations = Citations.from_dict(read_json_file(parsed_args.citations)) if parsed_args.citations else None
    contents = [_load_input(path, citations) for path in parsed_args.input]

    options = JatsOptions(
        full_article=parsed_args.full_article,
        spaces=parsed_args.spaces,
        doctype=parsed_args.doctype,
        article_type=parsed_args.article_type,
        specific_use=parsed_args.specific_use,
    )

    if len(contents) == 1:
        content = contents[0]
        frontmatter = Frontmatter.from_dict(frontmatter_data) if frontmatter_data else content.frontmatter
        options = options.create_updated(frontmatter=frontmatter, citations=content.citations)
        return write_single_article_jats(content.tree, options)

    options = options.create_updated(frontmatter=Frontmatter.from_dict(frontmatter_data))
    return write_multi_article_jats(contents, options)


def main(args: list[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace, mute_diagnostics=True)

    try:
        result = run(parsed_args)
        if parsed_args.out:
            write_content(result.value + "\n", Path(parsed_args.out))
        else:
            write_content(result.value + "\n", sys.stdout)
    except MystJatsError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    if result.messages:
        _print_diagnostics(result.messages)

    if parsed_args.strict and result.errors:
        return EXIT_DIAGNOSTIC_ERROR
    return EXIT_SUCCESS


__all__ = ["create_parser", "main", "run"]
