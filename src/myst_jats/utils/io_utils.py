#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/utils/io_utils.py
"""Input/output helpers for reading document trees and writing JATS output."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import IO, Any, Union

import yaml

from myst_jats.exceptions import FileError, OutputWriteError, ParsingError

logger = logging.getLogger(__name__)


def read_json_file(path: Union[str, Path]) -> Any:
    """Load a JSON document from disk.

    Parameters
    ----------
    path : str or Path
        File to read

    Returns
    -------
    Any
        Decoded JSON value

    Raises
    ------
    FileError
        If the file does not exist or cannot be read
    ParsingError
        If the file is not valid JSON

    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FileError(f"Could not read {path}: {e}", file_path=str(path), original_error=e) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParsingError(
            f"Invalid JSON in {path}: {e}", parsing_stage="json", original_error=e
        ) from e


def read_yaml_file(path: Union[str, Path]) -> Any:
    """Load a YAML document from disk with ``yaml.safe_load``.

    JSON files are accepted too, since JSON is a subset of YAML.

    Raises
    ------
    FileError
        If the file does not exist or cannot be read
    ParsingError
        If the file is not valid YAML

    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FileError(f"Could not read {path}: {e}", file_path=str(path), original_error=e) from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ParsingError(f"Invalid YAML in {path}: {e}", parsing_stage="yaml", original_error=e) from e


def write_content(content: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
    """Write XML text to a file path or an open stream.

    Binary streams receive UTF-8 encoded bytes; text streams receive the
    string unchanged.

    Parameters
    ----------
    content : str
        Text to write
    output : str, Path, IO[bytes] or IO[str]
        Destination

    Raises
    ------
    OutputWriteError
        If the destination cannot be written
    TypeError
        If output type is not supported

    Examples
    --------
        >>> from io import StringIO
        >>> buffer = StringIO()
        >>> write_content("<body/>", buffer)
        >>> buffer.getvalue()
        '<body/>'

    """
    if isinstance(output, (str, Path)):
        path = Path(output)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(file_path=str(path), message=f"Could not write {path}: {e}", original_error=e) from e
        logger.debug("Wrote %d characters to %s", len(content), path)
        return

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output).__name__}")

    try:
        output.write(content)  # type: ignore[arg-type]
    except TypeError:
        # binary stream
        output.write(content.encode("utf-8"))  # type: ignore[arg-type]


__all__ = ["read_json_file", "read_yaml_file", "write_content"]
