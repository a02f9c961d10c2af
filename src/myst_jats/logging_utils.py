"""Logging setup for the myst-jats command line."""

from __future__ import annotations

import logging
import sys
from typing import Optional

DIAGNOSTICS_LOGGER = "myst_jats.diagnostics"


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    mute_diagnostics: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for a conversion run.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Path to a log file that receives a copy of every record.
    trace_mode : bool, default False
        When true, emit timestamps and logger names for debugging traces.
    mute_diagnostics : bool, default False
        Stop document diagnostics from reaching the console handler. The CLI
        sets this when it prints its own diagnostics table, so each warning
        is shown once. The log file still receives them.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    if trace_mode:
        formatter = logging.Formatter(
            "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(formatter)
    if mute_diagnostics:
        console_handler.addFilter(lambda record: not record.name.startswith(DIAGNOSTICS_LOGGER))
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:  # pragma: no cover - handled at runtime
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)

    return root_logger
