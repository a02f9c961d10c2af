#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/diagnostics.py
"""Non-fatal diagnostics reported while writing JATS.

The writer never aborts on problematic document content. Instead every
warning or error is attached to the offending node and collected here, and
the caller decides whether the accumulated messages should fail a build.

Each reported message is also emitted through :mod:`logging` on the
``myst_jats.diagnostics`` logger, at ``WARNING`` or ``ERROR`` level.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from myst_jats.ast.nodes import Node
from myst_jats.constants import DIAGNOSTIC_SOURCE

logger = logging.getLogger(__name__)

Severity = Literal["warning", "error"]


@dataclass(frozen=True)
class Diagnostic:
    """A single message attached to a document node.

    Parameters
    ----------
    severity : {'warning', 'error'}
        Warnings mean degraded but valid output; errors mean the construct
        could not be represented faithfully
    message : str
        Human-readable description
    source : str
        Reporting component, e.g. ``"myst_jats:image"``
    node_type : str or None, default = None
        Type tag of the node the message is attached to
    position : dict or None, default = None
        Source position of the node, when the tree carried one
    url : str or None, default = None
        Documentation link explaining the restriction

    """

    severity: Severity
    message: str
    source: str = DIAGNOSTIC_SOURCE
    node_type: Optional[str] = None
    position: Optional[dict[str, Any]] = None
    url: Optional[str] = None

    @property
    def line(self) -> Optional[int]:
        """Start line of the node, if known."""
        start = (self.position or {}).get("start") or {}
        line = start.get("line")
        return line if isinstance(line, int) else None

    def __str__(self) -> str:
        where = f" (line {self.line})" if self.line is not None else ""
        return f"[{self.source}] {self.message}{where}"


@dataclass
class DiagnosticCollector:
    """Accumulates diagnostics for one conversion run.

    A single collector may be shared by the documents of a multi-article
    bundle; messages keep the order in which they were reported.

    """

    messages: list[Diagnostic] = field(default_factory=list)

    def warn(
        self,
        message: str,
        node: Optional[Node] = None,
        source: Optional[str] = None,
        url: Optional[str] = None,
    ) -> Diagnostic:
        """Record a warning."""
        return self._report("warning", message, node, source, url)

    def error(
        self,
        message: str,
        node: Optional[Node] = None,
        source: Optional[str] = None,
        url: Optional[str] = None,
    ) -> Diagnostic:
        """Record an error. Processing continues."""
        return self._report("error", message, node, source, url)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [m for m in self.messages if m.severity == "warning"]

    @property
    def errors(self) -> list[Diagnostic]:
        return [m for m in self.messages if m.severity == "error"]

    @property
    def has_errors(self) -> bool:
        return any(m.severity == "error" for m in self.messages)

    def _report(
        self,
        severity: Severity,
        message: str,
        node: Optional[Node],
        source: Optional[str],
        url: Optional[str],
    ) -> Diagnostic:
        position = node.data.get("position") if node is not None else None
        diagnostic = Diagnostic(
            severity=severity,
            message=message,
            source=f"{DIAGNOSTIC_SOURCE}:{source}" if source else DIAGNOSTIC_SOURCE,
            node_type=node.type if node is not None else None,
            position=position if isinstance(position, dict) else None,
            url=url,
        )
        self.messages.append(diagnostic)
        logger.log(logging.ERROR if severity == "error" else logging.WARNING, "%s", diagnostic)
        return diagnostic


__all__ = ["Severity", "Diagnostic", "DiagnosticCollector"]
