#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/citations.py
"""Resolved citation data consumed by the JATS back matter.

Citation keys are resolved upstream; this module only holds the result in a
shape the reference-list builder can walk in order::

    {
        "order": ["smith2020", "doe2021"],
        "data": {
            "smith2020": {"cite": {...CSL-JSON...}, "doi": "10.1000/xyz"},
            "doe2021": {"text": "Doe, J. (2021). A title. Journal."},
        },
    }

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from myst_jats.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass
class CitationData:
    """One resolved bibliography entry.

    Parameters
    ----------
    label : str
        Citation key, matching the ``label`` of ``cite`` nodes
    csl : dict or None, default = None
        CSL-JSON item, when structured data is available
    text : str or None, default = None
        Pre-formatted reference text, used when there is no CSL-JSON
    doi : str or None, default = None
    url : str or None, default = None

    """

    label: str
    csl: Optional[dict[str, Any]] = None
    text: Optional[str] = None
    doi: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, label: str, data: Mapping[str, Any]) -> CitationData:
        if not isinstance(data, Mapping):
            raise ValidationError(f"Citation data for '{label}' must be a mapping", "citations", data)
        csl = data.get("cite", data.get("csl"))
        if csl is not None and not isinstance(csl, Mapping):
            raise ValidationError(f"CSL-JSON for '{label}' must be a mapping", "citations", csl)
        csl_dict = dict(csl) if csl else None
        return cls(
            label=label,
            csl=csl_dict,
            text=data.get("text", data.get("html")),
            doi=data.get("doi") or (csl_dict or {}).get("DOI"),
            url=data.get("url") or (csl_dict or {}).get("URL"),
        )


@dataclass
class Citations:
    """Citation keys in reference-list order, with their resolved data."""

    order: list[str] = field(default_factory=list)
    data: dict[str, CitationData] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, value: Optional[Mapping[str, Any]]) -> Citations:
        """Build citations from ``{"order": [...], "data": {...}}``.

        When ``order`` is missing, the keys of ``data`` are used in their
        given order.

        """
        if not value:
            return cls()
        if not isinstance(value, Mapping):
            raise ValidationError("Citations must be a mapping", "citations", value)
        raw_data = value.get("data") or {}
        if not isinstance(raw_data, Mapping):
            raise ValidationError("Citation 'data' must be a mapping", "citations", raw_data)
        data = {str(label): CitationData.from_dict(str(label), entry) for label, entry in raw_data.items()}
        order = [str(label) for label in value.get("order") or data.keys()]
        logger.debug("Loaded %d citations", len(data))
        return cls(order=order, data=data)

    def ordered(self) -> list[tuple[str, Optional[CitationData]]]:
        """Return ``(label, data)`` pairs in reference order; data may be missing."""
        return [(label, self.data.get(label)) for label in self.order]

    def __len__(self) -> int:
        return len(self.order)


__all__ = ["CitationData", "Citations"]
