#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/options/base.py
"""Base classes for writer options.

Options are frozen dataclasses. Every field carries ``help`` metadata, which
the command line reuses for its argument help text.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from myst_jats.constants import DEFAULT_SPACES


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseWriterOptions(CloneFrozenMixin):
    """Options shared by every XML writer.

    Parameters
    ----------
    spaces : int or None, default = None
        Indentation width of the written XML. ``None`` writes everything on
        a single line

    """

    spaces: int | None = field(
        default=DEFAULT_SPACES,
        metadata={"help": "Indentation width of the XML output (omit for compact output)", "type": int},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If ``spaces`` is negative.

        """
        if self.spaces is not None and self.spaces < 0:
            raise ValueError(f"spaces must be non-negative, got {self.spaces}")

    @classmethod
    def field_help(cls) -> dict[str, str]:
        """Return the ``help`` metadata of every field, keyed by field name."""
        return {f.name: f.metadata["help"] for f in fields(cls) if "help" in f.metadata}
