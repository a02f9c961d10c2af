#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/options/__init__.py
"""Writer configuration options."""

from myst_jats.options.base import BaseWriterOptions, CloneFrozenMixin
from myst_jats.options.jats import JatsOptions

__all__ = ["BaseWriterOptions", "CloneFrozenMixin", "JatsOptions"]
