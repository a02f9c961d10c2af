#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/options/jats.py
"""Configuration options for JATS writing.

This module defines options for converting document trees to JATS XML.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping, Optional

from myst_jats.citations import Citations
from myst_jats.constants import DEFAULT_DOCTYPE, DEFAULT_FULL_ARTICLE
from myst_jats.frontmatter import Frontmatter
from myst_jats.options.base import BaseWriterOptions

if TYPE_CHECKING:
    from myst_jats.jats.serializer import Handler


@dataclass(frozen=True)
class JatsOptions(BaseWriterOptions):
    """Configuration options for JATS writing.

    Parameters
    ----------
    handlers : Mapping or None, default = None
        Replacement handler table, keyed by node-type tag. ``None`` uses
        :data:`myst_jats.jats.handlers.DEFAULT_HANDLERS`
    frontmatter : Frontmatter or None, default = None
        Page frontmatter for a single article, project frontmatter for a
        multi-article bundle
    citations : Citations or None, default = None
        Resolved citation data for the reference list
    full_article : bool, default = False
        Wrap the output in ``<article>`` with front and back matter instead of
        writing a bare ``<body>``
    spaces : int or None, default = None
        Indentation width of the written XML
    article_type : str or None, default = None
        Value of the ``article-type`` attribute, e.g. ``"research-article"``
    specific_use : str or None, default = None
        Value of the ``specific-use`` attribute
    doctype : bool, default = False
        Prefix full articles with the XML declaration and the JATS 1.3
        DOCTYPE

    """

    handlers: Optional[Mapping[str, Handler]] = field(
        default=None,
        metadata={"help": "Replacement handler table keyed by node type"},
    )
    frontmatter: Optional[Frontmatter] = field(
        default=None,
        metadata={"help": "Page (single article) or project (bundle) frontmatter"},
    )
    citations: Optional[Citations] = field(
        default=None,
        metadata={"help": "Resolved citation data used for the reference list"},
    )
    full_article: bool = field(
        default=DEFAULT_FULL_ARTICLE,
        metadata={"help": "Write a complete <article> with front and back matter"},
    )
    article_type: Optional[str] = field(
        default=None,
        metadata={"help": "article-type attribute of the <article> element"},
    )
    specific_use: Optional[str] = field(
        default=None,
        metadata={"help": "specific-use attribute of the <article> element"},
    )
    doctype: bool = field(
        default=DEFAULT_DOCTYPE,
        metadata={"help": "Prefix full articles with the XML declaration and JATS DOCTYPE"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range or of the wrong shape.

        """
        super().__post_init__()
        if self.handlers is not None:
            for tag, handler in self.handlers.items():
                if not callable(handler):
                    raise ValueError(f"Handler for '{tag}' is not callable")
        if self.frontmatter is not None and not isinstance(self.frontmatter, Frontmatter):
            raise ValueError(f"frontmatter must be a Frontmatter, got {type(self.frontmatter).__name__}")
        if self.citations is not None and not isinstance(self.citations, Citations):
            raise ValueError(f"citations must be a Citations, got {type(self.citations).__name__}")
