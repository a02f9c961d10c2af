#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/__init__.py
"""myst-jats: write JATS 1.3 XML from MyST document trees.

The library takes an already-parsed MyST/mdast document tree and produces
JATS XML, either as a bare ``<body>`` or as a complete ``<article>`` with
front matter, references and footnotes. Several documents can be bundled as
sub-articles of one article.

Examples
--------
    >>> from myst_jats import write_single_article_jats
    >>> tree = {
    ...     "type": "root",
    ...     "children": [{"type": "paragraph", "children": [{"type": "text", "value": "Hello"}]}],
    ... }
    >>> write_single_article_jats(tree).value
    '<body><p>Hello</p></body>'

"""

from myst_jats.api import JatsResult, write_multi_article_jats, write_single_article_jats
from myst_jats.citations import CitationData, Citations
from myst_jats.diagnostics import Diagnostic, DiagnosticCollector
from myst_jats.exceptions import (
    FileError,
    InvalidOptionsError,
    MystJatsError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from myst_jats.frontmatter import Frontmatter
from myst_jats.jats.document import ArticleContent
from myst_jats.jats.handlers import DEFAULT_HANDLERS
from myst_jats.options import JatsOptions

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ArticleContent",
    "CitationData",
    "Citations",
    "DEFAULT_HANDLERS",
    "Diagnostic",
    "DiagnosticCollector",
    "FileError",
    "Frontmatter",
    "InvalidOptionsError",
    "JatsOptions",
    "JatsResult",
    "MystJatsError",
    "OutputWriteError",
    "ParsingError",
    "RenderingError",
    "ValidationError",
    "write_multi_article_jats",
    "write_single_article_jats",
]
