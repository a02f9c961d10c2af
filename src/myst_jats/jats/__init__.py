#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/jats/__init__.py
"""JATS element tree construction and XML output.

- elements: the output element tree model
- serializer: the stack-based builder driven by the handler table
- handlers: the default handler table
- document: single and multi-article assembly
- frontmatter / backmatter: front and back matter builders
- writer: XML text output
"""

from myst_jats.jats.document import (
    ArticleContent,
    BaseJatsDocument,
    JatsDocument,
    MultiArticleJatsDocument,
    article_attributes,
    frontmatter_stub,
)
from myst_jats.jats.elements import CDataNode, Element, TextNode
from myst_jats.jats.handlers import DEFAULT_HANDLERS, reference_kind_to_ref_type, render_label
from myst_jats.jats.serializer import Handler, JatsSerializer
from myst_jats.jats.writer import to_jats_document, to_xml

__all__ = [
    "ArticleContent",
    "BaseJatsDocument",
    "CDataNode",
    "DEFAULT_HANDLERS",
    "Element",
    "Handler",
    "JatsDocument",
    "JatsSerializer",
    "MultiArticleJatsDocument",
    "TextNode",
    "article_attributes",
    "frontmatter_stub",
    "reference_kind_to_ref_type",
    "render_label",
    "to_jats_document",
    "to_xml",
]
