#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/api.py
"""Entry points for writing JATS XML from document trees.

Examples
--------
Write the body of a single article:

    >>> from myst_jats import write_single_article_jats
    >>> result = write_single_article_jats({"type": "root", "children": [...]})
    >>> result.value
    '<body>...</body>'

Write a complete article with indentation:

    >>> from myst_jats.options import JatsOptions
    >>> options = JatsOptions(full_article=True, spaces=2, frontmatter=frontmatter)
    >>> result = write_single_article_jats(tree, options)
    >>> for message in result.warnings:
    ...     print(message)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

from myst_jats.ast.nodes import Node, Root
from myst_jats.ast.serialization import dict_to_ast, json_to_ast
from myst_jats.ast.transforms import basic_transformations, clone_node
from myst_jats.diagnostics import Diagnostic, DiagnosticCollector
from myst_jats.exceptions import InvalidOptionsError, ValidationError
from myst_jats.jats.document import ArticleContent, BaseJatsDocument, JatsDocument, MultiArticleJatsDocument
from myst_jats.jats.writer import to_jats_document, to_xml
from myst_jats.options.jats import JatsOptions

logger = logging.getLogger(__name__)

TreeInput = Union[Root, Mapping[str, Any], str]


@dataclass
class JatsResult:
    """Written XML together with the diagnostics raised while writing it."""

    value: str
    messages: list[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> list[Diagnostic]:
        return [m for m in self.messages if m.severity == "error"]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [m for m in self.messages if m.severity == "warning"]


def _validate_options_type(options: Any, caller: str) -> None:
    if options is not None and not isinstance(options, JatsOptions):
        raise InvalidOptionsError(converter_name=caller, expected_type=JatsOptions, received_type=type(options))


def prepare_tree(tree: TreeInput) -> Root:
    """Load a tree and apply the normalization pass to a private copy.

    Parameters
    ----------
    tree : Root, mapping or str
        Typed tree, mdast-style mapping, or its JSON text

    Returns
    -------
    Root
        Normalized copy; the caller's tree is left untouched

    Raises
    ------
    ParsingError
        If a mapping or JSON text cannot be loaded
    ValidationError
        If the top node is not a ``root``

    """
    node: Node
    if isinstance(tree, str):
        node = json_to_ast(tree)
    elif isinstance(tree, Node):
        node = clone_node(tree)
    else:
        node = dict_to_ast(tree)
    if not isinstance(node, Root):
        raise ValidationError(f"Document tree must start with a 'root' node, got '{node.type}'", "tree", node.type)
    basic_transformations(node)
    return node


def _render(document: BaseJatsDocument, options: JatsOptions) -> str:
    if not options.full_article:
        return to_xml(document.body(), spaces=options.spaces)
    article = document.article(options.article_type, options.specific_use)
    if options.doctype:
        return to_jats_document(article, spaces=options.spaces)
    return to_xml(article, spaces=options.spaces)


def write_single_article_jats(
    tree: TreeInput,
    options: Optional[JatsOptions] = None,
    diagnostics: Optional[DiagnosticCollector] = None,
) -> JatsResult:
    """Write one document as a JATS body or article.

    Parameters
    ----------
    tree : Root, mapping or str
        Document tree
    options : JatsOptions or None, default = None
        Writer options; ``frontmatter`` is the page frontmatter
    diagnostics : DiagnosticCollector or None, default = None
        Collector to report into. Messages of this run are also returned on
        the result

    Returns
    -------
    JatsResult
        XML text and diagnostics

    Raises
    ------
    InvalidOptionsError
        If options is not a JatsOptions

    """
    _validate_options_type(options, "write_single_article_jats")
    options = options or JatsOptions()
    diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()
    first_message = len(diagnostics.messages)

    document = JatsDocument(prepare_tree(tree), options, diagnostics)
    value = _render(document, options)
    return JatsResult(value=value, messages=diagnostics.messages[first_message:])


def write_multi_article_jats(
    contents: Sequence[ArticleContent],
    options: Optional[JatsOptions] = None,
    diagnostics: Optional[DiagnosticCollector] = None,
) -> JatsResult:
    """Write several documents as sub-articles of one article.

    Parameters
    ----------
    contents : sequence of ArticleContent
        Members of the bundle. Their ``tree`` may be given in any form
        accepted by :func:`write_single_article_jats`
    options : JatsOptions or None, default = None
        Writer options; ``frontmatter`` is the project frontmatter
    diagnostics : DiagnosticCollector or None, default = None

    Returns
    -------
    JatsResult
        XML text and diagnostics

    """
    _validate_options_type(options, "write_multi_article_jats")
    options = options or JatsOptions()
    diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()
    first_message = len(diagnostics.messages)

    prepared = [
        ArticleContent(tree=prepare_tree(content.tree), frontmatter=content.frontmatter, citations=content.citations)
        for content in contents
    ]
    document = MultiArticleJatsDocument(prepared, options, diagnostics)
    value = _render(document, options)
    return JatsResult(value=value, messages=diagnostics.messages[first_message:])


__all__ = ["JatsResult", "TreeInput", "prepare_tree", "write_single_article_jats", "write_multi_article_jats"]
