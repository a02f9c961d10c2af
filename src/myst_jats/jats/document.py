#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/jats/document.py
"""Assemble rendered bodies into JATS articles.

:class:`JatsDocument` wraps a single rendered document. Its
:meth:`~BaseJatsDocument.article` combines the front matter, the body and the
back matter (reference list and footnotes) into an ``<article>``.

:class:`MultiArticleJatsDocument` renders several documents and nests each one
in a ``<sub-article>`` of a composite article. Every sub-article keeps its own
back matter; only the metadata that differs from the project frontmatter is
repeated in its ``<front-stub>``.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from myst_jats.ast.nodes import Root
from myst_jats.citations import Citations
from myst_jats.constants import (
    JATS_DEFAULT_LANGUAGE,
    JATS_DTD_VERSION,
    JATS_NAMESPACES,
    TAG_ARTICLE,
    TAG_BODY,
    TAG_FRONT_STUB,
    TAG_SUB_ARTICLE,
)
from myst_jats.diagnostics import DiagnosticCollector
from myst_jats.frontmatter import Frontmatter
from myst_jats.jats.backmatter import get_back
from myst_jats.jats.elements import Attributes, Element
from myst_jats.jats.frontmatter import get_article_meta, get_front
from myst_jats.jats.serializer import JatsSerializer
from myst_jats.options.jats import JatsOptions

logger = logging.getLogger(__name__)


@dataclass
class ArticleContent:
    """One member of a multi-article bundle.

    Parameters
    ----------
    tree : Root
        Normalized document tree
    frontmatter : Frontmatter or None, default = None
        Page frontmatter
    citations : Citations or None, default = None
        Citation data scoped to this document

    """

    tree: Root
    frontmatter: Optional[Frontmatter] = None
    citations: Optional[Citations] = None


def article_attributes(article_type: Optional[str] = None, specific_use: Optional[str] = None) -> Attributes:
    """Return the attributes of the ``<article>`` root element."""
    attributes: Attributes = {
        **JATS_NAMESPACES,
        "dtd-version": JATS_DTD_VERSION,
        "xml:lang": JATS_DEFAULT_LANGUAGE,
    }
    if article_type:
        attributes["article-type"] = article_type
    if specific_use:
        attributes["specific-use"] = specific_use
    return attributes


def _canonical(value: Any) -> str:
    return json.dumps(value, sort_keys=True)


def frontmatter_stub(page: Optional[Frontmatter], project: Optional[Frontmatter]) -> dict[str, Any]:
    """Return the page frontmatter fields not already given by the project.

    A field is left out when the project holds a non-null value for it that
    is structurally equal to the page value.

    Examples
    --------
        >>> page = Frontmatter(title="Shared", subtitle="Part A")
        >>> frontmatter_stub(page, Frontmatter(title="Shared"))
        {'subtitle': 'Part A'}

    """
    if page is None:
        return {}
    project_values = project.to_dict() if project is not None else {}
    page_values = page.to_dict()
    stub: dict[str, Any] = {}
    for key, value in page_values.items():
        project_value = project_values.get(key)
        if project_value is None or _canonical(value) != _canonical(project_value):
            stub[key] = value
    # authors reference affiliations by id
    if "authors" in stub and "affiliations" in page_values:
        stub["affiliations"] = page_values["affiliations"]
    return stub


class BaseJatsDocument(ABC):
    """Something that can be written as a JATS article."""

    options: JatsOptions

    @abstractmethod
    def front(self) -> Optional[Element]: ...

    @abstractmethod
    def body(self) -> Element: ...

    @abstractmethod
    def back(self) -> Optional[Element]: ...

    def article(self, article_type: Optional[str] = None, specific_use: Optional[str] = None) -> Element:
        """Assemble ``article > [front] body [back]``."""
        elements: list[Element] = []
        front = self.front()
        if front is not None:
            elements.append(front)
        elements.append(self.body())
        back = self.back()
        if back is not None:
            elements.append(back)
        return Element(
            name=TAG_ARTICLE,
            attributes=article_attributes(article_type, specific_use),
            elements=list(elements),
        )


class JatsDocument(BaseJatsDocument):
    """A single rendered document.

    Parameters
    ----------
    tree : Root
        Normalized document tree
    options : JatsOptions or None, default = None
    diagnostics : DiagnosticCollector or None, default = None

    """

    def __init__(
        self,
        tree: Root,
        options: Optional[JatsOptions] = None,
        diagnostics: Optional[DiagnosticCollector] = None,
    ):
        self.options = options or JatsOptions()
        self.serializer = JatsSerializer(tree, self.options, diagnostics)

    @property
    def footnotes(self) -> list[Element]:
        return self.serializer.footnotes

    def front(self) -> Optional[Element]:
        return get_front(self.options.frontmatter)

    def body(self) -> Element:
        return self.serializer.body()

    def back(self) -> Optional[Element]:
        return get_back(self.options.citations, self.serializer.footnotes)


class MultiArticleJatsDocument(BaseJatsDocument):
    """A bundle of documents written as sub-articles of one article.

    ``options.frontmatter`` is the project frontmatter and feeds the composite
    ``<front>``. Each member is rendered with its own builder, citations and
    frontmatter stub, so footnotes and references never cross sub-article
    boundaries.

    Parameters
    ----------
    contents : sequence of ArticleContent
        Members of the bundle, in output order
    options : JatsOptions or None, default = None
    diagnostics : DiagnosticCollector or None, default = None
        Shared by all members

    """

    def __init__(
        self,
        contents: Sequence[ArticleContent],
        options: Optional[JatsOptions] = None,
        diagnostics: Optional[DiagnosticCollector] = None,
    ):
        self.options = options or JatsOptions()
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()
        self.articles: list[JatsDocument] = []
        for content in contents:
            stub = Frontmatter.from_dict(frontmatter_stub(content.frontmatter, self.options.frontmatter))
            article_options = self.options.create_updated(citations=content.citations, frontmatter=stub)
            self.articles.append(JatsDocument(content.tree, article_options, self.diagnostics))
        logger.debug("Rendered %d sub-articles", len(self.articles))

    def front(self) -> Optional[Element]:
        return get_front(self.options.frontmatter)

    def body(self) -> Element:
        sub_articles = [self._sub_article(article) for article in self.articles]
        return Element(name=TAG_BODY, elements=list(sub_articles))

    def back(self) -> Optional[Element]:
        return None

    @staticmethod
    def _sub_article(article: JatsDocument) -> Element:
        elements: list[Element] = []
        meta = get_article_meta(article.options.frontmatter)
        if meta:
            elements.append(Element(name=TAG_FRONT_STUB, elements=list(meta[0].elements or [])))
        elements.append(article.body())
        back = article.back()
        if back is not None:
            elements.append(back)
        return Element(name=TAG_SUB_ARTICLE, elements=list(elements))


__all__ = [
    "ArticleContent",
    "BaseJatsDocument",
    "JatsDocument",
    "MultiArticleJatsDocument",
    "article_attributes",
    "frontmatter_stub",
]
