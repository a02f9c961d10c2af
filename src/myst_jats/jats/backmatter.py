#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/jats/backmatter.py
"""Build JATS back matter: the reference list and the footnote group.

Citations with CSL-JSON data become ``element-citation``; citations that only
carry pre-formatted text become ``mixed-citation``. Styling of references is
left to the consumer of the JATS file.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from myst_jats.citations import CitationData, Citations
from myst_jats.constants import DOI_URL_PREFIX, TAG_BACK
from myst_jats.jats.elements import Element, element, text_element

logger = logging.getLogger(__name__)

# CSL item types to JATS publication-type
_PUBLICATION_TYPES = {
    "article": "journal",
    "article-journal": "journal",
    "article-magazine": "journal",
    "article-newspaper": "journal",
    "book": "book",
    "chapter": "book",
    "paper-conference": "confproc",
    "thesis": "thesis",
    "report": "report",
    "webpage": "web",
    "dataset": "data",
    "software": "software",
}

# CSL types whose title is a part of a larger container
_CONTAINED_TYPES = frozenset(
    {"article", "article-journal", "article-magazine", "article-newspaper", "chapter", "paper-conference"}
)

_PAGE_SPLIT = re.compile(r"\s*[-–—]+\s*")


def _person_group(csl: dict[str, Any]) -> Optional[Element]:
    names: list[Element] = []
    for person in csl.get("author") or []:
        if not isinstance(person, dict):
            continue
        if person.get("family"):
            parts = [text_element("surname", str(person["family"]))]
            if person.get("given"):
                parts.append(text_element("given-names", str(person["given"])))
            names.append(element("name", None, *parts))
        elif person.get("literal"):
            names.append(text_element("string-name", str(person["literal"])))
    return element("person-group", {"person-group-type": "author"}, *names) if names else None


def _year(csl: dict[str, Any]) -> Optional[str]:
    issued = csl.get("issued")
    if not isinstance(issued, dict):
        return None
    date_parts = issued.get("date-parts")
    if date_parts and date_parts[0]:
        return str(date_parts[0][0])
    literal = issued.get("literal") or issued.get("raw")
    return str(literal)[:4] if literal else None


def _pages(csl: dict[str, Any]) -> list[Element]:
    page = csl.get("page")
    if not page:
        return []
    first, *rest = _PAGE_SPLIT.split(str(page), maxsplit=1)
    pages = [text_element("fpage", first)]
    if rest and rest[0]:
        pages.append(text_element("lpage", rest[0]))
    return pages


def element_citation(data: CitationData) -> Element:
    """Build an ``element-citation`` from CSL-JSON."""
    csl = data.csl or {}
    csl_type = str(csl.get("type", ""))
    title = csl.get("title")
    container_title = csl.get("container-title")
    if isinstance(container_title, list):
        container_title = container_title[0] if container_title else None

    children: list[Optional[Element]] = [_person_group(csl)]
    if csl_type in _CONTAINED_TYPES or container_title:
        if title:
            children.append(text_element("article-title", str(title)))
        if container_title:
            children.append(text_element("source", str(container_title)))
    elif title:
        children.append(text_element("source", str(title)))

    year = _year(csl)
    if year:
        children.append(text_element("year", year))
    for key in ("volume", "issue"):
        if csl.get(key):
            children.append(text_element(key, str(csl[key])))
    children.extend(_pages(csl))
    if data.doi:
        doi = data.doi[len(DOI_URL_PREFIX):] if data.doi.startswith(DOI_URL_PREFIX) else data.doi
        children.append(text_element("pub-id", doi, {"pub-id-type": "doi"}))
    if data.url:
        children.append(text_element("ext-link", data.url, {"ext-link-type": "uri", "xlink:href": data.url}))

    attributes = {"publication-type": _PUBLICATION_TYPES.get(csl_type, "other") if csl_type else None}
    return element("element-citation", attributes, *(c for c in children if c is not None))


def get_ref_list(citations: Optional[Citations]) -> Optional[Element]:
    """Build the ``ref-list`` element, or None when there are no references."""
    if not citations:
        return None
    refs: list[Element] = []
    for label, data in citations.ordered():
        if data is None:
            logger.warning("No citation data for '%s', leaving it out of the reference list", label)
            continue
        if data.csl:
            citation = element_citation(data)
        elif data.text:
            citation = text_element("mixed-citation", data.text)
        else:
            logger.warning("Citation '%s' has neither CSL-JSON nor text, leaving it out", label)
            continue
        refs.append(element("ref", {"id": label}, citation))
    return element("ref-list", None, *refs) if refs else None


def get_back(citations: Optional[Citations], footnotes: list[Element]) -> Optional[Element]:
    """Build the ``back`` element from citations and hoisted footnotes.

    Parameters
    ----------
    citations : Citations or None
        Resolved citation data
    footnotes : list of Element
        ``fn`` elements in document order

    Returns
    -------
    Element or None
        ``back > [ref-list] [fn-group]``, or None when both are empty

    """
    children: list[Element] = []
    ref_list = get_ref_list(citations)
    if ref_list is not None:
        children.append(ref_list)
    if footnotes:
        children.append(element("fn-group", None, *footnotes))
    return element(TAG_BACK, None, *children) if children else None


__all__ = ["element_citation", "get_ref_list", "get_back"]
