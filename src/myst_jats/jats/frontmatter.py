#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/jats/frontmatter.py
"""Build JATS front matter (``<front>`` and ``<article-meta>``) from frontmatter.

Element order inside ``article-meta`` follows the JATS 1.3 publishing DTD:
article-id, title-group, contrib-group, pub-date, volume, issue, fpage,
lpage, permissions, abstract, kwd-group.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Optional

from myst_jats.constants import DOI_URL_PREFIX, ORCID_URL_PREFIX, REF_TYPE_AFF, TAG_FRONT
from myst_jats.frontmatter import Affiliation, Author, Frontmatter
from myst_jats.jats.elements import Element, element, text_element

logger = logging.getLogger(__name__)

_DATE_PATTERN = re.compile(r"^(?P<year>\d{4})(?:-(?P<month>\d{1,2})(?:-(?P<day>\d{1,2}))?)?")


def _article_ids(frontmatter: Frontmatter) -> list[Element]:
    ids: list[Element] = []
    if frontmatter.doi:
        doi = frontmatter.doi
        if doi.startswith(DOI_URL_PREFIX):
            doi = doi[len(DOI_URL_PREFIX):]
        ids.append(text_element("article-id", doi, {"pub-id-type": "doi"}))
    if frontmatter.arxiv:
        ids.append(text_element("article-id", frontmatter.arxiv, {"pub-id-type": "arxiv"}))
    return ids


def _title_group(frontmatter: Frontmatter) -> Optional[Element]:
    titles: list[Element] = []
    if frontmatter.title:
        titles.append(text_element("article-title", frontmatter.title))
    if frontmatter.subtitle:
        titles.append(text_element("subtitle", frontmatter.subtitle))
    if frontmatter.short_title:
        titles.append(text_element("alt-title", frontmatter.short_title, {"alt-title-type": "short"}))
    return element("title-group", None, *titles) if titles else None


def _name(author: Author) -> Element:
    if author.family:
        parts = [text_element("surname", author.family)]
        if author.given:
            parts.append(text_element("given-names", author.given))
        return element("name", None, *parts)
    if author.given:
        return text_element("string-name", author.name)
    parts = author.name.strip().rsplit(" ", 1)
    if len(parts) == 1:
        return text_element("string-name", author.name)
    given, surname = parts
    return element("name", None, text_element("surname", surname), text_element("given-names", given))


def _orcid_url(orcid: str) -> str:
    if orcid.startswith(("http://", "https://")):
        return orcid
    return f"{ORCID_URL_PREFIX}{orcid}"


def _contrib_group(frontmatter: Frontmatter) -> Optional[Element]:
    if not frontmatter.authors:
        return None

    affiliation_ids: dict[str, str] = {}
    for author in frontmatter.authors:
        for affiliation in author.affiliations:
            affiliation_ids.setdefault(affiliation, f"aff-{len(affiliation_ids) + 1}")

    contribs: list[Element] = []
    for author in frontmatter.authors:
        children: list[Element] = []
        if author.orcid:
            children.append(text_element("contrib-id", _orcid_url(author.orcid), {"contrib-id-type": "orcid"}))
        children.append(_name(author))
        if author.email:
            children.append(text_element("email", author.email))
        for affiliation in author.affiliations:
            children.append(element("xref", {"ref-type": REF_TYPE_AFF, "rid": affiliation_ids[affiliation]}))
        attributes = {"contrib-type": "author", "corresp": "yes" if author.corresponding else None}
        contribs.append(element("contrib", attributes, *children))

    affs = [
        _aff(frontmatter.find_affiliation(key) or Affiliation(name=key), aff_id)
        for key, aff_id in affiliation_ids.items()
    ]
    return element("contrib-group", None, *contribs, *affs)


def _aff(affiliation: Affiliation, aff_id: str) -> Element:
    children: list[Element] = []
    if affiliation.department:
        children.append(text_element("institution", affiliation.department, {"content-type": "dept"}))
    children.append(text_element("institution", affiliation.display_name))
    if affiliation.city:
        children.append(text_element("city", affiliation.city))
    if affiliation.country:
        children.append(text_element("country", affiliation.country))
    return element("aff", {"id": aff_id}, *children)


def _pub_date(frontmatter: Frontmatter) -> Optional[Element]:
    if not frontmatter.date:
        return None
    match = _DATE_PATTERN.match(frontmatter.date.strip())
    if match:
        try:
            date(int(match.group("year")), int(match.group("month") or 1), int(match.group("day") or 1))
        except ValueError:
            match = None
    if not match:
        logger.warning("Skipping unparseable publication date: %s", frontmatter.date)
        return None
    parts: list[Element] = []
    iso = match.group("year")
    if match.group("month"):
        iso += f"-{int(match.group('month')):02d}"
    if match.group("day"):
        iso += f"-{int(match.group('day')):02d}"
        parts.append(text_element("day", f"{int(match.group('day')):02d}"))
    if match.group("month"):
        parts.append(text_element("month", f"{int(match.group('month')):02d}"))
    parts.append(text_element("year", match.group("year")))
    attributes = {"publication-format": "electronic", "date-type": "pub", "iso-8601-date": iso}
    return element("pub-date", attributes, *parts)


def _biblio(frontmatter: Frontmatter) -> list[Element]:
    biblio = frontmatter.biblio
    if biblio is None:
        return []
    pairs = [
        ("volume", biblio.volume),
        ("issue", biblio.issue),
        ("fpage", biblio.first_page),
        ("lpage", biblio.last_page),
    ]
    return [text_element(name, value) for name, value in pairs if value]


def _permissions(frontmatter: Frontmatter) -> Optional[Element]:
    children: list[Element] = []
    if frontmatter.open_access:
        children.append(element("ali:free_to_read"))
    content = frontmatter.license.content if frontmatter.license else None
    if content is not None and (content.url or content.id):
        ref = content.url or content.id or ""
        children.append(
            element(
                "license",
                {"xlink:href": content.url},
                text_element("ali:license_ref", ref),
            )
        )
    return element("permissions", None, *children) if children else None


def get_article_meta(frontmatter: Optional[Frontmatter]) -> list[Element]:
    """Build the ``article-meta`` element for a frontmatter.

    Parameters
    ----------
    frontmatter : Frontmatter or None
        Page or project frontmatter

    Returns
    -------
    list of Element
        ``[article-meta]``, or an empty list when the frontmatter holds
        nothing that maps to article metadata

    """
    if frontmatter is None:
        return []

    children: list[Optional[Element]] = [
        *_article_ids(frontmatter),
        _title_group(frontmatter),
        _contrib_group(frontmatter),
        _pub_date(frontmatter),
        *_biblio(frontmatter),
        _permissions(frontmatter),
    ]
    if frontmatter.description:
        children.append(element("abstract", None, text_element("p", frontmatter.description)))
    if frontmatter.keywords:
        children.append(element("kwd-group", None, *(text_element("kwd", k) for k in frontmatter.keywords)))

    present = [child for child in children if child is not None]
    if not present:
        return []
    return [element("article-meta", None, *present)]


def get_front(frontmatter: Optional[Frontmatter]) -> Optional[Element]:
    """Build the ``front`` element of an article.

    Returns None when there is no frontmatter to write.
    """
    if frontmatter is None:
        return None
    journal_meta = None
    if frontmatter.venue and frontmatter.venue.title:
        journal_meta = element(
            "journal-meta",
            None,
            element("journal-title-group", None, text_element("journal-title", frontmatter.venue.title)),
        )
    article_meta = get_article_meta(frontmatter)
    if journal_meta is None and not article_meta:
        return None
    # article-meta is required inside front
    children = [journal_meta] if journal_meta is not None else []
    children.extend(article_meta or [element("article-meta")])
    return element(TAG_FRONT, None, *children)


__all__ = ["get_article_meta", "get_front"]
