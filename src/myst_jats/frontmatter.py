#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/frontmatter.py
"""Frontmatter data structures for JATS front matter.

Frontmatter is the document metadata (title, authors, license, venue...) that
ends up in ``<front>`` / ``<front-stub>``. It arrives as a plain mapping, as
written in MyST YAML frontmatter, and is normalized here into dataclasses::

    title: A study of things
    authors:
      - name: Ada Lovelace
        orcid: 0000-0002-1825-0097
        affiliations: [engines]
    affiliations:
      - id: engines
        institution: Analytical Engines Ltd
    license: CC-BY-4.0
    keywords: [engines, computing]

:meth:`Frontmatter.to_dict` gives the canonical mapping used to compare page
and project frontmatter in multi-article bundles.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional

from myst_jats.exceptions import ValidationError

logger = logging.getLogger(__name__)

_CC_LICENSE_PATTERN = re.compile(r"^CC-(BY(?:-NC)?(?:-SA|-ND)?)-(\d\.\d)$", re.IGNORECASE)
_CC0_IDS = frozenset({"CC0", "CC0-1.0"})


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _prune(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Drop None, empty containers and False flags from a mapping."""
    return {key: value for key, value in mapping.items() if value not in (None, [], {}, "", False)}


@dataclass
class Affiliation:
    """Institution an author belongs to.

    Affiliations are listed once at the top level of the frontmatter and
    referenced from authors by ``id``; a plain string is both id and name.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    institution: Optional[str] = None
    department: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_value(cls, value: Any) -> Affiliation:
        if isinstance(value, str):
            return cls(id=value, name=value)
        if not isinstance(value, Mapping) or not (value.get("id") or value.get("name") or value.get("institution")):
            raise ValidationError(
                "Affiliation must be a name or a mapping with an 'id', 'name' or 'institution'", "affiliations", value
            )
        return cls(
            id=_as_str(value.get("id")),
            name=_as_str(value.get("name")),
            institution=_as_str(value.get("institution")),
            department=_as_str(value.get("department")),
            city=_as_str(value.get("city")),
            country=_as_str(value.get("country")),
        )

    @property
    def key(self) -> str:
        """Identifier authors use to reference this affiliation."""
        return self.id or self.name or self.institution or ""

    @property
    def display_name(self) -> str:
        return self.institution or self.name or self.id or ""

    def to_dict(self) -> dict[str, Any]:
        return _prune(
            {
                "id": self.id,
                "name": self.name,
                "institution": self.institution,
                "department": self.department,
                "city": self.city,
                "country": self.country,
            }
        )


def _person_name(value: Any) -> tuple[str, Optional[str], Optional[str]]:
    """Split an author ``name`` into display name, given names and family name."""
    if isinstance(value, Mapping):
        given = _as_str(value.get("given"))
        family = _as_str(value.get("family"))
        literal = _as_str(value.get("literal")) or " ".join(part for part in (given, family) if part)
        if not literal:
            raise ValidationError("Structured author name needs 'given', 'family' or 'literal'", "authors", value)
        return literal, given, family
    return str(value), None, None


@dataclass
class Author:
    """Article author.

    Parameters
    ----------
    name : str
        Full display name; without ``family`` the last word is taken as surname
    given : str or None, default = None
        Given names, from a structured ``name: {given, family}``
    family : str or None, default = None
        Family name, from a structured ``name: {given, family}``
    orcid : str or None, default = None
        ORCID identifier, bare (``0000-...``) or as a URL
    email : str or None, default = None
    affiliations : list of str, default = empty list
        Affiliation ids, or institution names when no top-level affiliation
        matches
    corresponding : bool, default = False
        Whether this is a corresponding author

    """

    name: str
    given: Optional[str] = None
    family: Optional[str] = None
    orcid: Optional[str] = None
    email: Optional[str] = None
    affiliations: list[str] = field(default_factory=list)
    corresponding: bool = False

    @classmethod
    def from_value(cls, value: Any) -> Author:
        if isinstance(value, str):
            return cls(name=value)
        if not isinstance(value, Mapping) or not value.get("name"):
            raise ValidationError("Author must be a name or a mapping with a 'name'", "authors", value)
        name, given, family = _person_name(value["name"])
        affiliations = value.get("affiliations") or []
        if isinstance(affiliations, (str, Mapping)):
            affiliations = [affiliations]
        return cls(
            name=name,
            given=given,
            family=family,
            orcid=_as_str(value.get("orcid")),
            email=_as_str(value.get("email")),
            affiliations=[Affiliation.from_value(a).key if isinstance(a, Mapping) else str(a) for a in affiliations],
            corresponding=bool(value.get("corresponding", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        name: Any = self.name
        if self.given or self.family:
            name = _prune({"given": self.given, "family": self.family, "literal": self.name})
        return _prune(
            {
                "name": name,
                "orcid": self.orcid,
                "email": self.email,
                "affiliations": list(self.affiliations),
                "corresponding": self.corresponding,
            }
        )


@dataclass
class License:
    """A single license, identified by SPDX-style id and/or URL."""

    id: Optional[str] = None
    url: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.url is None and self.id:
            self.url = license_url(self.id)

    @classmethod
    def from_value(cls, value: Any) -> License:
        if isinstance(value, str):
            if value.startswith(("http://", "https://")):
                return cls(url=value)
            return cls(id=value)
        if isinstance(value, Mapping):
            return cls(id=_as_str(value.get("id")), url=_as_str(value.get("url")), name=_as_str(value.get("name")))
        raise ValidationError("License must be an id, a URL or a mapping", "license", value)

    def to_dict(self) -> dict[str, Any]:
        return _prune({"id": self.id, "url": self.url, "name": self.name})


def license_url(license_id: str) -> Optional[str]:
    """Return the canonical URL of a Creative Commons license id, if it is one."""
    if license_id.upper() in _CC0_IDS:
        return "https://creativecommons.org/publicdomain/zero/1.0/"
    match = _CC_LICENSE_PATTERN.match(license_id)
    if match:
        return f"https://creativecommons.org/licenses/{match.group(1).lower()}/{match.group(2)}/"
    return None


@dataclass
class Licenses:
    """Content and code licenses."""

    content: Optional[License] = None
    code: Optional[License] = None

    @classmethod
    def from_value(cls, value: Any) -> Licenses:
        if isinstance(value, Mapping) and ("content" in value or "code" in value):
            content = value.get("content")
            code = value.get("code")
            return cls(
                content=License.from_value(content) if content else None,
                code=License.from_value(code) if code else None,
            )
        return cls(content=License.from_value(value))

    def to_dict(self) -> dict[str, Any]:
        return _prune(
            {
                "content": self.content.to_dict() if self.content else None,
                "code": self.code.to_dict() if self.code else None,
            }
        )


@dataclass
class Venue:
    """Journal or conference the article belongs to."""

    title: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_value(cls, value: Any) -> Venue:
        if isinstance(value, str):
            return cls(title=value)
        if isinstance(value, Mapping):
            return cls(title=_as_str(value.get("title")), url=_as_str(value.get("url")))
        raise ValidationError("Venue must be a title or a mapping", "venue", value)

    def to_dict(self) -> dict[str, Any]:
        return _prune({"title": self.title, "url": self.url})


@dataclass
class Biblio:
    """Bibliographic placement: volume, issue and page range."""

    volume: Optional[str] = None
    issue: Optional[str] = None
    first_page: Optional[str] = None
    last_page: Optional[str] = None

    @classmethod
    def from_value(cls, value: Any) -> Biblio:
        if not isinstance(value, Mapping):
            raise ValidationError("Biblio must be a mapping", "biblio", value)
        return cls(
            volume=_as_str(value.get("volume")),
            issue=_as_str(value.get("issue")),
            first_page=_as_str(value.get("first_page")),
            last_page=_as_str(value.get("last_page")),
        )

    def to_dict(self) -> dict[str, Any]:
        return _prune(
            {
                "volume": self.volume,
                "issue": self.issue,
                "first_page": self.first_page,
                "last_page": self.last_page,
            }
        )


def _affiliations(value: Any, authors: list[Any]) -> list[Affiliation]:
    """Load top-level affiliations, plus ones written inline on authors."""
    if isinstance(value, (str, Mapping)):
        value = [value]
    affiliations = [Affiliation.from_value(a) for a in value or []]
    known = {a.key for a in affiliations}
    for author in authors:
        inline = author.get("affiliations") if isinstance(author, Mapping) else None
        if isinstance(inline, Mapping):
            inline = [inline]
        for entry in inline or []:
            if isinstance(entry, Mapping):
                affiliation = Affiliation.from_value(entry)
                if affiliation.key not in known:
                    known.add(affiliation.key)
                    affiliations.append(affiliation)
    return affiliations


@dataclass
class Frontmatter:
    """Validated page or project frontmatter.

    Page and project frontmatter share this shape; in a multi-article bundle
    the project frontmatter feeds the composite ``<front>`` and each page
    contributes only what differs (see
    :func:`myst_jats.jats.document.frontmatter_stub`).

    """

    title: Optional[str] = None
    subtitle: Optional[str] = None
    short_title: Optional[str] = None
    description: Optional[str] = None
    authors: list[Author] = field(default_factory=list)
    affiliations: list[Affiliation] = field(default_factory=list)
    date: Optional[str] = None
    doi: Optional[str] = None
    arxiv: Optional[str] = None
    keywords: list[str] = field(default_factory=list)
    license: Optional[Licenses] = None
    venue: Optional[Venue] = None
    biblio: Optional[Biblio] = None
    open_access: Optional[bool] = None
    github: Optional[str] = None
    subject: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Frontmatter:
        """Build frontmatter from a MyST-style mapping.

        Unknown keys are ignored.

        Raises
        ------
        ValidationError
            If a known key holds a value of an unusable shape

        """
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ValidationError("Frontmatter must be a mapping", "frontmatter", data)

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.debug("Ignoring unsupported frontmatter keys: %s", ", ".join(unknown))

        authors = data.get("authors") or data.get("author") or []
        if isinstance(authors, (str, Mapping)):
            authors = [authors]
        keywords = data.get("keywords") or []
        if isinstance(keywords, str):
            keywords = [k.strip() for k in keywords.split(",") if k.strip()]

        return cls(
            title=_as_str(data.get("title")),
            subtitle=_as_str(data.get("subtitle")),
            short_title=_as_str(data.get("short_title")),
            description=_as_str(data.get("description")),
            authors=[Author.from_value(a) for a in authors],
            affiliations=_affiliations(data.get("affiliations"), authors),
            date=_as_str(data.get("date")),
            doi=_as_str(data.get("doi")),
            arxiv=_as_str(data.get("arxiv")),
            keywords=[str(k) for k in keywords],
            license=Licenses.from_value(data["license"]) if data.get("license") else None,
            venue=Venue.from_value(data["venue"]) if data.get("venue") else None,
            biblio=Biblio.from_value(data["biblio"]) if data.get("biblio") else None,
            open_access=data.get("open_access"),
            github=_as_str(data.get("github")),
            subject=_as_str(data.get("subject")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the canonical mapping of the fields that are set."""
        result: dict[str, Any] = {
            "title": self.title,
            "subtitle": self.subtitle,
            "short_title": self.short_title,
            "description": self.description,
            "authors": [a.to_dict() for a in self.authors],
            "affiliations": [a.to_dict() for a in self.affiliations],
            "date": self.date,
            "doi": self.doi,
            "arxiv": self.arxiv,
            "keywords": list(self.keywords),
            "license": self.license.to_dict() if self.license else None,
            "venue": self.venue.to_dict() if self.venue else None,
            "biblio": self.biblio.to_dict() if self.biblio else None,
            "open_access": self.open_access,
            "github": self.github,
            "subject": self.subject,
        }
        return {key: value for key, value in result.items() if value not in (None, [], {})}

    def is_empty(self) -> bool:
        return not self.to_dict()

    def find_affiliation(self, key: str) -> Optional[Affiliation]:
        """Return the top-level affiliation an author references by ``key``."""
        for affiliation in self.affiliations:
            if key in (affiliation.id, affiliation.name, affiliation.institution):
                return affiliation
        return None


__all__ = ["Affiliation", "Author", "License", "Licenses", "Venue", "Biblio", "Frontmatter", "license_url"]
