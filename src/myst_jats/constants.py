#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/constants.py
"""Constants shared across the JATS writer.

Tag names, reference types, namespaces and defaults live here so handlers,
collaborators and tests agree on a single spelling.
"""

from __future__ import annotations

from typing import Final, Literal

# =============================================================================
# JATS vocabulary
# =============================================================================

JATS_DTD_VERSION: Final = "1.3"
JATS_DEFAULT_LANGUAGE: Final = "en"

JATS_NAMESPACES: Final[dict[str, str]] = {
    "xmlns:mml": "http://www.w3.org/1998/Math/MathML",
    "xmlns:xlink": "http://www.w3.org/1999/xlink",
    "xmlns:xsi": "http://www.w3.org/2001/XMLSchema-instance",
    # licensing
    "xmlns:ali": "http://www.niso.org/schemas/ali/1.0/",
}

# prefix -> namespace URI, for resolving ``prefix:name`` tags and attributes
NAMESPACE_URIS: Final[dict[str, str]] = {key.split(":", 1)[1]: uri for key, uri in JATS_NAMESPACES.items()}
XML_NAMESPACE: Final = "http://www.w3.org/XML/1998/namespace"

JATS_DOCTYPE: Final = (
    '<!DOCTYPE article PUBLIC "-//NLM//DTD JATS (Z39.96) Journal Publishing DTD v1.3 20210610//EN" '
    '"http://jats.nlm.nih.gov/publishing/1.3/JATS-journalpublishing1-3.dtd">'
)
XML_DECLARATION: Final = '<?xml version="1.0" encoding="UTF-8"?>'

TAG_ARTICLE: Final = "article"
TAG_SUB_ARTICLE: Final = "sub-article"
TAG_FRONT: Final = "front"
TAG_FRONT_STUB: Final = "front-stub"
TAG_BODY: Final = "body"
TAG_BACK: Final = "back"
TAG_XREF: Final = "xref"

RefType = Literal["sec", "fig", "disp-formula", "table", "custom", "bibr", "fn", "aff"]

REF_TYPE_SEC: Final = "sec"
REF_TYPE_FIG: Final = "fig"
REF_TYPE_DISP_FORMULA: Final = "disp-formula"
REF_TYPE_TABLE: Final = "table"
REF_TYPE_CUSTOM: Final = "custom"
REF_TYPE_BIBR: Final = "bibr"
REF_TYPE_FN: Final = "fn"
REF_TYPE_AFF: Final = "aff"

# Tags whose ``rid`` attribute carries the reference; ``id`` is never added to them.
REFERENCE_TAGS: Final = frozenset({TAG_XREF})

# Phrase-level elements; their parents are never indented.
INLINE_TAGS: Final = frozenset(
    {
        "bold",
        "italic",
        "underline",
        "monospace",
        "sub",
        "sup",
        "strike",
        "sc",
        "ext-link",
        "inline-formula",
        "inline-graphic",
        TAG_XREF,
    }
)

JATS_TAG_LIBRARY_URL: Final = "https://jats.nlm.nih.gov/archiving/tag-library/1.3/element"
BREAK_ELEMENT_URL: Final = f"{JATS_TAG_LIBRARY_URL}/break.html"

ORCID_URL_PREFIX: Final = "https://orcid.org/"
DOI_URL_PREFIX: Final = "https://doi.org/"

# =============================================================================
# Diagnostics
# =============================================================================

DIAGNOSTIC_SOURCE: Final = "myst_jats"

# =============================================================================
# Options defaults
# =============================================================================

DEFAULT_FULL_ARTICLE: Final = False
DEFAULT_SPACES: Final[int | None] = None
DEFAULT_DOCTYPE: Final = False

# =============================================================================
# CLI exit codes
# =============================================================================

EXIT_SUCCESS: Final = 0
EXIT_DIAGNOSTIC_ERROR: Final = 1
EXIT_INPUT_ERROR: Final = 2
