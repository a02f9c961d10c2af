#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_frontmatter.py
"""Unit tests for frontmatter and citation data structures."""

import pytest

from myst_jats.citations import Citations
from myst_jats.exceptions import ValidationError
from myst_jats.frontmatter import Affiliation, Author, Frontmatter, License, Licenses, license_url


@pytest.mark.unit
class TestFrontmatterFromDict:
    """Tests for loading MyST frontmatter mappings."""

    def test_empty(self) -> None:
        """Test empty or missing frontmatter."""
        assert Frontmatter.from_dict(None).is_empty()
        assert Frontmatter.from_dict({}).is_empty()

    def test_authors_as_strings_and_mappings(self) -> None:
        """Test both author forms are accepted."""
        frontmatter = Frontmatter.from_dict(
            {"authors": ["Ada Lovelace", {"name": "Plato", "affiliations": "Academy"}]}
        )
        assert frontmatter.authors == [Author(name="Ada Lovelace"), Author(name="Plato", affiliations=["Academy"])]

    def test_single_author_key(self) -> None:
        """Test a single author given under 'author'."""
        assert Frontmatter.from_dict({"author": "Plato"}).authors == [Author(name="Plato")]

    def test_keywords_from_string(self) -> None:
        """Test comma separated keywords."""
        assert Frontmatter.from_dict({"keywords": "a, b ,c"}).keywords == ["a", "b", "c"]

    def test_unknown_keys_are_ignored(self) -> None:
        """Test unsupported keys do not fail loading."""
        assert Frontmatter.from_dict({"title": "T", "thumbnail": "x.png"}).to_dict() == {"title": "T"}

    def test_invalid_author(self) -> None:
        """Test authors without a name are rejected."""
        with pytest.raises(ValidationError):
            Frontmatter.from_dict({"authors": [{"email": "a@example.com"}]})

    def test_invalid_frontmatter_type(self) -> None:
        """Test non-mapping frontmatter is rejected."""
        with pytest.raises(ValidationError):
            Frontmatter.from_dict(["title"])

    def test_to_dict_round_trip(self) -> None:
        """Test canonical mappings load back to the same frontmatter."""
        frontmatter = Frontmatter.from_dict(
            {
                "title": "T",
                "authors": [{"name": "Ada Lovelace", "corresponding": True}],
                "license": {"content": "CC-BY-4.0", "code": "MIT"},
                "venue": "J",
                "biblio": {"volume": 1},
            }
        )
        assert Frontmatter.from_dict(frontmatter.to_dict()) == frontmatter

    def test_structured_author_name(self) -> None:
        """Test a name given as given and family parts."""
        author = Author.from_value({"name": {"given": "Ada", "family": "Lovelace"}})
        assert author == Author(name="Ada Lovelace", given="Ada", family="Lovelace")
        assert author.to_dict() == {"name": {"given": "Ada", "family": "Lovelace", "literal": "Ada Lovelace"}}
        assert Author.from_value(author.to_dict()) == author

    def test_invalid_structured_name(self) -> None:
        """Test a structured name without any parts is rejected."""
        with pytest.raises(ValidationError):
            Author.from_value({"name": {"initials": "A. L."}})

    def test_affiliations(self) -> None:
        """Test top-level and inline affiliations are collected once."""
        frontmatter = Frontmatter.from_dict(
            {
                "affiliations": ["Academy", {"id": "eng", "name": "Engines Ltd", "country": "UK"}],
                "authors": [
                    {"name": "Ada Lovelace", "affiliations": ["eng", {"id": "rs", "institution": "Royal Society"}]},
                    {"name": "Plato", "affiliations": {"id": "rs", "institution": "Royal Society"}},
                ],
            }
        )
        assert frontmatter.affiliations == [
            Affiliation(id="Academy", name="Academy"),
            Affiliation(id="eng", name="Engines Ltd", country="UK"),
            Affiliation(id="rs", institution="Royal Society"),
        ]
        assert frontmatter.authors[0].affiliations == ["eng", "rs"]
        assert frontmatter.authors[1].affiliations == ["rs"]
        assert frontmatter.find_affiliation("eng").name == "Engines Ltd"
        assert frontmatter.find_affiliation("missing") is None
        assert frontmatter.to_dict()["affiliations"][1] == {"id": "eng", "name": "Engines Ltd", "country": "UK"}
        assert Frontmatter.from_dict(frontmatter.to_dict()) == frontmatter

    def test_invalid_affiliation(self) -> None:
        """Test affiliation mappings need an id, name or institution."""
        with pytest.raises(ValidationError):
            Frontmatter.from_dict({"affiliations": [{"city": "Oslo"}]})


@pytest.mark.unit
class TestLicenses:
    """Tests for license handling."""

    @pytest.mark.parametrize(
        "license_id,url",
        [
            ("CC-BY-4.0", "https://creativecommons.org/licenses/by/4.0/"),
            ("CC-BY-NC-SA-4.0", "https://creativecommons.org/licenses/by-nc-sa/4.0/"),
            ("CC0-1.0", "https://creativecommons.org/publicdomain/zero/1.0/"),
            ("MIT", None),
        ],
    )
    def test_license_url(self, license_id, url) -> None:
        """Test Creative Commons URLs are derived from ids."""
        assert license_url(license_id) == url

    def test_license_from_url(self) -> None:
        """Test a URL is kept as the license URL."""
        assert License.from_value("https://example.com/license") == License(url="https://example.com/license")

    def test_content_and_code(self) -> None:
        """Test separate content and code licenses."""
        licenses = Licenses.from_value({"content": "CC-BY-4.0", "code": "MIT"})
        assert licenses.content.id == "CC-BY-4.0"
        assert licenses.code == License(id="MIT")


@pytest.mark.unit
class TestCitations:
    """Tests for citation data."""

    def test_from_dict(self) -> None:
        """Test order and data are loaded."""
        citations = Citations.from_dict(
            {
                "order": ["a", "b"],
                "data": {
                    "a": {"cite": {"type": "book", "title": "A", "DOI": "10.1/a"}},
                    "b": {"text": "Ref B", "url": "https://example.com"},
                },
            }
        )
        assert len(citations) == 2
        assert citations.data["a"].doi == "10.1/a"
        assert citations.data["b"].text == "Ref B"
        assert citations.data["b"].url == "https://example.com"

    def test_order_defaults_to_data_keys(self) -> None:
        """Test missing order falls back to the data order."""
        citations = Citations.from_dict({"data": {"x": {"text": "X"}, "y": {"text": "Y"}}})
        assert citations.order == ["x", "y"]

    def test_ordered_pairs_include_missing(self) -> None:
        """Test labels without data are reported as None."""
        citations = Citations.from_dict({"order": ["x", "gone"], "data": {"x": {"text": "X"}}})
        assert [(label, data is None) for label, data in citations.ordered()] == [("x", False), ("gone", True)]

    def test_invalid_data(self) -> None:
        """Test malformed entries are rejected."""
        with pytest.raises(ValidationError):
            Citations.from_dict({"data": {"x": "not a mapping"}})
