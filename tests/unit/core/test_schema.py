"""Unit tests for core/schema.py"""

import datetime

import pytest

from mdwiki.core.errors import InvalidFrontmatter
from mdwiki.core.models import Category, Difficulty, PartialFrontmatter
from mdwiki.core.schema import validate_frontmatter, validate_partial


MINIMAL = {"title": "Hashing", "updated": "2024-01-10"}


# --- defaults ---

def test_minimal_round_trip_adds_only_defaults():
    """Required-only input comes back with the documented defaults and nothing else."""
    fm = validate_frontmatter(dict(MINIMAL), "concepts/hashing")
    assert fm.to_dict() == {**MINIMAL, "tags": [], "difficulty": "intro", "toc": True, "related": []}


def test_defaults_typed():
    fm = validate_frontmatter(dict(MINIMAL))
    assert fm.difficulty is Difficulty.intro
    assert fm.toc is True
    assert fm.tags == []
    assert fm.related == []
    assert fm.parent is None


def test_present_but_invalid_is_not_defaulted():
    """A present-but-invalid field is reported, not replaced with its default."""
    with pytest.raises(InvalidFrontmatter) as exc:
        validate_frontmatter({**MINIMAL, "difficulty": "expert", "toc": "yes"})
    assert set(exc.value.paths) == {"difficulty", "toc"}


# --- aggregation ---

def test_all_violations_reported_at_once():
    """Every failing field path is listed, not just the first."""
    raw = {"description": "short", "readingTime": -1, "updated": "Jan 5"}
    with pytest.raises(InvalidFrontmatter) as exc:
        validate_frontmatter(raw, "concepts/bad")
    paths = set(exc.value.paths)
    assert {"title", "description", "readingTime", "updated"} <= paths
    assert exc.value.source_id == "concepts/bad"


def test_missing_title_rule_is_missing():
    with pytest.raises(InvalidFrontmatter) as exc:
        validate_frontmatter({"updated": "2024-01-01"})
    [violation] = exc.value.violations
    assert violation.path == "title"
    assert violation.rule == "missing"


def test_error_message_lists_source_and_paths():
    with pytest.raises(InvalidFrontmatter) as exc:
        validate_frontmatter({"title": ""}, "concepts/empty")
    message = str(exc.value)
    assert message.startswith("Invalid frontmatter in concepts/empty:")
    assert "  - title:" in message
    assert "  - updated:" in message


def test_nested_source_path():
    """Violations inside list items carry the full dotted path."""
    raw = {**MINIMAL, "sources": [{"title": "Paper", "url": "not-a-url"}]}
    with pytest.raises(InvalidFrontmatter) as exc:
        validate_frontmatter(raw)
    assert exc.value.paths == ["sources.0.url"]


def test_non_mapping_rejected():
    with pytest.raises(InvalidFrontmatter) as exc:
        validate_frontmatter(["title"], "x/y")
    assert exc.value.paths == ["<frontmatter>"]


# --- field rules ---

@pytest.mark.parametrize("field,value", [
    ("title", 42),
    ("tags", "crypto"),
    ("related", [1, 2]),
    ("readingTime", "5"),
    ("readingTime", 0),
    ("toc", "false"),
    ("category", "history"),
    ("infobox", {"Inventor": 1991}),
    ("updated", "2024/01/01"),
])
def test_field_rule_violations(field, value):
    """Wrong types, enum misses, and non-positive numbers are rejected, not coerced."""
    with pytest.raises(InvalidFrontmatter) as exc:
        validate_frontmatter({**MINIMAL, field: value})
    assert exc.value.paths[0].split(".")[0] == field


def test_yaml_date_becomes_iso_string():
    """A YAML-native date for updated validates as its ISO form."""
    fm = validate_frontmatter({"title": "T", "updated": datetime.date(2024, 1, 15)})
    assert fm.updated == "2024-01-15"


def test_updated_may_carry_time():
    fm = validate_frontmatter({"title": "T", "updated": "2024-01-15T10:30:00Z"})
    assert fm.updated == "2024-01-15T10:30:00Z"


def test_reading_time_alias_and_int():
    fm = validate_frontmatter({**MINIMAL, "readingTime": 7})
    assert fm.reading_time == 7
    assert fm.to_dict()["readingTime"] == 7


def test_duplicate_tags_collapsed():
    fm = validate_frontmatter({**MINIMAL, "tags": ["crypto", "basics", "crypto"]})
    assert fm.tags == ["crypto", "basics"]


def test_unknown_fields_tolerated():
    """Unknown keys survive validation and serialization."""
    fm = validate_frontmatter({**MINIMAL, "wikiId": 17, "legacyPath": "/en/hashing"})
    data = fm.to_dict()
    assert data["wikiId"] == 17
    assert data["legacyPath"] == "/en/hashing"


def test_full_frontmatter():
    raw = {
        **MINIMAL,
        "description": "One-way functions and digests.",
        "category": "concepts",
        "tags": ["crypto"],
        "difficulty": "advanced",
        "parent": "cryptography",
        "readingTime": 4.5,
        "related": ["ethereum/accounts", "signatures"],
        "prerequisites": ["math"],
        "toc": False,
        "infobox": {"Invented": "1953"},
        "sources": [{"title": "Paper", "url": "https://example.com/p", "author": "Luhn"}],
        "published": True,
        "dateCreated": "2020-01-01",
        "editor": "markdown",
    }
    fm = validate_frontmatter(raw)
    assert fm.category is Category.concepts
    assert fm.sources[0].author == "Luhn"
    assert fm.date_created == "2020-01-01"
    assert fm.to_dict() == raw


def test_explicit_null_optional_is_kept():
    """An optional field given as null is echoed back rather than dropped."""
    fm = validate_frontmatter({**MINIMAL, "parent": None})
    assert fm.to_dict()["parent"] is None


# --- partial mode ---

def test_partial_requires_title_and_category():
    with pytest.raises(InvalidFrontmatter) as exc:
        validate_partial({"updated": "2024-01-01"}, "migrate/x")
    assert set(exc.value.paths) == {"title", "category"}


def test_partial_allows_missing_updated():
    fm = validate_partial({"title": "Old Wiki Page", "category": "background"})
    assert isinstance(fm, PartialFrontmatter)
    assert fm.updated is None
    assert fm.difficulty is Difficulty.intro


def test_partial_still_checks_present_fields():
    with pytest.raises(InvalidFrontmatter) as exc:
        validate_partial({"title": "T", "category": "background", "updated": "yesterday"})
    assert exc.value.paths == ["updated"]


def test_primary_contract_unchanged_by_partial():
    """Partial mode is a separate entry point; the primary schema still requires updated."""
    validate_partial({"title": "T", "category": "concepts"})
    with pytest.raises(InvalidFrontmatter):
        validate_frontmatter({"title": "T", "category": "concepts"})
