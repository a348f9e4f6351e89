"""Metadata-block parsing and markdown-it extraction of headings and links"""

import re
from datetime import date, datetime
from functools import lru_cache
from typing import Any

import yaml
from markdown_it import MarkdownIt

from mdwiki.core.errors import InvalidFrontmatter, Violation
from mdwiki.core.utils.tokens import heading_level, inline_text, walk_inline


FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)
SCALAR_TYPES = (str, int, float, bool, date, datetime)
BOM = "\ufeff"


@lru_cache(maxsize=None)
def _make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Return (metadata_block, body). metadata_block is None when the text has no header."""
    text = text.removeprefix(BOM)
    m = FRONTMATTER_RE.match(text)
    if m:
        return m.group(1), text[m.end():].lstrip("\r\n")
    return None, text


def _shape_violations(value: Any, path: str) -> list[Violation]:
    """Check a decoded value is built only from scalars, lists, and string-keyed mappings."""
    if value is None or isinstance(value, SCALAR_TYPES):
        return []
    if isinstance(value, list):
        return [v for i, item in enumerate(value) for v in _shape_violations(item, f"{path}.{i}")]
    if isinstance(value, dict):
        out = []
        for k, item in value.items():
            if not isinstance(k, str):
                out.append(Violation(path, "key_type", f"Key {k!r} must be a string"))
                continue
            out += _shape_violations(item, f"{path}.{k}" if path else k)
        return out
    return [Violation(path, "value_type", f"Unsupported value of type {type(value).__name__}")]


def parse_metadata(block: str | None, source_id: str) -> dict[str, Any]:
    """Decode a YAML metadata block into a plain mapping. Raises InvalidFrontmatter."""
    if block is None or not block.strip():
        return {}
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise InvalidFrontmatter(source_id, [Violation("<frontmatter>", "yaml", f"Invalid YAML: {e}")]) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidFrontmatter(source_id, [Violation(
            "<frontmatter>", "mapping", f"Expected a mapping, got {type(data).__name__}",
        )])
    violations = _shape_violations(data, "")
    if violations:
        raise InvalidFrontmatter(source_id, violations)
    return data


def parse_record(raw: str, source_id: str) -> tuple[dict[str, Any], str]:
    """Split a raw record into (metadata mapping, body)."""
    block, body = split_frontmatter(raw)
    return parse_metadata(block, source_id), body


def extract_headings(body: str, min_level: int = 2, max_level: int = 4, limit: int = 0) -> list[str]:
    """Heading texts between min_level and max_level in document order; limit 0 = no cap."""
    tokens = _make_parser().parse(body)
    headings = []
    for i, tok in enumerate(tokens):
        level = heading_level(tok)
        if level is None or not min_level <= level <= max_level:
            continue
        text = inline_text(tokens[i + 1])
        if text:
            headings.append(text)
            if limit and len(headings) >= limit:
                break
    return headings


def extract_links(body: str) -> list[str]:
    """All link hrefs in the body, in order."""
    tokens = _make_parser().parse(body)
    return [t.attrGet('href') for t in walk_inline(tokens) if t.type == 'link_open' and t.attrGet('href')]
