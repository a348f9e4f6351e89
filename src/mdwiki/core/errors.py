"""Content error taxonomy: missing records and frontmatter violations"""

from dataclasses import dataclass


class ContentError(Exception):
    """Base class for content loading failures."""


class NotFound(ContentError, KeyError):
    """No backing record exists for (category, slug)."""

    def __init__(self, category: str, slug: str):
        self.category = category
        self.slug = slug
        super().__init__(f"{category}/{slug}")

    def __str__(self) -> str:
        return f"Article not found: {self.category}/{self.slug}"


@dataclass(frozen=True)
class Violation:
    """One failed field constraint."""
    path: str       # dotted field path, e.g. 'sources.0.url'
    rule: str       # violated rule, e.g. 'missing', 'string_too_short'
    message: str


class InvalidFrontmatter(ContentError, ValueError):
    """A record exists but its metadata block fails validation.

    Carries every violated constraint, not just the first.
    """

    def __init__(self, source_id: str, violations: list[Violation]):
        self.source_id = source_id
        self.violations = list(violations)
        super().__init__(str(self))

    @property
    def paths(self) -> list[str]:
        return [v.path for v in self.violations]

    def __str__(self) -> str:
        lines = [f"Invalid frontmatter in {self.source_id}:"]
        lines += [f"  - {v.path}: {v.message} ({v.rule})" for v in self.violations]
        return "\n".join(lines)
