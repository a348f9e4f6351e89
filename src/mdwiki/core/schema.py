"""Frontmatter validation: pydantic schemas mapped onto InvalidFrontmatter"""

from typing import Any

from pydantic import ValidationError

from mdwiki.core.errors import InvalidFrontmatter, Violation
from mdwiki.core.models import Frontmatter, PartialFrontmatter


def _violations(error: ValidationError) -> list[Violation]:
    """One Violation per pydantic error, path as dotted loc."""
    return [
        Violation(
            path=".".join(str(part) for part in e["loc"]) or "<frontmatter>",
            rule=e["type"],
            message=e["msg"],
        )
        for e in error.errors()
    ]


def _validate(model: type[Frontmatter], raw: Any, source_id: str) -> Frontmatter:
    if not isinstance(raw, dict):
        raise InvalidFrontmatter(source_id, [Violation(
            "<frontmatter>", "mapping", f"Expected a mapping, got {type(raw).__name__}",
        )])
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise InvalidFrontmatter(source_id, _violations(e)) from e


def validate_frontmatter(raw: Any, source_id: str = "<unknown>") -> Frontmatter:
    """Validate raw metadata, applying defaults only to absent fields.

    Raises InvalidFrontmatter listing every violated constraint.
    """
    return _validate(Frontmatter, raw, source_id)


def validate_partial(raw: Any, source_id: str = "<unknown>") -> PartialFrontmatter:
    """Migration-mode validation: only title and category are required."""
    return _validate(PartialFrontmatter, raw, source_id)
