"""Breadcrumb trail for category and article pages"""

from mdwiki.core.models import Breadcrumb
from mdwiki.core.repository import ContentRepository


def _join(base_url: str, *parts: str) -> str:
    return base_url.rstrip('/') + '/' + '/'.join(parts)


def resolve_breadcrumbs(
    repo: ContentRepository,
    category: str,
    slug: str | None = None,
    base_url: str = "/",
    ) -> list[Breadcrumb]:
    """Home, category, then the article if slug is given.

    An article that cannot be loaded is labelled by its raw slug.
    """
    crumbs = [
        Breadcrumb(label="Home", path=_join(base_url)),
        Breadcrumb(label=category[:1].upper() + category[1:], path=_join(base_url, category)),
    ]
    if slug:
        record = repo.find(category, slug)
        crumbs.append(Breadcrumb(
            label=record.title if record else slug,
            path=_join(base_url, category, slug),
        ))
    return crumbs
