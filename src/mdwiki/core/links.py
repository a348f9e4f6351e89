"""Internal link checking against the routes the site serves"""

import logging

from mdwiki.core.models import BrokenLink
from mdwiki.core.parse import extract_links
from mdwiki.core.relations import tag_map
from mdwiki.core.repository import ContentRepository


logger = logging.getLogger(__name__)

STATIC_ROUTES = ('/', '/about', '/search', '/random', '/tags', '/visualize')


def is_internal(href: str) -> bool:
    return href.startswith('/') and not href.startswith('//')


def clean_link(href: str) -> str:
    """Strip #anchor and ?query; keep a trailing slash only on the root."""
    path = href.split('#', 1)[0].split('?', 1)[0]
    return path.rstrip('/') or ('/' if path else '')


def valid_routes(repo: ContentRepository) -> set[str]:
    routes = set(STATIC_ROUTES)
    routes.update(f"/{c}" for c in repo.list_categories())
    routes.update(f"/{r.category}/{r.slug}" for r in repo.load_all())
    routes.update(f"/tags/{t}" for t in tag_map(repo))
    return routes


def check_links(repo: ContentRepository) -> list[BrokenLink]:
    """Internal links that match no known route, in corpus order."""
    routes = valid_routes(repo)
    broken = []
    for record in repo.load_all():
        for href in extract_links(record.body):
            if not is_internal(href):
                continue
            path = clean_link(href)
            if path and path not in routes:
                logger.warning("broken link in %s: %s", record.path, href)
                broken.append(BrokenLink(category=record.category, slug=record.slug, link=path))
    return broken
