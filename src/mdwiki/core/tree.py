"""Navigation hierarchy: per-category forests built from frontmatter parent links"""

import logging
import unicodedata
from collections import defaultdict

from mdwiki.core.models import ArticleNode, ArticleRecord, CategoryTree


logger = logging.getLogger(__name__)


def collation_key(text: str) -> str:
    """Accent- and case-insensitive key, so 'Émile' sorts beside 'emile'."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def _sort_key(record: ArticleRecord) -> tuple[str, str, str]:
    return collation_key(record.title), record.title, record.slug


def _resolve_parents(records: list[ArticleRecord]) -> dict[str, str]:
    """Map slug -> parent slug for parents that exist in the same set, cycles broken.

    In a cycle the member with the smallest sort key loses its parent edge and becomes a root.
    """
    by_slug = {r.slug: r for r in records}
    parent_of = {}
    for r in records:
        parent = r.frontmatter.parent
        if not parent:
            continue
        if parent not in by_slug or parent == r.slug:
            logger.debug("unresolved parent %r for %s; placing at root", parent, r.path)
            continue
        parent_of[r.slug] = parent

    for start in sorted(parent_of):
        chain = []
        slug = start
        while slug in parent_of and slug not in chain:
            chain.append(slug)
            slug = parent_of[slug]
        if slug in chain:
            cycle = chain[chain.index(slug):]
            root = min(cycle, key=lambda s: _sort_key(by_slug[s]))
            logger.debug("parent cycle %s; promoting %s to root", " -> ".join(cycle), root)
            del parent_of[root]
    return parent_of


def build_hierarchy(records: list[ArticleRecord]) -> tuple[ArticleNode, ...]:
    """Forest of ArticleNodes, every level sorted by title.

    Output is independent of the input order.
    """
    parent_of = _resolve_parents(records)
    children: dict[str, list[ArticleRecord]] = defaultdict(list)
    roots = []
    for r in records:
        if r.slug in parent_of:
            children[parent_of[r.slug]].append(r)
        else:
            roots.append(r)

    def _node(record: ArticleRecord) -> ArticleNode:
        return ArticleNode(
            title=record.title,
            slug=record.slug,
            difficulty=record.frontmatter.difficulty,
            children=tuple(_node(c) for c in sorted(children[record.slug], key=_sort_key)),
        )

    return tuple(_node(r) for r in sorted(roots, key=_sort_key))


def build_category_tree(category: str, records: list[ArticleRecord]) -> CategoryTree:
    return CategoryTree(
        name=category[:1].upper() + category[1:],
        slug=category,
        count=len(records),
        articles=build_hierarchy(records),
    )


def iter_nodes(nodes: tuple[ArticleNode, ...], depth: int = 0):
    """Depth-first (node, depth) pairs."""
    for node in nodes:
        yield node, depth
        yield from iter_nodes(node.children, depth + 1)
