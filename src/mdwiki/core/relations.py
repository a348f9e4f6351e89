"""Derived relationships: prev/next, related content, prerequisites, tags, filtered search

Every function here degrades to an empty or partial result instead of raising
when an article or a reference cannot be resolved.
"""

import logging

from mdwiki.core.models import ArticleRecord, PrevNext, RelatedTag, TagInfo
from mdwiki.core.repository import ContentRepository


logger = logging.getLogger(__name__)


def resolve_reference(repo: ContentRepository, ref: str, category: str) -> ArticleRecord | None:
    """Resolve 'slug' or 'category/slug' relative to category.

    A bare slug missing from category falls back to the first other category
    (store order) that holds it.
    """
    ref = ref.strip().strip('/')
    if not ref:
        return None
    if '/' in ref:
        ref_category, ref_slug = ref.split('/', 1)
        return repo.find(ref_category, ref_slug)

    record = repo.find(category, ref)
    if record is not None:
        return record
    for other in repo.list_categories():
        if other != category and (record := repo.find(other, ref)) is not None:
            return record
    return None


def _resolve_all(repo: ContentRepository, refs: list[str], current: ArticleRecord, limit: int = 0) -> list[ArticleRecord]:
    """Resolved, de-duplicated references, never including current."""
    out: list[ArticleRecord] = []
    seen = {current.key}
    for ref in refs:
        if limit and len(out) >= limit:
            break
        record = resolve_reference(repo, ref, current.category)
        if record is None:
            logger.debug("unresolved reference %r in %s", ref, current.path)
            continue
        if record.key in seen:
            continue
        seen.add(record.key)
        out.append(record)
    return out


def prev_next(repo: ContentRepository, category: str, slug: str) -> PrevNext:
    """Neighbours in the category's discovery order; both None when slug is unknown."""
    articles = repo.load_all(category)
    index = next((i for i, a in enumerate(articles) if a.slug == slug), None)
    if index is None:
        return PrevNext()
    return PrevNext(
        prev=articles[index - 1] if index > 0 else None,
        next=articles[index + 1] if index < len(articles) - 1 else None,
    )


def related_content(repo: ContentRepository, category: str, slug: str, limit: int = 3) -> list[ArticleRecord]:
    """Explicit related articles first, topped up by shared-tag matches in the same category.

    Tag matches rank by number of shared tags, ties kept in corpus order.
    Never pads with articles sharing no tags.
    """
    current = repo.find(category, slug)
    if current is None or limit <= 0:
        return []

    results = _resolve_all(repo, current.frontmatter.related, current, limit)
    if len(results) >= limit or not current.tags:
        return results

    tags = set(current.tags)
    included = {r.key for r in results} | {current.key}
    scored = [
        (len(tags.intersection(r.tags)), r)
        for r in repo.load_all(category)
        if r.key not in included
    ]
    for _, record in sorted((s for s in scored if s[0] > 0), key=lambda s: s[0], reverse=True):
        if len(results) >= limit:
            break
        results.append(record)
    return results


def prerequisites(repo: ContentRepository, category: str, slug: str) -> list[ArticleRecord]:
    """Articles to read first, as listed in frontmatter; unresolvable entries skipped."""
    current = repo.find(category, slug)
    if current is None:
        return []
    return _resolve_all(repo, current.frontmatter.prerequisites or [], current)


def _newest_first(records: list[ArticleRecord]) -> list[ArticleRecord]:
    return sorted(records, key=lambda r: r.frontmatter.updated, reverse=True)


def tag_map(repo: ContentRepository) -> dict[str, list[ArticleRecord]]:
    """tag -> carrying articles across all categories, tags in discovery order."""
    tags: dict[str, list[ArticleRecord]] = {}
    for record in repo.load_all():
        for tag in record.tags:
            tags.setdefault(tag, []).append(record)
    return tags


def all_tags(repo: ContentRepository) -> list[TagInfo]:
    """Every tag, most popular first; ties keep discovery order."""
    infos = [
        TagInfo(tag=tag, count=len(records), articles=_newest_first(records))
        for tag, records in tag_map(repo).items()
    ]
    return sorted(infos, key=lambda t: t.count, reverse=True)


def articles_by_tag(repo: ContentRepository, tag: str) -> list[ArticleRecord]:
    return _newest_first([r for r in repo.load_all() if tag in r.tags])


def related_tags(repo: ContentRepository, tag: str, limit: int = 5) -> list[RelatedTag]:
    """Tags co-occurring with tag, by co-occurrence count descending."""
    counts: dict[str, int] = {}
    for record in articles_by_tag(repo, tag):
        for other in record.tags:
            if other != tag:
                counts[other] = counts.get(other, 0) + 1

    infos = {t.tag: t for t in all_tags(repo)}
    related = [
        RelatedTag(tag=other, count=infos[other].count, articles=infos[other].articles, co_occurrence=n)
        for other, n in counts.items()
    ]
    return sorted(related, key=lambda t: t.co_occurrence, reverse=True)[:limit]


def search_articles(
    repo: ContentRepository,
    query: str = "",
    category: str | None = None,
    difficulty: str | None = None,
    tags: list[str] | None = None,
    ) -> list[ArticleRecord]:
    """Filter by difficulty and any-of tags, then case-insensitive substring match."""
    articles = repo.load_all(category)
    if difficulty:
        articles = [a for a in articles if a.frontmatter.difficulty == difficulty]
    if tags:
        articles = [a for a in articles if any(t in a.tags for t in tags)]
    if query:
        q = query.lower()
        articles = [
            a for a in articles
            if q in a.title.lower()
            or q in (a.frontmatter.description or "").lower()
            or any(q in t.lower() for t in a.tags)
        ]
    return list(articles)
