"""Content repository: validated article loads with per-key memoization"""

import logging

from mdwiki.core.errors import ContentError
from mdwiki.core.models import ArticleRecord, CategoryTree
from mdwiki.core.parse import parse_record
from mdwiki.core.schema import validate_frontmatter
from mdwiki.core.tree import build_category_tree
from mdwiki.store.base import ContentStore


logger = logging.getLogger(__name__)


class ContentRepository:
    """Owns the in-memory record and tree caches for one backing store.

    Build one per process (or per site build) and pass it to consumers.
    Caches live until clear(); there is no eviction.
    """

    def __init__(self, store: ContentStore):
        self.store = store
        self._cache: dict[str | None, list[ArticleRecord]] = {}
        self._tree: list[CategoryTree] | None = None

    def __repr__(self) -> str:
        return f"ContentRepository({self.store!r})"

    def list_categories(self) -> list[str]:
        return self.store.list_categories()

    def list_slugs(self, category: str) -> list[str]:
        return self.store.list_slugs(category)

    def load(self, category: str, slug: str) -> ArticleRecord:
        """Read and validate one record. Raises NotFound or InvalidFrontmatter."""
        source_id = f"{category}/{slug}"
        raw = self.store.get(category, slug)
        metadata, body = parse_record(raw, source_id)
        frontmatter = validate_frontmatter(metadata, source_id)
        return ArticleRecord(category=category, slug=slug, frontmatter=frontmatter, body=body)

    def get_or_load(self, key: str | None, loader) -> list[ArticleRecord]:
        """Return the cached sequence for key (None = all categories), calling loader() on a miss."""
        if key in self._cache:
            logger.debug("cache hit: %s", key or "all")
            return self._cache[key]
        logger.debug("cache miss: %s", key or "all")
        records = loader()
        self._cache[key] = records
        return records

    def _load_categories(self, categories: list[str]) -> list[ArticleRecord]:
        records = []
        for category in categories:
            for slug in self.list_slugs(category):
                try:
                    records.append(self.load(category, slug))
                except ContentError as e:
                    logger.warning("Skipping %s/%s: %s", category, slug, e)
        return records

    def load_all(self, category: str | None = None) -> list[ArticleRecord]:
        """All loadable records, optionally for one category, in discovery order.

        Records that fail to load are logged and left out.
        """
        if category:
            return self.get_or_load(category, lambda: self._load_categories([category]))
        return self.get_or_load(None, lambda: self._load_categories(self.list_categories()))

    def find(self, category: str, slug: str) -> ArticleRecord | None:
        """Cached record for (category, slug), or None if absent or invalid."""
        for record in self.load_all(category):
            if record.slug == slug:
                return record
        return None

    def content_tree(self) -> list[CategoryTree]:
        """One navigation forest per category, built once and cached."""
        if self._tree is None:
            self._tree = [build_category_tree(c, self.load_all(c)) for c in self.list_categories()]
        return self._tree

    def clear(self) -> None:
        self._cache.clear()
        self._tree = None
        logger.info("content cache cleared")
