"""SQL-backed content store over the articles table"""

from datetime import datetime

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from mdwiki.core.errors import NotFound
from mdwiki.store.base import ContentStore
from mdwiki.store.tables import ArticleRow


class SQLStore(ContentStore):
    """Categories and slugs are listed alphabetically, like the filesystem store."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def list_categories(self) -> list[str]:
        with Session(self.engine) as session:
            return list(session.exec(select(ArticleRow.category).distinct().order_by(ArticleRow.category)).all())

    def list_slugs(self, category: str) -> list[str]:
        with Session(self.engine) as session:
            stmt = select(ArticleRow.slug).where(ArticleRow.category == category).order_by(ArticleRow.slug)
            return list(session.exec(stmt).all())

    def get(self, category: str, slug: str) -> str:
        with Session(self.engine) as session:
            row = session.exec(
                select(ArticleRow).where(ArticleRow.category == category).where(ArticleRow.slug == slug)
            ).one_or_none()
        if row is None:
            raise NotFound(category, slug)
        return row.raw

    def put(self, category: str, slug: str, raw: str) -> str:
        """Insert or replace a record. Returns 'created', 'updated', or 'unchanged'."""
        with Session(self.engine) as session:
            row = session.exec(
                select(ArticleRow).where(ArticleRow.category == category).where(ArticleRow.slug == slug)
            ).one_or_none()
            if row is not None and row.raw == raw:
                return 'unchanged'
            status = 'updated' if row else 'created'
            row = row or ArticleRow(category=category, slug=slug, raw=raw)
            row.raw = raw
            row.updated_at = datetime.now()
            session.add(row)
            session.commit()
        return status


def import_store(source: ContentStore, target: SQLStore) -> dict[str, int]:
    """Copy every record from source into target. Returns per-status counts."""
    counts = {"created": 0, "updated": 0, "unchanged": 0}
    for category in source.list_categories():
        for slug in source.list_slugs(category):
            counts[target.put(category, slug, source.get(category, slug))] += 1
    return counts
