"""Database table for stored article records"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Text, UniqueConstraint
from sqlmodel import Field, SQLModel


class ArticleRow(SQLModel, table=True):
    """Raw article source keyed by (category, slug)"""
    __tablename__ = "articles"
    __table_args__ = (UniqueConstraint("category", "slug", name="uq_article_category_slug"),)
    id: int | None = Field(default=None, primary_key=True)
    category: str = Field(..., index=True, nullable=False)
    slug: str = Field(..., index=True, nullable=False)
    raw: str = Field(..., sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
