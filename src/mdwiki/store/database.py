"""Engine creation and schema initialization"""

import os

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

import mdwiki.store.tables  # noqa: F401  registers ArticleRow on SQLModel.metadata


DEFAULT_DB_URL = "sqlite:///mdwiki.db"
MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def get_url(explicit: str | None = None) -> str:
    """Explicit URL, else MDWIKI_DB_URL, else the SQLite default."""
    return explicit or os.getenv("MDWIKI_DB_URL") or DEFAULT_DB_URL


def make_engine(db_url: str) -> Engine:
    """Engine for db_url; in-memory SQLite shares one connection across sessions."""
    if not db_url.startswith("sqlite"):
        return create_engine(db_url, echo=False)
    kwargs = {"connect_args": {"check_same_thread": False}}
    if db_url in MEMORY_URLS:
        kwargs["poolclass"] = StaticPool
    return create_engine(db_url, echo=False, **kwargs)


def init_db(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)


def reset_db(engine: Engine) -> None:
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
