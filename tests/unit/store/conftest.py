"""Shared fixtures for store unit tests"""

import pytest
from sqlmodel import SQLModel

from mdwiki.store.database import init_db, make_engine
from mdwiki.store.sql import SQLStore


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = make_engine("sqlite://")
    init_db(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="sql_store")
def sql_store_fixture(engine) -> SQLStore:
    return SQLStore(engine)
