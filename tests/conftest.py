"""Pytest configuration and fixtures."""

import itertools

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from roster.database.schema import Base
from roster.persistence.memory_storage import MemoryStorage
from roster.store.record_store import RecordStore


@pytest.fixture
def session():
    """Create a temporary in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def sequential_ids():
    """Id factory handing out 1, 2, 3, ... regardless of existing ids."""
    counter = itertools.count(1)
    return lambda _existing: next(counter)


@pytest.fixture
def store(storage, sequential_ids):
    """Loaded, empty store over memory storage with deterministic ids."""
    record_store = RecordStore(storage, id_factory=sequential_ids)
    record_store.load()
    return record_store


@pytest.fixture
def seeded_store(store):
    """Store holding Ann (id 1) and Bo (id 2)."""
    store.create({"name": "Ann", "age": "17", "class": "12th", "grade": "A"})
    store.create({"name": "Bo", "age": "16", "class": "11th", "grade": "B"})
    return store
