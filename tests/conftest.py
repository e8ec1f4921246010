import random

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from missionpicker.db import init_db
from missionpicker.services.store import MemoryKeyValueStore, RecordStore, SqlKeyValueStore


class CountingRandom(random.Random):
    """Seeded random source that records how many draws were made."""

    def __init__(self, seed=0):
        super().__init__(seed)
        self.draws = 0

    def sample(self, population, k, **kwargs):
        self.draws += 1
        return super().sample(population, k, **kwargs)


@pytest.fixture
def rng():
    return CountingRandom(42)


@pytest.fixture
def kv():
    return MemoryKeyValueStore()


@pytest.fixture
def record_store(kv, rng):
    return RecordStore(kv, rng=rng)


@pytest.fixture
def sql_kv():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield SqlKeyValueStore(session_factory=factory)
    engine.dispose()
