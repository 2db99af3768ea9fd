import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from database import Base, Settings
from core.context import create_context
from core.event_bus import EventBus
from core.store import PersistentStore


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return PersistentStore(session_factory)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def ctx(session_factory):
    return create_context(session_factory, Settings(seed_teachers=True, isolate_listener_errors=True))


class FakeClock:
    """可以手動控制的毫秒時鐘"""

    def __init__(self, start=1_000):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms=1):
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()
