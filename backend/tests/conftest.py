import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from linkhub.db import base  # noqa: F401
from linkhub.models.base import Base


@pytest.fixture
def db_session():
    engine = create_engine('sqlite://', connect_args={'check_same_thread': False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


class FakeRedis:
    def __init__(self):
        self.values: dict[str, object] = {}

    def set(self, key, value):
        self.values[key] = value

    def get(self, key):
        value = self.values.get(key)
        return value if isinstance(value, str) else None

    def exists(self, key):
        return int(key in self.values)

    def hset(self, key, mapping):
        self.values.setdefault(key, {}).update(mapping)

    def hgetall(self, key):
        value = self.values.get(key)
        return dict(value) if isinstance(value, dict) else {}

    def delete(self, key):
        return int(self.values.pop(key, None) is not None)


@pytest.fixture
def fake_redis():
    return FakeRedis()
