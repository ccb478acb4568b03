import pytest

from alchemy import create_app
from alchemy.core.store import InMemoryStore
from alchemy.core.store_registry import get_store

from fakes import STEAM_ANSWERS, StubGenerator, memory_config, seeded_store, sql_config


@pytest.fixture
def memory_store():
    return seeded_store(InMemoryStore)


@pytest.fixture
def generator():
    return StubGenerator(STEAM_ANSWERS)


@pytest.fixture
def app(generator):
    return create_app(memory_config(), generator=generator)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sql_app(tmp_path, generator):
    return create_app(sql_config(tmp_path / "alchemy.db"), generator=generator)


@pytest.fixture
def sql_store(sql_app):
    with sql_app.app_context():
        yield get_store()
