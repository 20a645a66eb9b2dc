import pytest

from app.db.repositories.todos import TodoStore
from app.db.session import build_engine
from app.features.todos.services import TodoService


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'todos.db'}"


@pytest.fixture
def engine(database_url):
    engine = build_engine(database_url)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    with TodoStore.from_engine(engine) as store:
        store.ensure_schema()
        yield store


@pytest.fixture
def StoreFactory(engine):
    """Ouvre d'autres stores sur la même base (nouvelle session)."""
    opened = []

    def factory():
        s = TodoStore.from_engine(engine)
        opened.append(s)
        return s

    yield factory

    for s in opened:
        s.close()


@pytest.fixture
def service(store):
    return TodoService(store)
