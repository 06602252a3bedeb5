"""Pure SQLAlchemy unit tests for TaskStore without FastAPI app imports."""

import threading

import pytest

from database import Base, make_engine, make_session_factory
from models.task import Task
from schemas.task import TaskCreate, TaskUpdate
from services.tasks import TaskStore


@pytest.fixture(scope="function")
def store():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield TaskStore(make_session_factory(engine))
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


def test_create_defaults_status_to_pending(store):
    task = store.create(TaskCreate(title="a"))
    assert isinstance(task, Task)
    assert task.id == 1
    assert task.status == "pending"
    assert store.create(TaskCreate(title="b", status="completed")).status == "completed"


def test_get_and_list(store):
    assert store.list() == []
    assert store.get(1) is None
    store.create(TaskCreate(title="a"))
    store.create(TaskCreate(title="b"))
    assert [t.title for t in store.list()] == ["a", "b"]
    assert store.get(2).title == "b"


def test_update_is_partial(store):
    task = store.create(TaskCreate(title="a", description="d"))
    updated = store.update(task.id, TaskUpdate(status="completed"))
    assert (updated.title, updated.description, updated.status) == ("a", "d", "completed")
    assert store.update(99, TaskUpdate(title="x")) is None


def test_delete(store):
    task = store.create(TaskCreate(title="a"))
    assert store.delete(task.id) is True
    assert store.delete(task.id) is False
    assert store.list() == []


def test_concurrent_creates_get_unique_ids(store):
    def worker():
        for _ in range(10):
            store.create(TaskCreate(title="t"))

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    ids = [t.id for t in store.list()]
    assert len(ids) == 40
    assert len(set(ids)) == 40
