"""Tests for the SQLAlchemy task store."""

from __future__ import annotations

from pathlib import Path

import pytest

from taskboard.store import Container, NotFoundError, StoreError, ensure_default_user
from taskboard.store.models import Base, Task, User


@pytest.fixture
def container():
    c = Container("sqlite://")
    yield c
    c.dispose()


@pytest.fixture
def user(container: Container) -> User:
    return ensure_default_user(container.users)


def test_insert_assigns_sequential_ids(container: Container, user: User) -> None:
    a = container.tasks.insert(Task(title="a", user_id=user.id))
    b = container.tasks.insert(Task(title="b", user_id=user.id))
    assert (a.id, b.id) == (1, 2)
    assert a.is_done is False


def test_list_orders_by_insertion(container: Container, user: User) -> None:
    for title in ("x", "y", "z"):
        container.tasks.insert(Task(title=title, user_id=user.id))
    assert [t.title for t in container.tasks.list()] == ["x", "y", "z"]


def test_get_missing_returns_none(container: Container) -> None:
    assert container.tasks.get(123) is None


def test_update_persists_title_and_done(container: Container, user: User) -> None:
    task = container.tasks.insert(Task(title="draft", user_id=user.id))
    task.title = "final"
    task.is_done = True
    container.tasks.update(task)

    stored = container.tasks.get(task.id)
    assert stored.title == "final"
    assert stored.is_done is True
    assert stored.user_id == user.id


def test_out_of_range_ids_are_absent(container: Container) -> None:
    huge = 2**64
    assert container.tasks.get(huge) is None
    assert container.users.get(huge) is None
    with pytest.raises(NotFoundError):
        container.tasks.update(Task(id=huge, title="ghost", is_done=False, user_id=1))
    with pytest.raises(NotFoundError):
        container.tasks.delete(huge)


def test_update_missing_raises(container: Container) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        container.tasks.update(Task(id=5, title="ghost", is_done=False, user_id=1))
    assert str(excinfo.value) == "Task with id 5 not found"


def test_delete_removes_record(container: Container, user: User) -> None:
    task = container.tasks.insert(Task(title="bye", user_id=user.id))
    container.tasks.delete(task.id)
    assert container.tasks.get(task.id) is None

    with pytest.raises(NotFoundError):
        container.tasks.delete(task.id)


def test_foreign_key_enforced(container: Container) -> None:
    with pytest.raises(StoreError):
        container.tasks.insert(Task(title="orphan", user_id=999))
    assert container.tasks.list() == []


def test_ensure_default_user_is_idempotent(container: Container) -> None:
    first = ensure_default_user(container.users)
    second = ensure_default_user(container.users)
    assert first.id == second.id == 1
    assert first.email == "default@example.com"
    assert first.password_hash == "default"


def test_ensure_default_user_keeps_existing_user(container: Container) -> None:
    existing = container.users.insert(User(email="me@example.com", password_hash="x"))
    assert ensure_default_user(container.users).id == existing.id


def test_sqlalchemy_failures_become_store_errors(container: Container) -> None:
    Base.metadata.drop_all(container.engine)
    with pytest.raises(StoreError):
        container.tasks.list()
    with pytest.raises(StoreError):
        container.users.first()


def test_file_database_survives_reopen(tmp_path: Path) -> None:
    url = f"sqlite:///{tmp_path / 'tasks.db'}"
    first = Container(url)
    user = ensure_default_user(first.users)
    first.tasks.insert(Task(title="persisted", user_id=user.id))
    first.dispose()

    second = Container(url)
    try:
        assert [t.title for t in second.tasks.list()] == ["persisted"]
    finally:
        second.dispose()
