from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .errors import NotFoundError, StoreError
from .interfaces import TaskRepository, UserRepository
from .models import Task, User

# Ids are signed 64-bit integers; anything outside that range cannot name a row.
MAX_ID = 2**63 - 1


def _storable_id(record_id: int) -> bool:
    return -MAX_ID - 1 <= record_id <= MAX_ID


class _SqlRepo:
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Yield a session; any SQLAlchemy failure is rolled back and re-raised as StoreError."""
        session: Session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Store operation failed: {}", exc)
            raise StoreError(str(exc)) from exc
        finally:
            session.close()


class SqlTaskRepository(_SqlRepo, TaskRepository):
    def list(self) -> list[Task]:
        with self._session() as session:
            return list(session.scalars(select(Task).order_by(Task.id)))

    def get(self, task_id: int) -> Optional[Task]:
        if not _storable_id(task_id):
            return None
        with self._session() as session:
            return session.get(Task, task_id)

    def insert(self, task: Task) -> Task:
        with self._session() as session:
            session.add(task)
            session.commit()
            session.refresh(task)
            return task

    def update(self, task: Task) -> Task:
        if task.id is None or not _storable_id(task.id):
            raise NotFoundError("Task", task.id)
        with self._session() as session:
            existing = session.get(Task, task.id)
            if existing is None:
                raise NotFoundError("Task", task.id)
            existing.title = task.title
            existing.is_done = task.is_done
            session.commit()
            return existing

    def delete(self, task_id: int) -> None:
        if not _storable_id(task_id):
            raise NotFoundError("Task", task_id)
        with self._session() as session:
            existing = session.get(Task, task_id)
            if existing is None:
                raise NotFoundError("Task", task_id)
            session.delete(existing)
            session.commit()


class SqlUserRepository(_SqlRepo, UserRepository):
    def first(self) -> Optional[User]:
        with self._session() as session:
            return session.scalars(select(User).order_by(User.id).limit(1)).first()

    def get(self, user_id: int) -> Optional[User]:
        if not _storable_id(user_id):
            return None
        with self._session() as session:
            return session.get(User, user_id)

    def insert(self, user: User) -> User:
        with self._session() as session:
            session.add(user)
            session.commit()
            session.refresh(user)
            return user
