from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from .models import Task, User


class TaskRepository(ABC):
    @abstractmethod
    def list(self) -> list[Task]:
        raise NotImplementedError

    @abstractmethod
    def get(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    @abstractmethod
    def insert(self, task: Task) -> Task:
        raise NotImplementedError

    @abstractmethod
    def update(self, task: Task) -> Task:
        raise NotImplementedError

    @abstractmethod
    def delete(self, task_id: int) -> None:
        raise NotImplementedError


class UserRepository(ABC):
    @abstractmethod
    def first(self) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def get(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def insert(self, user: User) -> User:
        raise NotImplementedError
