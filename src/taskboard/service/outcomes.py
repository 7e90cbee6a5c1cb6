"""Outcome types returned by the task service.

Handlers return either :class:`Success` or :class:`Failure` instead of
raising, and the HTTP layer maps the failure kind to a status code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORE = "store"

    @property
    def status_code(self) -> int:
        return {"validation": 400, "not_found": 404, "store": 500}[self.value]


@dataclass(frozen=True)
class Success:
    value: Any = None
    status_code: int = 200


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    error: str
    message: Optional[str] = None

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    @classmethod
    def validation(cls, error: str) -> "Failure":
        return cls(ErrorKind.VALIDATION, error)

    @classmethod
    def not_found(cls, error: str) -> "Failure":
        return cls(ErrorKind.NOT_FOUND, error)

    @classmethod
    def store(cls, error: str, exc: BaseException) -> "Failure":
        return cls(ErrorKind.STORE, error, str(exc))


Outcome = Union[Success, Failure]
