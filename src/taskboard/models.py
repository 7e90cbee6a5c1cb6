"""Pydantic models for the JSON wire format.

Field names are snake_case in Python and camelCase on the wire; every model
accepts either spelling on input and is dumped by alias on output.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=False)


class TaskDto(WireModel):
    """Task as exposed at the API boundary."""

    id: int
    title: str
    is_done: bool
    user_id: int

    @classmethod
    def from_record(cls, record: Any) -> "TaskDto":
        return cls(id=record.id, title=record.title, is_done=record.is_done, user_id=record.user_id)


class CreateTaskRequest(WireModel):
    # Optional so a missing title is reported as 400 rather than 422.
    title: Optional[str] = None
    user_id: Optional[int] = None


class UpdateTaskRequest(WireModel):
    title: Optional[str] = None
    is_done: bool = False


class ErrorResponse(BaseModel):
    """Error body; ``message`` is only present for 500 responses."""

    error: str
    message: Optional[str] = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
