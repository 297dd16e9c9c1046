"""Draft review models.

A draft tree has the same recursive shape as the task tree but carries no
ids or timestamps. Each node holds a tri-state ``accepted`` flag:
None (undecided), True (accepted) or False (rejected).
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

# Sequence of child indices from the top-level draft list, e.g. (0, 2)
DraftPath = tuple[int, ...]


class GeneratedTask(BaseModel):
    """A proposed task awaiting human triage."""

    title: str = Field(min_length=1)
    description: str | None = None
    team: str | None = None
    subtasks: list["GeneratedTask"] = Field(default_factory=list)
    accepted: bool | None = None

    model_config = {"extra": "ignore"}

    @field_validator("subtasks", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        # Generators may emit "subtasks": null for leaves
        return [] if value is None else value
