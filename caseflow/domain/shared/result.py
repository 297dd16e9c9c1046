"""Result type for expected failures in domain and application code.

Operations that can be refused (a status change blocked by open subtasks,
a subtask nested too deep, a draft not fully reviewed) return ``Ok`` or
``Err`` instead of raising, so callers are forced to look at the outcome.

Example usage:
    >>> result = update_task_status(case, "TK-1.1", TaskStatus.DONE)
    >>> if isinstance(result, Err):
    ...     print(result.error)
    Cannot mark task as DONE. 2 subtasks still incomplete.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful outcome carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A refused or failed outcome carrying ``error``."""

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007
