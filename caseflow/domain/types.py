"""Domain value objects for caseflow.

Immutable value objects representing core domain concepts.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TaskId:
    """Immutable hierarchical task identifier.

    A task id is the owning case id followed by one 1-based ordinal per
    level, joined with dots. The case id is kept separate because it may
    itself contain characters that look like separators.

    Example:
        task_id = TaskId.parse("TK-5.2.1", case_id="TK-5")
        task_id.ordinals   # (2, 1)
        task_id.depth      # 1
    """

    case_id: str
    ordinals: tuple[int, ...]

    @classmethod
    def parse(cls, task_id: str, case_id: str) -> "TaskId":
        """Parse a task id string belonging to ``case_id``.

        Args:
            task_id: String id like "TK-5.2.1"
            case_id: Id of the owning case, e.g. "TK-5"

        Returns:
            New TaskId with parsed ordinals

        Raises:
            ValueError: If the id does not belong to the case or an ordinal
                is not a positive integer.
        """
        prefix = f"{case_id}."
        if not task_id.startswith(prefix):
            raise ValueError(f"Task id {task_id!r} does not belong to case {case_id!r}")
        parts = task_id[len(prefix):].split(".")
        if not all(p.isdigit() and int(p) > 0 for p in parts):
            raise ValueError(f"Malformed task id: {task_id!r}")
        return cls(case_id=case_id, ordinals=tuple(int(p) for p in parts))

    def __str__(self) -> str:
        """Return the dotted id string."""
        return ".".join([self.case_id, *(str(n) for n in self.ordinals)])

    @property
    def depth(self) -> int:
        """Nesting depth, 0 for a root task."""
        return len(self.ordinals) - 1
