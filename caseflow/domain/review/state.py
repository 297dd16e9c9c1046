"""Review state machine over a draft tree.

Every operation returns a new list of drafts and leaves its input
untouched. Predicates walk the whole tree depth-first.

Bulk accept and reject are toggles: applying ``accept_all`` to a tree that
is already fully accepted clears every decision instead. Recompute
``all_accepted``/``all_rejected`` before each bulk call rather than caching
them.
"""

from collections.abc import Iterator
from enum import Enum

from .models import DraftPath, GeneratedTask


class CommitBlocker(str, Enum):
    """Reason a reviewed draft cannot be committed yet."""

    UNDECIDED = "undecided"
    NONE_ACCEPTED = "none_accepted"

    @property
    def message(self) -> str:
        """Actionable message for the user."""
        if self is CommitBlocker.UNDECIDED:
            return "Please review every item: accept or reject each task before creating the case."
        return "Please accept at least one item before creating the case."


# =============================================================================
# Walking
# =============================================================================


def walk_drafts(
    drafts: list[GeneratedTask],
    prefix: DraftPath = (),
) -> Iterator[tuple[DraftPath, GeneratedTask]]:
    """Yield (path, draft) for every node, depth-first."""
    for index, draft in enumerate(drafts):
        path = prefix + (index,)
        yield path, draft
        yield from walk_drafts(draft.subtasks, path)


def find_draft(drafts: list[GeneratedTask], path: DraftPath) -> GeneratedTask | None:
    """Return the node at ``path``, or None if the path leads nowhere."""
    if not path:
        return None
    current = drafts
    node: GeneratedTask | None = None
    for index in path:
        if index < 0 or index >= len(current):
            return None
        node = current[index]
        current = node.subtasks
    return node


def count_drafts(drafts: list[GeneratedTask]) -> int:
    """Count every node in the draft tree."""
    return sum(1 for _ in walk_drafts(drafts))


def count_draft_levels(drafts: list[GeneratedTask]) -> int:
    """Number of levels in the draft tree (0 when empty)."""
    return max((len(path) for path, _ in walk_drafts(drafts)), default=0)


# =============================================================================
# Mutations (copying)
# =============================================================================


def set_accepted(
    drafts: list[GeneratedTask],
    path: DraftPath,
    value: bool | None,
) -> list[GeneratedTask]:
    """Set the flag of the single node at ``path``.

    Ancestors and descendants keep their flags. A path that does not lead
    to a node leaves the tree unchanged.
    """
    if not path or path[0] < 0 or path[0] >= len(drafts):
        return list(drafts)

    head, rest = path[0], path[1:]
    result = list(drafts)
    target = drafts[head]
    if rest:
        result[head] = target.model_copy(
            update={"subtasks": set_accepted(target.subtasks, rest, value)}
        )
    else:
        result[head] = target.model_copy(update={"accepted": value})
    return result


def _set_every(drafts: list[GeneratedTask], value: bool | None) -> list[GeneratedTask]:
    return [
        d.model_copy(update={"accepted": value, "subtasks": _set_every(d.subtasks, value)})
        for d in drafts
    ]


def accept_all(drafts: list[GeneratedTask]) -> list[GeneratedTask]:
    """Accept every node, or clear every decision if all are accepted."""
    if all_accepted(drafts):
        return _set_every(drafts, None)
    return _set_every(drafts, True)


def reject_all(drafts: list[GeneratedTask]) -> list[GeneratedTask]:
    """Reject every node, or clear every decision if all are rejected."""
    if all_rejected(drafts):
        return _set_every(drafts, None)
    return _set_every(drafts, False)


def reset_all(drafts: list[GeneratedTask]) -> list[GeneratedTask]:
    """Clear every decision."""
    return _set_every(drafts, None)


# =============================================================================
# Predicates
# =============================================================================


def _flags(drafts: list[GeneratedTask]) -> list[bool | None]:
    return [draft.accepted for _, draft in walk_drafts(drafts)]


def all_accepted(drafts: list[GeneratedTask]) -> bool:
    """Every node is accepted. False for an empty tree."""
    flags = _flags(drafts)
    return bool(flags) and all(f is True for f in flags)


def all_rejected(drafts: list[GeneratedTask]) -> bool:
    """Every node is rejected. False for an empty tree."""
    flags = _flags(drafts)
    return bool(flags) and all(f is False for f in flags)


def all_decided(drafts: list[GeneratedTask]) -> bool:
    """No node is undecided. False for an empty tree."""
    flags = _flags(drafts)
    return bool(flags) and all(f is not None for f in flags)


def any_accepted(drafts: list[GeneratedTask]) -> bool:
    """At least one node anywhere is accepted, whatever its ancestors say."""
    return any(f is True for f in _flags(drafts))


def commit_blocker(drafts: list[GeneratedTask]) -> CommitBlocker | None:
    """Return why the draft cannot be committed, or None if it can."""
    if not drafts:
        return CommitBlocker.NONE_ACCEPTED
    if not all_decided(drafts):
        return CommitBlocker.UNDECIDED
    if not any_accepted(drafts):
        return CommitBlocker.NONE_ACCEPTED
    return None


def orphaned_acceptances(drafts: list[GeneratedTask]) -> list[DraftPath]:
    """Paths of accepted nodes that sit below a non-accepted ancestor.

    Commit never reaches these nodes, so their acceptance has no effect.
    """
    orphans: list[DraftPath] = []

    def visit(nodes: list[GeneratedTask], prefix: DraftPath, ancestors_ok: bool) -> None:
        for index, draft in enumerate(nodes):
            path = prefix + (index,)
            if draft.accepted is True and not ancestors_ok:
                orphans.append(path)
            visit(draft.subtasks, path, ancestors_ok and draft.accepted is True)

    visit(drafts, (), True)
    return orphans
