"""Case domain package.

The case aggregate owns the task trees; models and events live here.
"""

from caseflow.domain.case.events import CaseCreated, TasksAttached
from caseflow.domain.case.models import Case, CaseSummary

__all__ = [
    "Case",
    "CaseCreated",
    "CaseSummary",
    "TasksAttached",
]
