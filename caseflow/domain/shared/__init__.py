"""Shared domain building blocks.

- Result type for expected failures
- Base domain event
"""

from caseflow.domain.shared.events import DomainEvent
from caseflow.domain.shared.result import Err, Ok, Result

__all__ = [
    # Result
    "Ok",
    "Err",
    "Result",
    # Events
    "DomainEvent",
]
