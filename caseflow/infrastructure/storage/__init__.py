"""Storage infrastructure for caseflow.

Persistence for the case aggregate, using Result values for explicit
error handling.
"""

from caseflow.infrastructure.storage.json_storage import JsonStorage
from caseflow.infrastructure.storage.repositories import CaseRepository

__all__ = [
    "JsonStorage",
    "CaseRepository",
]
