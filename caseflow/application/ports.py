"""Ports the application layer depends on.

Infrastructure adapters implement these protocols; services only see the
protocol.
"""

from typing import Protocol

from caseflow.domain.review import GeneratedTask


class GenerationError(Exception):
    """Raised by a TaskGenerator when no draft could be produced."""


class TaskGenerator(Protocol):
    async def generate(
        self,
        description: str,
        title: str = "",
        team: str | None = None,
    ) -> list[GeneratedTask]:
        ...
