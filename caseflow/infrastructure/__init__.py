"""Infrastructure layer for caseflow.

I/O adapters behind Result values and application ports.

Exports:
    Storage:
        - JsonStorage: Low-level JSON file I/O
        - CaseRepository: Case persistence

    AI:
        - OllamaTaskGenerator: Drafts from a local model
        - TemplateTaskGenerator: Offline keyword templates
        - make_generator: Pick a generator from settings
"""

from caseflow.infrastructure.ai import (
    OllamaTaskGenerator,
    TemplateTaskGenerator,
    make_generator,
)
from caseflow.infrastructure.storage import CaseRepository, JsonStorage

__all__ = [
    # Storage
    "JsonStorage",
    "CaseRepository",
    # AI
    "OllamaTaskGenerator",
    "TemplateTaskGenerator",
    "make_generator",
]
