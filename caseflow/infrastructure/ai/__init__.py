"""AI infrastructure for caseflow.

Draft task generators implementing ``caseflow.application.TaskGenerator``.
"""

from caseflow.global_config import Settings
from caseflow.infrastructure.ai.ollama import OllamaTaskGenerator, parse_generated_tasks
from caseflow.infrastructure.ai.templates import TemplateTaskGenerator


def make_generator(settings: Settings) -> OllamaTaskGenerator | TemplateTaskGenerator:
    """Build the generator selected in the settings."""
    if settings.generator == "ollama":
        return OllamaTaskGenerator(model=settings.ollama_model)
    return TemplateTaskGenerator()


__all__ = [
    "OllamaTaskGenerator",
    "TemplateTaskGenerator",
    "make_generator",
    "parse_generated_tasks",
]
