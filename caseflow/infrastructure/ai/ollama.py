"""Ollama-backed task draft generator.

Asks a local model for a task breakdown of a case description and parses
the reply into draft nodes. The blocking client call runs in a worker
thread so the event loop stays responsive.
"""

import asyncio
import json
import logging
import re

import ollama
from pydantic import TypeAdapter, ValidationError

from caseflow.application.ports import GenerationError
from caseflow.domain.review import GeneratedTask
from caseflow.domain.task import TEAM_NAMES

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "qwen2.5:7b"

_drafts_adapter = TypeAdapter(list[GeneratedTask])

PROMPT_TEMPLATE = """You are an operations coordinator for a short-term rental company.
Break the following case into a short list of concrete tasks. Tasks may have
subtasks. Keep titles short and imperative.

Case title: {title}
Case description:
{description}

Preferred team: {team}
Allowed teams: {teams}

Output ONLY valid JSON with this structure (no markdown, no explanation):
{{
  "tasks": [
    {{
      "title": "Validate issue",
      "description": "Optional one-sentence detail",
      "team": "PROPERTY_MANAGEMENT_DE",
      "subtasks": [
        {{"title": "Verify case validity", "team": "PROPERTY_MANAGEMENT_DE"}}
      ]
    }}
  ]
}}"""


def parse_generated_tasks(text: str) -> list[GeneratedTask]:
    """Parse a draft tree out of model output.

    Accepts a bare JSON list, an object with a ``tasks`` list, or either of
    those wrapped in a markdown code block. Any ``accepted`` value in the
    input is dropped.

    Raises:
        GenerationError: If no valid draft can be extracted.
    """
    block = re.search(r"```(?:json)?\s*(.*?)\s*```", text, re.DOTALL)
    if block:
        text = block.group(1)

    raw = re.search(r"(\{.*\}|\[.*\])", text, re.DOTALL)
    if raw is None:
        raise GenerationError("Model reply contained no JSON")

    try:
        data = json.loads(raw.group(1))
    except json.JSONDecodeError as e:
        raise GenerationError(f"Model reply was not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("tasks")
    if not isinstance(data, list) or not data:
        raise GenerationError("Model reply contained no tasks")

    try:
        drafts = _drafts_adapter.validate_python(data)
    except ValidationError as e:
        raise GenerationError(f"Model reply did not match the task shape: {e}") from e

    def clear(nodes: list[GeneratedTask]) -> list[GeneratedTask]:
        return [
            d.model_copy(update={"accepted": None, "subtasks": clear(d.subtasks)})
            for d in nodes
        ]

    return clear(drafts)


class OllamaTaskGenerator:
    """Generate draft task trees with a local Ollama model.

    Example:
        generator = OllamaTaskGenerator(model="qwen2.5:7b")
        drafts = await generator.generate("Leak under the kitchen sink")
    """

    def __init__(self, model: str = DEFAULT_MODEL, host: str | None = None) -> None:
        """Initialize the generator.

        Args:
            model: Ollama model name.
            host: Ollama server URL; the client default is used if omitted.
        """
        self._model = model
        self._client = ollama.Client(host=host)

    async def generate(
        self,
        description: str,
        title: str = "",
        team: str | None = None,
    ) -> list[GeneratedTask]:
        """Ask the model for a draft tree.

        Raises:
            GenerationError: If the call fails or the reply cannot be parsed.
        """
        prompt = PROMPT_TEMPLATE.format(
            title=title or "(none)",
            description=description,
            team=team or "any",
            teams=", ".join(TEAM_NAMES),
        )

        try:
            response = await asyncio.to_thread(
                self._client.chat,
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            logger.error(f"Ollama request failed: {e}")
            raise GenerationError(f"Task generation failed: {e}") from e

        content = response["message"]["content"]
        logger.debug(f"Ollama reply: {content[:500]}")
        return parse_generated_tasks(content)
