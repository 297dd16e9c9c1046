"""Repository for the case aggregate.

Each case, with its whole task tree, is stored as
``<data_dir>/cases/<case-id>.json``.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from caseflow.domain.case import Case
from caseflow.domain.shared.result import Err, Ok, Result
from caseflow.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)


class CaseRepository:
    """Case persistence with Result-based error handling."""

    def __init__(self, data_dir: Path, storage: JsonStorage | None = None) -> None:
        """Initialize the repository.

        Args:
            data_dir: Root data directory; cases live in its ``cases`` folder.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self._cases_dir = Path(data_dir) / "cases"
        self._storage = storage or JsonStorage()

    def _case_file(self, case_id: str) -> Path:
        return self._cases_dir / f"{case_id}.json"

    def get(self, case_id: str) -> Result[Case, str]:
        """Load a case by ID.

        Returns:
            Ok(Case) if found and valid, Err(str) otherwise.
        """
        if not self.exists(case_id):
            return Err(f"Case not found: {case_id}")

        result = self._storage.load_json(self._case_file(case_id))
        if isinstance(result, Err):
            return result

        try:
            return Ok(Case.model_validate(result.value))
        except ValidationError as e:
            return Err(f"Invalid case data for {case_id}: {e}")

    def save(self, case: Case) -> Result[None, str]:
        """Persist a case, replacing any previous version.

        Returns:
            Ok(None) if successful, Err(str) with error message if failed.
        """
        return self._storage.save_json(
            self._case_file(case.id),
            case.model_dump(mode="json"),
        )

    def exists(self, case_id: str) -> bool:
        """Check if a case is stored."""
        return self._case_file(case_id).exists()

    def list_all(self) -> Result[list[Case], str]:
        """List all stored cases, sorted by ID.

        Files that fail to load are skipped with a warning.

        Returns:
            Ok(list[Case]), or Err(str) if the directory cannot be read.
        """
        if not self._cases_dir.exists():
            return Ok([])

        try:
            files = sorted(self._cases_dir.glob("*.json"))
        except OSError as e:
            return Err(f"Error listing cases: {e}")

        cases: list[Case] = []
        for case_file in files:
            result = self.get(case_file.stem)
            if isinstance(result, Err):
                logger.warning(f"Skipping {case_file.name}: {result.error}")
                continue
            cases.append(result.value)
        return Ok(cases)

    def delete(self, case_id: str) -> Result[None, str]:
        """Delete a case and its tasks.

        Returns:
            Ok(None) if successful, Err(str) if missing or not removable.
        """
        if not self.exists(case_id):
            return Err(f"Case not found: {case_id}")
        return self._storage.delete(self._case_file(case_id))
