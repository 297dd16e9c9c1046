"""JSON file storage with Result-based error handling.

Thin file I/O for JSON documents; returns Result values instead of
raising. Writes go through a temporary file so a crash never leaves a
half-written case on disk.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from caseflow.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class JsonStorage:
    """Low-level JSON file I/O.

    Knows nothing about cases or tasks - just reads and writes dicts.

    Example:
        storage = JsonStorage()
        result = storage.load_json(Path("TK-1042.json"))
        if isinstance(result, Ok):
            data = result.value
    """

    def load_json(self, path: Path) -> Result[dict[str, Any], str]:
        """Load a JSON object from a file.

        Returns:
            Ok(dict) if successful, Err(str) with error message if failed.
        """
        try:
            if not path.exists():
                return Err(f"File not found: {path}")

            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                return Err(f"Expected a JSON object in {path}")
            return Ok(data)

        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {path}: {e}")
        except PermissionError:
            return Err(f"Permission denied reading {path}")
        except OSError as e:
            return Err(f"Error reading {path}: {e}")

    def save_json(
        self,
        path: Path,
        data: dict[str, Any],
        indent: int = 2,
    ) -> Result[None, str]:
        """Write a JSON object to a file, replacing it atomically.

        Returns:
            Ok(None) if successful, Err(str) with error message if failed.
        """
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=indent), encoding="utf-8")
            os.replace(tmp_path, path)
            logger.debug(f"Wrote {path}")
            return Ok(None)

        except TypeError as e:
            return Err(f"Data not JSON serializable: {e}")
        except PermissionError:
            return Err(f"Permission denied writing {path}")
        except OSError as e:
            return Err(f"Error writing {path}: {e}")

    def delete(self, path: Path) -> Result[None, str]:
        """Delete a file.

        Returns:
            Ok(None) if deleted, Err(str) if missing or not removable.
        """
        try:
            path.unlink()
            return Ok(None)
        except FileNotFoundError:
            return Err(f"File not found: {path}")
        except PermissionError:
            return Err(f"Permission denied deleting {path}")
        except OSError as e:
            return Err(f"Error deleting {path}: {e}")
