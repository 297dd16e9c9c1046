"""Global configuration storage for caseflow.

Stores user settings in ~/.caseflow/config.json. Set CASEFLOW_HOME to use
another directory.
"""

import json
import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ValidationError

HOME_ENV = "CASEFLOW_HOME"


class Settings(BaseModel):
    """User settings."""

    data_dir: Optional[str] = None  # defaults to <config dir>/data
    generator: Literal["template", "ollama"] = "template"
    ollama_model: str = "qwen2.5:7b"
    cancelled_satisfies_done: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"


def get_config_dir() -> Path:
    """Get the caseflow config directory."""
    config_dir = Path(os.environ.get(HOME_ENV) or Path.home() / ".caseflow")
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_data_dir(settings: Settings | None = None) -> Path:
    """Directory case files are stored under."""
    settings = settings or get_global_config()
    if settings.data_dir:
        return Path(settings.data_dir).expanduser()
    return get_config_dir() / "data"


def get_global_config() -> Settings:
    """Load settings, falling back to defaults when missing or invalid."""
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return Settings(**data)
        except (json.JSONDecodeError, ValidationError, TypeError):
            pass
    return Settings()  # defaults


def save_global_config(settings: Settings) -> None:
    """Save settings."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(settings.model_dump(), indent=2),
        encoding="utf-8",
    )


def get_last_case_id() -> Optional[str]:
    """Get the last used case ID."""
    config_file = get_config_dir() / "last_case.txt"
    if config_file.exists():
        return config_file.read_text(encoding="utf-8").strip() or None
    return None


def save_last_case_id(case_id: str) -> None:
    """Save the last used case ID."""
    config_file = get_config_dir() / "last_case.txt"
    config_file.write_text(case_id, encoding="utf-8")
