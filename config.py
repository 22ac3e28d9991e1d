"""
Environment configuration. Values come from the process environment, with a
.env file (project dir, module dir, then cwd) loaded first if present.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_MODEL = "gpt-5.1"
DEFAULT_LOG_LEVEL = "INFO"


def _load_env_from_project(project_dir: str | Path | None) -> None:
    candidates = [Path(__file__).resolve().parent, Path.cwd()]
    if project_dir is not None:
        candidates.insert(0, Path(project_dir))
    for d in candidates:
        env_file = d / ".env"
        if env_file.exists():
            load_dotenv(env_file)
            return


@dataclass(frozen=True)
class Settings:
    openai_api_key: str | None
    openai_model: str = DEFAULT_MODEL
    log_level: str = DEFAULT_LOG_LEVEL


def _clean_api_key(key: str | None) -> str | None:
    if key and key.strip() and not key.strip().startswith("sk-your"):
        return key.strip()
    return None


def get_settings(project_dir: str | Path | None = None) -> Settings:
    _load_env_from_project(project_dir)
    return Settings(
        openai_api_key=_clean_api_key(os.getenv("OPENAI_API_KEY")),
        openai_model=(os.getenv("OPENAI_MODEL") or DEFAULT_MODEL).strip(),
        log_level=(os.getenv("FLEET_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper(),
    )
