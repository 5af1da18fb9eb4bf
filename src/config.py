"""Settings for the itinerary map generator.

Everything is read from the environment; a .env file at the project root
is loaded on import. Getters are re-evaluated on every call so tests can
monkeypatch the environment.

Variables:
    GEMINI_API_KEY          required for any generation
    TRAVEL_MAP_TEXT_MODEL   location extraction model
    TRAVEL_MAP_IMAGE_MODEL  background and character model
    TRAVEL_MAP_RUNS_DIR     base directory for CLI output
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

SRC_DIR = Path(__file__).parent.resolve()
PROJECT_ROOT = SRC_DIR.parent.resolve()

_env_path = PROJECT_ROOT / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_RUNS_DIR = PROJECT_ROOT / "output" / "runs"


def get_env(key: str, default: Optional[str] = None) -> str:
    """Read an environment variable.

    Empty values count as unset.

    Raises:
        KeyError: If the variable is unset and no default is given
    """
    value = os.environ.get(key, "").strip()
    if value:
        return value
    if default is not None:
        return default
    raise KeyError(f"Environment variable '{key}' not set and no default provided")


def get_gemini_api_key() -> str:
    return get_env("GEMINI_API_KEY")


def get_text_model() -> str:
    """Model used for location extraction."""
    return get_env("TRAVEL_MAP_TEXT_MODEL", default=DEFAULT_TEXT_MODEL)


def get_image_model() -> str:
    """Model used for background and character images."""
    return get_env("TRAVEL_MAP_IMAGE_MODEL", default=DEFAULT_IMAGE_MODEL)


def get_runs_dir() -> Path:
    """Base directory for CLI run output."""
    return Path(get_env("TRAVEL_MAP_RUNS_DIR", default=str(DEFAULT_RUNS_DIR)))
