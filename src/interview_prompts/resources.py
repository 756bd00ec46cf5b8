from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict

from .constants import CONFIG_SCHEMA_FILENAME, DEFAULT_CONFIG_FILENAME

_PACKAGE = "interview_prompts"


def _read_text(name: str) -> str:
    return resources.files(_PACKAGE).joinpath("schemas").joinpath(name).read_text(encoding="utf-8")


def _read_json(name: str) -> Dict[str, Any]:
    return json.loads(_read_text(name))


def load_default_config_doc() -> Dict[str, Any]:
    return _read_json(DEFAULT_CONFIG_FILENAME)


def load_config_schema() -> Dict[str, Any]:
    return _read_json(CONFIG_SCHEMA_FILENAME)


def ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
