"""
Tool settings loaded from YAML, falling back to JSON for other suffixes.
"""

from __future__ import annotations

import json
import os
import pathlib
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from .errors import SettingsError

ENV_FILE_VARIABLE = "YDJS_ENV_FILE"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoaderSettings(BaseModel):
    """Settings for the `ydjs-env` command line tool."""

    env_file: str = ".env"
    interactive: bool = True
    default_delimiter: str = ";"
    log_level: str = "WARNING"
    audit_log: Optional[str] = None

    @field_validator("env_file")
    @classmethod
    def _env_file_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("env_file must not be blank")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


def load_config(path: str | pathlib.Path) -> Dict[str, Any]:
    path = pathlib.Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsError(f"cannot read settings file {path}: {exc}") from exc
    try:
        if path.suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SettingsError(f"cannot parse settings file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"settings file {path} must contain a mapping")
    return data


def load_settings(path: Optional[str | pathlib.Path] = None) -> LoaderSettings:
    """
    Build settings from an optional file, then let YDJS_ENV_FILE pick the env
    file when the settings file does not name one.
    """
    data: Dict[str, Any] = load_config(path) if path is not None else {}
    if "env_file" not in data and os.environ.get(ENV_FILE_VARIABLE):
        data["env_file"] = os.environ[ENV_FILE_VARIABLE]
    try:
        return LoaderSettings.model_validate(data)
    except ValidationError as exc:
        raise SettingsError(f"invalid settings: {exc}") from exc
