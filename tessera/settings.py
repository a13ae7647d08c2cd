"""Generation settings for Tessera.

Defaults live in config/generation.yaml next to this file. A different file
can be passed to load_config(), and TESSERA_* environment variables (for
example from a .env file) override whatever the file says. Command line
flags are applied last, by the caller.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config" / "generation.yaml"
ENV_PREFIX = "TESSERA_"


class ConfigError(Exception):
    """Configuration file or environment could not be used."""

    pass


class GenerationConfig(BaseModel):
    """Settings for a synthesis run and the viewer."""

    model_config = ConfigDict(frozen=True)

    radius: int = Field(default=2, ge=1)
    width: int = Field(default=32, ge=1)
    height: int = Field(default=32, ge=1)
    seed: int = Field(default=0, ge=0, lt=2**64)
    max_retries: int = Field(default=0, ge=0)
    data_dir: Path = Path("data")
    auto_step_interval: float = Field(default=0.02, gt=0)

    def with_overrides(self, **overrides: object) -> GenerationConfig:
        """Return a new config with non-None overrides applied (and validated)."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return self
        try:
            return GenerationConfig.model_validate({**self.model_dump(), **updates})
        except ValidationError as e:
            raise ConfigError(f"Invalid setting: {e}") from e


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    overrides = {}
    for name in GenerationConfig.model_fields:
        key = f"{ENV_PREFIX}{name.upper()}"
        if key in environ and environ[key] != "":
            overrides[name] = environ[key]
    return overrides


def load_config(
    path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> GenerationConfig:
    """Load generation settings.

    Args:
        path: YAML settings file. If None, uses the packaged defaults.
        environ: Environment to read TESSERA_* overrides from (default: os.environ)

    Returns:
        The validated settings

    Raises:
        ConfigError: If the file is missing, malformed or has invalid values
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping")

    # Settings may sit at the top level or under a "generation" key
    if "generation" in data:
        data = data["generation"] or {}

    data.update(_env_overrides(os.environ if environ is None else environ))

    try:
        return GenerationConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {config_path}: {e}") from e
