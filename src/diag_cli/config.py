"""Persistent defaults for the ``diag`` command line.

Values live in ``~/.diag/config.json`` and can be overridden per shell with
``DIAG_OUTPUT_FORMAT``, ``DIAG_COMPLETE_MISSING`` and ``DIAG_REJECT_DUPLICATES``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DiagCLIConfig(BaseSettings):
    """Defaults applied by ``diag grade`` when no flag overrides them."""

    model_config = SettingsConfigDict(env_prefix="DIAG_")

    output_format: Literal["table", "json"] = Field(
        default="table", description="How grade results are printed"
    )
    complete_missing: bool = Field(
        default=True, description="Grade catalogue obligations absent from the file as not started"
    )
    reject_duplicates: bool = Field(
        default=True, description="Fail when a file holds two findings for one obligation"
    )


class ConfigManager:
    """Read and update the CLI config file."""

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path or Path.home() / ".diag" / "config.json"

    def load(self) -> DiagCLIConfig:
        if not self.config_path.exists():
            return DiagCLIConfig()
        return DiagCLIConfig(**json.loads(self.config_path.read_text()))

    def save(self, config: DiagCLIConfig) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(json.dumps(config.model_dump(), indent=2))

    def get(self, key: str) -> Any:
        return getattr(self.load(), key, None)

    def set(self, key: str, value: str) -> DiagCLIConfig:
        """Validate ``key = value`` against the config model and persist it.

        Booleans accept the usual text forms (``true``/``false``, ``yes``/``no``,
        ``on``/``off``, ``1``/``0``). Nothing is written when validation fails.

        Raises:
            KeyError: If ``key`` is not a config field.
            pydantic.ValidationError: If ``value`` is not valid for ``key``.
        """
        if key not in DiagCLIConfig.model_fields:
            raise KeyError(key)
        current = self.load()
        updated = DiagCLIConfig(**{**current.model_dump(), key: value.strip()})
        self.save(updated)
        return updated
