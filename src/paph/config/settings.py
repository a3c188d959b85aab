"""Unified settings — keyword overrides, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — overrides passed to :meth:`PaphSettings.load`
  2. Env vars     — ``PAPH_*`` prefix, ``__`` for nested sections
  3. TOML file    — explicit ``config_path`` or the ``PAPH_CONFIG`` env var
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource`.
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from paph.config.models import CacheConfig, SearchConfig
from paph.domain.errors import InvalidConfigError

CONFIG_ENV_VAR = "PAPH_CONFIG"


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``paph.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise InvalidConfigError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class PaphSettings(BaseSettings):
    """Settings for a paph instance, frozen after construction.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        verbose: Enable debug logging and span telemetry.
        log_json: Render logs as JSON lines instead of console output.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PAPH_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    verbose: bool = False
    log_json: bool = False

    search: SearchConfig = Field(default_factory=SearchConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(cls, config_path: str | Path | None = None, **overrides: Any) -> PaphSettings:
        """Construct settings, reading *config_path* or ``$PAPH_CONFIG`` if set.

        A path that does not point at a file is ignored.
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR) or None

        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
