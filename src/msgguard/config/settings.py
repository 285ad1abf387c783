"""Unified settings — init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — passed by the host service
  2. Env vars     — ``MSGGUARD_*`` prefix
  3. TOML file    — ``msgguard.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`msgguard.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from msgguard.config.discovery import find_config, read_toml
from msgguard.config.models import MaskConfig, OutputConfig, PresenceConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``msgguard.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class GuardSettings(BaseSettings):
    """Unified settings for validators and arrangements.

    Attributes:
        config_path: TOML file the settings were read from, if any.
        verbose: DEBUG logging for the ``msgguard`` logger.
        log_json: JSON log lines instead of console output.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "MSGGUARD_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    verbose: bool = False
    log_json: bool = False

    mask: MaskConfig = Field(default_factory=MaskConfig)
    presence: PresenceConfig = Field(default_factory=PresenceConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

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
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        search_from: Path | None = None,
        **overrides: Any,
    ) -> GuardSettings:
        """Construct settings for a host service.

        Uses *config_path* when given, otherwise discovers ``msgguard.toml``
        walking up from *search_from*. *overrides* take highest priority.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(search_from)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None


_default_settings: GuardSettings | None = None
_default_lock = threading.Lock()


def get_settings() -> GuardSettings:
    """Return process-wide default settings, loading them on first use."""
    global _default_settings
    with _default_lock:
        if _default_settings is None:
            _default_settings = GuardSettings.load()
        return _default_settings


def reset_settings() -> None:
    """Forget cached default settings (tests, config reloads)."""
    global _default_settings
    with _default_lock:
        _default_settings = None
