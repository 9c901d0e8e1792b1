"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  (CLI flags passed by Click)
  2. Env vars     (``AGENTSYNC_*`` prefix, ``__`` for nested sections)
  3. TOML file    (``agentsync.toml`` discovered via walk-up)
  4. Code defaults baked into the section models

The repository root is resolved once here, by the repository locator, and
travels with the frozen settings object into every component.
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from agentsync.config.discovery import find_config
from agentsync.config.models import SyncConfig
from agentsync.infrastructure.repository import locate_repository_root

# Any non-empty value turns on verbose tracing.
TRACE_ENV_VAR = "DEBUG"


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``agentsync.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


def trace_requested() -> bool:
    """Whether the ``DEBUG`` environment toggle is set."""
    return bool(os.environ.get(TRACE_ENV_VAR))


class SyncSettings(BaseSettings):
    """Unified settings for one agentsync run.

    Stored in ``click.Context.obj`` at the CLI root level and passed to the
    service layer as an immutable value.

    Attributes:
        repo_root: Repository root used for every relative computation.
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "AGENTSYNC_",
        "env_nested_delimiter": "__",
    }

    repo_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    sync: SyncConfig = Field(default_factory=SyncConfig)

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

    @property
    def rules_root(self) -> Path:
        """Absolute destination directory for generated rules."""
        return self.repo_root / self.sync.rules_dir

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        repo_root: Path | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> SyncSettings:
        """Construct settings from a CLI invocation.

        Resolves *repo_root* with the repository locator (unless given),
        discovers ``agentsync.toml`` via walk-up from *cwd* to the root (or
        uses the explicit *config_path*), and merges CLI flags as highest-priority
        overrides. The ``DEBUG`` env toggle forces ``verbose``.
        """
        start = (cwd or Path.cwd()).resolve()
        resolved_root = repo_root.resolve() if repo_root else locate_repository_root(start)

        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start, stop_at=resolved_root)

        if trace_requested():
            cli_flags["verbose"] = True

        _tls.toml_path = toml_path
        try:
            return cls(
                repo_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
