"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, agentsync.toml only contains
overrides. Most repositories need no config file at all.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Literal

from pydantic import BaseModel, ValidationInfo, field_validator

DEFAULT_SOURCE_NAME = "AGENTS.md"
DEFAULT_NAMESPACE = ".claude"
DEFAULT_RULES_DIR = ".claude/rules/agents"

Strategy = Literal["auto", "git", "walk"]


def _normalize_relative(value: str, field_name: str) -> str:
    """Return *value* as a clean slash-separated relative path.

    Rejects absolute paths and ``..`` segments so the destination can
    never escape the repository root.
    """
    raw = value.replace("\\", "/").strip()
    path = PurePosixPath(raw)
    if not raw or path.is_absolute():
        msg = f"{field_name} must be a non-empty relative path, got {value!r}"
        raise ValueError(msg)
    if ".." in path.parts:
        msg = f"{field_name} must not contain '..', got {value!r}"
        raise ValueError(msg)
    normalized = path.as_posix()
    if normalized == ".":
        msg = f"{field_name} must name a subdirectory, got {value!r}"
        raise ValueError(msg)
    return normalized


class SyncConfig(BaseModel):
    """[sync] section."""

    model_config = {"frozen": True}

    source_name: str = DEFAULT_SOURCE_NAME
    namespace: str = DEFAULT_NAMESPACE
    rules_dir: str = DEFAULT_RULES_DIR
    strategy: Strategy = "auto"

    @field_validator("source_name")
    @classmethod
    def _plain_file_name(cls, value: str) -> str:
        if not value or "/" in value or "\\" in value or value in (".", ".."):
            msg = f"source_name must be a bare file name, got {value!r}"
            raise ValueError(msg)
        return value

    @field_validator("namespace", "rules_dir")
    @classmethod
    def _relative_dir(cls, value: str, info: ValidationInfo) -> str:
        return _normalize_relative(value, info.field_name or "path")

    @property
    def excluded_dirs(self) -> tuple[str, ...]:
        """Root-relative directories whose contents are never sources."""
        if self.rules_dir == self.namespace or self.rules_dir.startswith(f"{self.namespace}/"):
            return (self.namespace,)
        return (self.namespace, self.rules_dir)
