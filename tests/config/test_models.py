"""Tests for configuration models and their validation."""

import pytest
from pydantic import ValidationError

from agentsync.config.models import SyncConfig


class TestSyncConfigDefaults:
    def test_defaults(self) -> None:
        cfg = SyncConfig()
        assert cfg.source_name == "AGENTS.md"
        assert cfg.namespace == ".claude"
        assert cfg.rules_dir == ".claude/rules/agents"
        assert cfg.strategy == "auto"

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            SyncConfig().strategy = "walk"  # type: ignore[misc]


class TestSyncConfigValidation:
    @pytest.mark.parametrize("value", ["/abs/rules", "../outside", "a/../../b", "", "."])
    def test_rejects_unsafe_rules_dir(self, value: str) -> None:
        with pytest.raises(ValidationError):
            SyncConfig(rules_dir=value)

    def test_normalizes_separators(self) -> None:
        assert SyncConfig(rules_dir="out\\rules\\").rules_dir == "out/rules"

    @pytest.mark.parametrize("value", ["", "docs/AGENTS.md", "..", "a\\b"])
    def test_rejects_non_file_source_name(self, value: str) -> None:
        with pytest.raises(ValidationError):
            SyncConfig(source_name=value)

    def test_rejects_unknown_strategy(self) -> None:
        with pytest.raises(ValidationError):
            SyncConfig(strategy="svn")  # type: ignore[arg-type]


class TestExcludedDirs:
    def test_rules_inside_namespace(self) -> None:
        assert SyncConfig().excluded_dirs == (".claude",)

    def test_rules_outside_namespace(self) -> None:
        cfg = SyncConfig(rules_dir="generated/rules")
        assert cfg.excluded_dirs == (".claude", "generated/rules")

    def test_namespace_prefix_is_not_parent(self) -> None:
        cfg = SyncConfig(rules_dir=".claude-rules")
        assert cfg.excluded_dirs == (".claude", ".claude-rules")
