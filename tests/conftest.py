"""Shared pytest fixtures and test helpers for agentsync tests."""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from agentsync.config.models import SyncConfig
from agentsync.config.settings import SyncSettings

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git binary not available")


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep tests independent of the developer's shell and enclosing repos.

    Git must never discover a repository above ``tmp_path``, and
    ``DEBUG`` / ``AGENTSYNC_*`` variables must not leak into settings.
    """
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.resolve().parent))
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("AGENTSYNC_CONFIG", raising=False)
    monkeypatch.delenv("AGENTSYNC_SYNC__STRATEGY", raising=False)
    monkeypatch.delenv("AGENTSYNC_SYNC__RULES_DIR", raising=False)

    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    pkg_logger = logging.getLogger("agentsync")
    pkg_level = pkg_logger.level
    yield
    # CLI runs point the log handler at a stream CliRunner has since closed.
    root_logger.handlers = handlers
    root_logger.setLevel(level)
    pkg_logger.setLevel(pkg_level)
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def plain_root(tmp_path: Path) -> Path:
    """A directory tree with no version control."""
    root = tmp_path.resolve() / "plain"
    root.mkdir()
    return root


@pytest.fixture
def git_root(tmp_path: Path) -> Path:
    """A freshly initialized git repository with one commit."""
    root = tmp_path.resolve() / "repo"
    root.mkdir()
    init_repo(root)
    return root


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def git(cwd: Path, *args: str) -> subprocess.CompletedProcess[str]:
    """Run git in *cwd*, asserting success."""
    return subprocess.run(
        ["git", "-c", "commit.gpgsign=false", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )


def init_repo(root: Path) -> None:
    """Initialize *root* as a git repository with an initial commit."""
    git(root, "init")
    git(root, "config", "user.email", "test@test.com")
    git(root, "config", "user.name", "Test")
    (root / ".keep").write_text("", encoding="utf-8")
    git(root, "add", ".keep")
    git(root, "commit", "-m", "init")


def write(path: Path, content: str) -> Path:
    """Write *content* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def make_settings(root: Path, **sync: str) -> SyncSettings:
    """Settings rooted at *root* with optional ``[sync]`` overrides."""
    return SyncSettings(repo_root=root, sync=SyncConfig(**sync))


def rule_files(root: Path, rules_dir: str = ".claude/rules/agents") -> dict[str, bytes]:
    """Map each file under the rules directory (relative path) to its bytes."""
    base = root / rules_dir
    return {
        p.relative_to(base).as_posix(): p.read_bytes()
        for p in sorted(base.rglob("*"))
        if p.is_file()
    }
