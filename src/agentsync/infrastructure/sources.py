"""Source enumeration: find every convention file a run should publish.

Two interchangeable strategies implement one capability, ``find(root)``:

- :class:`GitSourceFinder` asks git for tracked files plus untracked files
  that are not ignored. Git never descends into a nested repository, so
  its convention files stay invisible to the parent run.
- :class:`WalkSourceFinder` walks the directory tree. Ignore files are not
  honored in this mode. Nested repositories are pruned explicitly.

Both exclude the destination namespace so generated rules are never read
back as sources.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path, PurePosixPath
from typing import Protocol

from agentsync.config.models import SyncConfig
from agentsync.infrastructure.repository import is_git_repository, run_git

logger = logging.getLogger(__name__)

GIT_DIR_NAME = ".git"


class SourceFinder(Protocol):
    """Lists candidate convention files under a repository root."""

    name: str

    def find(self, root: Path) -> list[Path]: ...


def is_excluded(relative: str, excluded_dirs: tuple[str, ...]) -> bool:
    """Whether root-relative *relative* lies inside one of *excluded_dirs*."""
    return any(relative == d or relative.startswith(f"{d}/") for d in excluded_dirs)


def _sorted_unique(root: Path, relatives: set[str]) -> list[Path]:
    return [root / PurePosixPath(rel) for rel in sorted(relatives)]


class GitSourceFinder:
    """Tracked plus untracked-but-not-ignored files, via ``git ls-files``."""

    name = "git"

    def __init__(self, config: SyncConfig) -> None:
        self._config = config

    def _pathspecs(self) -> tuple[str, ...]:
        file_name = self._config.source_name
        return (file_name, f"*/{file_name}")

    def _ls_files(self, root: Path, *extra: str) -> list[str]:
        result = run_git(root, "ls-files", "-z", *extra, "--", *self._pathspecs())
        return [entry for entry in result.stdout.split("\0") if entry]

    def find(self, root: Path) -> list[Path]:
        """Return convention files known to git. Raises if git fails."""
        tracked = self._ls_files(root)
        untracked = self._ls_files(root, "--others", "--exclude-standard")

        relatives: set[str] = set()
        for entry in (*tracked, *untracked):
            if PurePosixPath(entry).name != self._config.source_name:
                continue
            if is_excluded(entry, self._config.excluded_dirs):
                continue
            # Tracked but deleted in the working tree.
            if not (root / entry).is_file():
                logger.debug("Skipping %s: listed by git but missing on disk", entry)
                continue
            relatives.add(entry)
        return _sorted_unique(root, relatives)


class WalkSourceFinder:
    """Recursive directory walk for trees without version control."""

    name = "walk"

    def __init__(self, config: SyncConfig) -> None:
        self._config = config

    def _prune(self, root: Path, dirpath: Path, dirnames: list[str]) -> None:
        kept: list[str] = []
        for dirname in dirnames:
            if dirname == GIT_DIR_NAME:
                continue
            candidate = dirpath / dirname
            relative = candidate.relative_to(root).as_posix()
            if is_excluded(relative, self._config.excluded_dirs):
                continue
            if (candidate / GIT_DIR_NAME).exists():
                logger.debug("Not descending into nested repository %s", relative)
                continue
            kept.append(dirname)
        dirnames[:] = kept

    def find(self, root: Path) -> list[Path]:
        """Return every convention file under *root*."""
        file_name = self._config.source_name
        relatives: set[str] = set()
        for dirpath, dirnames, filenames in root.walk():
            self._prune(root, dirpath, dirnames)
            if file_name in filenames and (dirpath / file_name).is_file():
                relatives.add((dirpath / file_name).relative_to(root).as_posix())
        return _sorted_unique(root, relatives)


def select_finder(root: Path, config: SyncConfig) -> SourceFinder:
    """Pick the enumeration strategy once per run."""
    if config.strategy == "git":
        return GitSourceFinder(config)
    if config.strategy == "walk":
        return WalkSourceFinder(config)
    if is_git_repository(root):
        return GitSourceFinder(config)
    return WalkSourceFinder(config)


def discover_sources(root: Path, config: SyncConfig) -> tuple[str, list[Path]]:
    """Return ``(strategy_name, sources)`` for *root*.

    A git failure during listing falls back to the directory walk instead
    of aborting the run.
    """
    finder = select_finder(root, config)
    try:
        return finder.name, finder.find(root)
    except (OSError, subprocess.CalledProcessError) as exc:
        if not isinstance(finder, GitSourceFinder):
            raise
        logger.warning("git ls-files failed, falling back to directory walk: %s", exc)
        fallback = WalkSourceFinder(config)
        return fallback.name, fallback.find(root)
