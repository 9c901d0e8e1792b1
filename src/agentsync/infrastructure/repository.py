"""Repository locator: which directory every relative path is measured from.

All git subprocess calls go through :func:`run_git`. A missing git binary
or a non-repository directory is never an error here; callers get a
fallback answer instead.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def run_git(cwd: Path, *args: str) -> subprocess.CompletedProcess[str]:
    """Run a git command in *cwd*. Raises on failure.

    Output is decoded with ``surrogateescape`` so path names that are not
    valid UTF-8 map back to the same bytes on disk.
    """
    return subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        encoding="utf-8",
        errors="surrogateescape",
        check=True,
    )


def locate_repository_root(cwd: Path | None = None) -> Path:
    """Return the top-level directory of the repository containing *cwd*.

    Falls back to *cwd* itself (default: the process working directory)
    when it is not inside a git work tree or git is unavailable.
    """
    start = (cwd or Path.cwd()).resolve()
    try:
        result = run_git(start, "rev-parse", "--show-toplevel")
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.debug("git rev-parse --show-toplevel failed, using %s: %s", start, exc)
        return start

    toplevel = result.stdout.rstrip("\n")
    if not toplevel:
        return start
    return Path(toplevel).resolve()


def is_git_repository(root: Path) -> bool:
    """Whether *root* is inside a git work tree."""
    try:
        run_git(root, "rev-parse", "--git-dir")
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.debug("git rev-parse --git-dir failed in %s: %s", root, exc)
        return False
    return True
