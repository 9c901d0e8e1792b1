"""Path mapping from a source file's location to its rule location.

A source at ``<root>/src/api/AGENTS.md`` has relative directory
``src/api``, applies to ``src/api/**/*``, and is published at
``<rules_dir>/src/api/AGENTS.md``. A source at the root has relative
directory ``"."``, applies to ``**/*``, and is published directly under
``<rules_dir>``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

ROOT_RELATIVE_DIR = "."
ROOT_PATTERN = "**/*"
_PATTERN_SUFFIX = "/**/*"

# Characters with meaning in glob syntax.
GLOB_METACHARACTERS = frozenset("*?[]{}!")


@dataclass(frozen=True)
class RuleLocation:
    """Where one source file's rule goes and which files it applies to."""

    source: Path
    relative_dir: str
    pattern: str
    output_path: Path

    @property
    def is_root(self) -> bool:
        return self.relative_dir == ROOT_RELATIVE_DIR


def relative_dir_for(root: Path, source: Path) -> str:
    """Return the source's directory relative to *root*, slash-separated.

    Returns ``"."`` for a source directly in *root*.

    Raises:
        ValueError: If *source* is not inside *root*.
    """
    directory = source.parent
    if directory == root:
        return ROOT_RELATIVE_DIR
    if not directory.is_relative_to(root):
        msg = f"Source file {source} is outside repository root {root}"
        raise ValueError(msg)
    return directory.relative_to(root).as_posix()


def pattern_for(relative_dir: str) -> str:
    """Glob pattern matching every file at or below *relative_dir*."""
    if relative_dir == ROOT_RELATIVE_DIR:
        return ROOT_PATTERN
    return f"{relative_dir}{_PATTERN_SUFFIX}"


def has_glob_metacharacters(relative_dir: str) -> bool:
    """Whether a directory path would be read as more than a literal by a glob matcher."""
    return any(ch in GLOB_METACHARACTERS for ch in relative_dir)


def map_source(root: Path, source: Path, rules_root: Path, file_name: str) -> RuleLocation:
    """Compute the :class:`RuleLocation` for *source*.

    Args:
        root: Repository root.
        source: Absolute path of the convention file.
        rules_root: Absolute destination directory.
        file_name: Name given to the published rule file.
    """
    relative_dir = relative_dir_for(root, source)
    if relative_dir == ROOT_RELATIVE_DIR:
        output_dir = rules_root
    else:
        output_dir = rules_root.joinpath(*relative_dir.split("/"))
    return RuleLocation(
        source=source,
        relative_dir=relative_dir,
        pattern=pattern_for(relative_dir),
        output_path=output_dir / file_name,
    )
