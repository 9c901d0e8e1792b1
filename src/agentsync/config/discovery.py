"""Config file discovery.

Walk-up finder locates agentsync.toml, similar to how git finds .git/,
but never looks above the repository root: configuration belongs to the
repository being synced. AGENTSYNC_CONFIG env var and the --config CLI
flag override discovery.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "agentsync.toml"
CONFIG_ENV_VAR = "AGENTSYNC_CONFIG"


def find_config(start: Path | None = None, stop_at: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for agentsync.toml.

    The walk ends after checking *stop_at* when given, otherwise at the
    filesystem root. Returns the path to the config file, or None if not
    found. Checks AGENTSYNC_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    boundary = stop_at.resolve() if stop_at else None
    if boundary is not None and not current.is_relative_to(boundary):
        boundary = None

    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current == boundary or current.parent == current:
            return None
        current = current.parent
