"""SyncService: publish every convention file as a path-scoped rule.

Pipeline, in order:
  1. Reset the destination tree (once, before any write).
  2. Discover sources with the strategy chosen for the repository root.
  3. For each source: map its location, render the rule, write it.

Per-file failures abort the run. Rules written earlier in the same run
stay on disk; the next successful run replaces them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from agentsync.config.settings import SyncSettings
from agentsync.domain.paths import RuleLocation, has_glob_metacharacters, map_source
from agentsync.domain.rules import build_rule, render_rule
from agentsync.infrastructure.sources import discover_sources
from agentsync.infrastructure.writer import read_source, reset_destination, write_rule
from agentsync.services.result import ServiceError, ServiceResult

logger = structlog.get_logger(__name__)


class SyncService:
    """Runs the discovery-and-publish pipeline for one repository root."""

    def __init__(self, settings: SyncSettings) -> None:
        self._settings = settings

    @property
    def _root(self) -> Path:
        return self._settings.repo_root

    def _relative(self, path: Path) -> str:
        return path.relative_to(self._root).as_posix()

    def _locate(self, warnings: list[str]) -> tuple[str, list[RuleLocation]]:
        config = self._settings.sync
        strategy, sources = discover_sources(self._root, config)
        logger.debug("sources_discovered", strategy=strategy, count=len(sources))

        locations: list[RuleLocation] = []
        for source in sources:
            location = map_source(
                self._root, source, self._settings.rules_root, config.source_name
            )
            if has_glob_metacharacters(location.relative_dir):
                msg = (
                    f"Directory {location.relative_dir!r} contains glob metacharacters; "
                    f"pattern {location.pattern!r} is written verbatim"
                )
                logger.warning("glob_metacharacters_in_path", relative_dir=location.relative_dir)
                warnings.append(msg)
            locations.append(location)
        return strategy, locations

    def _entry(self, location: RuleLocation) -> dict[str, Any]:
        return {
            "source": self._relative(location.source),
            "pattern": location.pattern,
            "output": self._relative(location.output_path),
        }

    def _payload(self, strategy: str, entries: list[dict[str, Any]]) -> dict[str, Any]:
        return {
            "root": str(self._root),
            "strategy": strategy,
            "rules_dir": self._settings.sync.rules_dir,
            "count": len(entries),
            "rules": entries,
        }

    def plan(self) -> ServiceResult:
        """Discover and map sources without touching the destination."""
        warnings: list[str] = []
        try:
            strategy, locations = self._locate(warnings)
        except OSError as exc:
            return _failure("plan", "discovery_failed", f"Cannot enumerate sources: {exc}")
        entries = [self._entry(loc) for loc in locations]
        return ServiceResult(
            ok=True,
            op="plan",
            data=self._payload(strategy, entries),
            warnings=warnings,
        )

    def sync(self) -> ServiceResult:
        """Rebuild the destination tree from the current sources."""
        warnings: list[str] = []
        rules_root = self._settings.rules_root

        try:
            reset_destination(rules_root)
        except OSError as exc:
            return _failure(
                "sync",
                "destination_failed",
                f"Cannot recreate {rules_root}: {exc}",
                path=str(rules_root),
            )

        try:
            strategy, locations = self._locate(warnings)
        except OSError as exc:
            return _failure("sync", "discovery_failed", f"Cannot enumerate sources: {exc}")

        entries: list[dict[str, Any]] = []
        for location in locations:
            try:
                body = read_source(location.source)
            except OSError as exc:
                return _failure(
                    "sync",
                    "source_unreadable",
                    f"Cannot read {location.source}: {exc}",
                    path=str(location.source),
                    written=len(entries),
                )

            text = render_rule(build_rule(location.pattern, body))
            try:
                write_rule(location.output_path, text)
            except OSError as exc:
                return _failure(
                    "sync",
                    "write_failed",
                    f"Cannot write {location.output_path}: {exc}",
                    path=str(location.output_path),
                    written=len(entries),
                )

            logger.debug(
                "rule_written",
                source=self._relative(location.source),
                pattern=location.pattern,
            )
            entries.append(self._entry(location))

        logger.debug("sync_complete", strategy=strategy, count=len(entries))
        return ServiceResult(
            ok=True,
            op="sync",
            data=self._payload(strategy, entries),
            warnings=warnings,
        )


def _failure(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
    logger.error(code, message=message, **detail)
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=detail),
    )
