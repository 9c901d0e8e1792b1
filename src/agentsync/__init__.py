"""agentsync: publish AGENTS.md files as path-scoped rule files."""

__version__ = "0.1.0"
