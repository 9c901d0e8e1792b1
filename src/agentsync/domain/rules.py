"""Rule documents: a ``paths`` frontmatter block followed by the source body.

Rendered form::

    ---
    paths:
      - "src/api/**/*"
    ---

    <source content, unmodified>

Building the logical document (:class:`RuleDocument`) is kept apart from
serializing it (:func:`render_rule`) so the format can be tested on its own.
"""

from __future__ import annotations

from io import StringIO

from pydantic import BaseModel, Field
from ruamel.yaml import YAML
from ruamel.yaml.scalarstring import DoubleQuotedScalarString

FRONTMATTER_DELIMITER = "---"
PATHS_KEY = "paths"

_OPEN = f"{FRONTMATTER_DELIMITER}\n"
_CLOSE = f"\n{FRONTMATTER_DELIMITER}\n"


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML instance.

    ruamel.yaml's YAML object is stateful, so each render or parse gets
    its own.
    """
    y = YAML()
    y.default_flow_style = False
    y.indent(mapping=2, sequence=4, offset=2)
    # Never fold long patterns onto continuation lines.
    y.width = 4096
    return y


class RuleDocument(BaseModel):
    """A path-scoped rule: glob patterns plus the verbatim source body."""

    model_config = {"frozen": True}

    paths: list[str] = Field(min_length=1)
    body: str = ""


def build_rule(pattern: str, body: str) -> RuleDocument:
    """Assemble the rule for one source file."""
    return RuleDocument(paths=[pattern], body=body)


def render_frontmatter(paths: list[str]) -> str:
    """Render the delimited header block, ending with the closing delimiter line."""
    buf = StringIO()
    _new_yaml().dump({PATHS_KEY: [DoubleQuotedScalarString(p) for p in paths]}, buf)
    return f"{_OPEN}{buf.getvalue()}{FRONTMATTER_DELIMITER}\n"


def render_rule(document: RuleDocument) -> str:
    """Serialize *document*: header, one blank line, then the body as-is.

    No trailing newline is added to a body that lacks one.
    """
    return f"{render_frontmatter(document.paths)}\n{document.body}"


def parse_rule(text: str) -> RuleDocument:
    """Read a rendered rule back into a :class:`RuleDocument`.

    Raises:
        ValueError: If the frontmatter delimiters or the ``paths`` key
            are missing.
    """
    if not text.startswith(_OPEN):
        msg = "Rule document does not start with a frontmatter delimiter"
        raise ValueError(msg)

    end = text.find(_CLOSE, len(_OPEN) - 1)
    if end == -1:
        msg = "Rule document has no closing frontmatter delimiter"
        raise ValueError(msg)

    yaml_block = text[len(_OPEN) : end]
    body = text[end + len(_CLOSE) :]
    if body.startswith("\n"):
        body = body[1:]

    data = _new_yaml().load(yaml_block) or {}
    paths = data.get(PATHS_KEY) if hasattr(data, "get") else None
    if not paths:
        msg = f"Rule frontmatter has no {PATHS_KEY!r} entries"
        raise ValueError(msg)
    return RuleDocument(paths=[str(p) for p in paths], body=body)
