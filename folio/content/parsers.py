"""Split raw documents into YAML front matter and body text."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .models import ParsedDocument

DELIMITER = "---"


class FrontMatterError(ValueError):
    """Raised when a document has malformed front matter."""


def parse_document(raw: str | bytes) -> ParsedDocument:
    """Separate the leading ``---`` metadata block from the document body.

    Documents without an opening delimiter are returned untouched with empty
    front matter.
    """
    text = _decode(raw)
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != DELIMITER:
        return ParsedDocument(front_matter={}, body=text)

    front_lines: list[str] = []
    for idx, line in enumerate(lines[1:], start=1):
        if line.strip() == DELIMITER:
            front_matter = _load_front_matter("".join(front_lines))
            body = "".join(lines[idx + 1 :])
            return ParsedDocument(front_matter=front_matter, body=body)
        front_lines.append(line)
    raise FrontMatterError("Closing front matter delimiter '---' missing.")


def load_document(path: str | Path) -> ParsedDocument:
    """Read a file from disk and parse its front matter."""
    source_path = Path(path)
    try:
        return parse_document(source_path.read_bytes())
    except FrontMatterError as exc:
        raise FrontMatterError(f"{source_path}: {exc}") from exc


def _decode(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        text = raw.decode("utf-8")
    else:
        text = raw
    return text.removeprefix("\ufeff")


def _load_front_matter(raw_front_matter: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(raw_front_matter)
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid YAML in front matter: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front matter must define a mapping, got {type(data).__name__}"
        )
    return data
