"""Helpers for mapping URL paths and content identifiers onto the filesystem."""

from __future__ import annotations

from pathlib import Path, PurePosixPath


class InvalidIdentifierError(ValueError):
    """Raised when a content identifier would resolve outside its root."""


def resolve_file_path(url_path: str | Path, extension: str) -> Path:
    """Resolve a URL path to either the named file or the index in the named folder.

    ``<url_path>/index.<extension>`` is returned when ``<url_path>.<extension>``
    does not exist; the fallback itself is not checked.
    """
    ext = extension.lstrip(".")
    base = Path(url_path)
    candidate = Path(f"{base}.{ext}")
    if candidate.exists():
        return candidate
    return base / f"index.{ext}"


def join_identifier(root: Path, identifier: str) -> Path:
    """Join a relative identifier onto ``root``, refusing paths that escape it."""
    if not identifier or not identifier.strip():
        raise InvalidIdentifierError("Content identifier must not be empty.")
    relative = PurePosixPath(identifier.replace("\\", "/"))
    if relative.is_absolute() or Path(identifier).is_absolute():
        raise InvalidIdentifierError(f"Content identifier must be relative: {identifier!r}")

    depth = 0
    for part in relative.parts:
        if part == "..":
            depth -= 1
        elif part != ".":
            depth += 1
        if depth < 0:
            raise InvalidIdentifierError(f"Content identifier escapes its root: {identifier!r}")
    if depth == 0:
        raise InvalidIdentifierError(f"Content identifier does not name a file: {identifier!r}")
    return root.joinpath(*relative.parts)
