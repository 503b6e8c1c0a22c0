"""Content sources the cache falls back to on a miss."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from .paths import join_identifier

logger = logging.getLogger(__name__)


@runtime_checkable
class ContentSource(Protocol):
    """Anything that can return the bytes stored under an identifier.

    Implementations raise ``FileNotFoundError`` for unknown identifiers and
    ``OSError`` (or their own exception types) for transport failures.
    """

    def read_file(self, identifier: str) -> bytes: ...


class DirectorySource:
    """Serve content from a local directory, e.g. a checkout of the publication repository."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def read_file(self, identifier: str) -> bytes:
        path = join_identifier(self._root, identifier)
        logger.debug("Reading %s from %s", identifier, self._root)
        return path.read_bytes()

    def __repr__(self) -> str:
        return f"DirectorySource({str(self._root)!r})"
