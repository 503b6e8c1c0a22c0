"""Write-through file cache in front of a content source.

Cache structure mirrors the identifiers handed to the source:
    .cache/content/
    ├── _data/
    │   └── categories.yml
    └── posts/
        └── 2020-01-01-hello.md

Entries are written once on a miss and never invalidated here.
"""

from __future__ import annotations

import logging
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from pathlib import Path

from .paths import InvalidIdentifierError, join_identifier
from .sources import ContentSource

logger = logging.getLogger(__name__)

__all__ = [
    "CacheError",
    "CacheReadError",
    "ContentCache",
    "FetchError",
    "InvalidIdentifierError",
    "PersistError",
    "resolve_content",
]


class CacheError(RuntimeError):
    """Base class for content cache failures."""


class FetchError(CacheError):
    """Raised when the content source cannot return an item."""


class PersistError(CacheError):
    """Raised when fetched content cannot be written to the cache."""


class CacheReadError(CacheError):
    """Raised when a cached entry exists but cannot be read."""


class _PathLocks:
    """Reference-counted locks keyed by cache path."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Path, tuple[threading.Lock, int]] = {}

    @contextmanager
    def hold(self, key: Path) -> Iterator[None]:
        with self._guard:
            lock, users = self._locks.get(key, (threading.Lock(), 0))
            self._locks[key] = (lock, users + 1)
        try:
            with lock:
                yield
        finally:
            with self._guard:
                lock, users = self._locks[key]
                if users <= 1:
                    del self._locks[key]
                else:
                    self._locks[key] = (lock, users - 1)


_IN_FLIGHT = _PathLocks()


class ContentCache:
    """Resolve identifiers from disk first, fetching and persisting on a miss.

    Any local read failure is logged and treated as a miss that triggers a
    fetch. With ``strict_reads`` enabled, failures other than a missing entry
    raise ``CacheReadError`` instead.
    """

    def __init__(
        self,
        cache_dir: str | Path,
        source: ContentSource,
        *,
        strict_reads: bool = False,
    ) -> None:
        self._cache_dir = Path(cache_dir)
        self._source = source
        self._strict_reads = strict_reads

    @property
    def cache_dir(self) -> Path:
        """Root cache directory."""
        return self._cache_dir

    @property
    def source(self) -> ContentSource:
        return self._source

    def path_for(self, identifier: str) -> Path:
        """Return the cache location for ``identifier``."""
        return join_identifier(self._cache_dir, identifier)

    def contains(self, identifier: str) -> bool:
        """Report whether ``identifier`` is cached, without fetching it."""
        return self.path_for(identifier).is_file()

    def resolve(self, identifier: str) -> bytes:
        """Return the bytes for ``identifier``.

        Raises:
            InvalidIdentifierError: If the identifier escapes the cache directory
            CacheReadError: If a cached entry is unreadable and reads are strict
            FetchError: If the source fails; nothing is written
            PersistError: If the fetched bytes cannot be cached
        """
        target = self.path_for(identifier)

        cached = self._read_cached(identifier, target)
        if cached is not None:
            return cached

        with _IN_FLIGHT.hold(target.resolve()):
            # Another thread may have filled the entry while we waited.
            cached = self._read_cached(identifier, target)
            if cached is not None:
                return cached

            data = self._fetch(identifier)
            self._persist(identifier, target, data)
            return data

    def _read_cached(self, identifier: str, target: Path) -> bytes | None:
        try:
            data = target.read_bytes()
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("Cache miss for %s", identifier)
            return None
        except OSError as exc:
            if self._strict_reads:
                raise CacheReadError(f"Cannot read cached {identifier}: {exc}") from exc
            logger.warning("Failed to read cached %s, refetching: %s", identifier, exc)
            return None

        logger.debug("Got %s from cache", identifier)
        return data

    def _fetch(self, identifier: str) -> bytes:
        try:
            data = self._source.read_file(identifier)
        except Exception as exc:
            logger.debug("Error fetching %s from source", identifier, exc_info=True)
            raise FetchError(str(exc) or f"Failed to fetch {identifier}") from exc

        if isinstance(data, str):
            data = data.encode("utf-8")
        logger.debug("Got %s from source (%d bytes)", identifier, len(data))
        return data

    def _persist(self, identifier: str, target: Path, data: bytes) -> None:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.debug("Error creating directories for %s", target)
            raise PersistError(str(exc)) from exc

        # Write beside the target and rename so readers never see a partial entry.
        temp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_path = Path(handle.name)
                handle.write(data)
            temp_path.replace(target)
        except OSError as exc:
            logger.debug("Error writing %s to cache", identifier)
            if temp_path is not None:
                with suppress(OSError):
                    temp_path.unlink(missing_ok=True)
            raise PersistError(str(exc)) from exc


def resolve_content(identifier: str, cache_dir: str | Path, source: ContentSource) -> bytes:
    """Resolve ``identifier`` through a ``ContentCache`` rooted at ``cache_dir``."""
    return ContentCache(cache_dir, source).resolve(identifier)
