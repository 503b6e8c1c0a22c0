"""Facade tying the content cache, document renderer, and Markdown together."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .cache import ContentCache
from .config import Config
from .content import Document, render_document
from .markdown import INLINE_MODE, render_markdown
from .paths import resolve_file_path
from .sources import ContentSource

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RenderedPage:
    """Document with its title and body converted to HTML."""

    document: Document
    title_html: str | None
    body_html: str | None


class ContentService:
    """Resolve and render content items for a configured publication."""

    def __init__(self, config: Config, source: ContentSource) -> None:
        self._config = config
        self._cache = ContentCache(
            config.cache_dir,
            source,
            strict_reads=config.strict_cache_reads,
        )

    @property
    def config(self) -> Config:
        return self._config

    @property
    def cache(self) -> ContentCache:
        return self._cache

    def fetch(self, identifier: str) -> bytes:
        """Return raw bytes for ``identifier``, fetching on a cache miss."""
        return self._cache.resolve(identifier)

    def render(self, identifier: str, context: Mapping[str, Any] | None = None) -> Document:
        """Resolve ``identifier`` and render it as a document."""
        raw = self.fetch(identifier)
        render_context: dict[str, Any] = {"site": self._config.site}
        render_context.update(context or {})
        logger.debug("Rendering %s", identifier)
        return render_document(raw, render_context, date_locale=self._config.date_locale)

    def render_html(
        self,
        identifier: str,
        context: Mapping[str, Any] | None = None,
    ) -> RenderedPage:
        """Render ``identifier`` and convert its Markdown to HTML."""
        document = self.render(identifier, context)
        return RenderedPage(
            document=document,
            title_html=render_markdown(document.title, INLINE_MODE),
            body_html=render_markdown(document.body),
        )

    def locate(self, url_path: str) -> Path:
        """Map a URL path onto a content file under ``content_dir``."""
        return locate_content(self._config, url_path)


def locate_content(config: Config, url_path: str, extension: str | None = None) -> Path:
    """Resolve ``url_path`` against ``config.content_dir``."""
    relative = url_path.strip("/")
    base = config.content_dir / relative if relative else config.content_dir
    return resolve_file_path(base, extension or config.extension)
