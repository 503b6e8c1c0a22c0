"""Folio content resolution and rendering package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as load_pkg_version

from .cache import ContentCache, resolve_content
from .content import Document, parse_document, render_document

__all__ = [
    "__version__",
    "ContentCache",
    "Document",
    "parse_document",
    "render_document",
    "resolve_content",
]

try:
    __version__ = load_pkg_version("folio-content")
except PackageNotFoundError:
    __version__ = "0.0.0"
