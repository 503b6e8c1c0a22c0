"""Typed representations of parsed and rendered documents."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class ParsedDocument:
    """Front matter and untouched body text of a raw document."""

    front_matter: dict[str, Any]
    body: str


@dataclass(slots=True)
class Document:
    """Rendered document produced for a single render call.

    ``context`` is the render context actually used, i.e. the caller's
    context with ``page`` set.
    """

    title: str | None
    body: str
    page: dict[str, Any]
    context: MutableMapping[str, Any] = field(default_factory=dict)
