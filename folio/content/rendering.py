"""Render documents that combine YAML front matter with Jinja2 variables."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any

from ..dates import DEFAULT_LOCALE
from ..templates import render_template
from .models import Document
from .parsers import load_document, parse_document


def build_context(
    front_matter: Mapping[str, Any],
    context: Mapping[str, Any] | None = None,
) -> MutableMapping[str, Any]:
    """Bind ``page`` to ``front_matter`` on ``context``.

    Mutable contexts are updated in place so the caller sees ``page``; read-only
    mappings and ``None`` are copied into a new dict first.
    """
    if isinstance(context, MutableMapping):
        target = context
    else:
        target = dict(context or {})
    target["page"] = front_matter
    return target


def render_document(
    raw: str | bytes,
    context: Mapping[str, Any] | None = None,
    *,
    date_locale: str = DEFAULT_LOCALE,
) -> Document:
    """Parse ``raw`` and render its body and title against ``context``.

    ``context["page"]`` is set to the front matter on the caller's mapping
    (a documented side effect) and the same mapping is returned as
    ``Document.context``.
    """
    parsed = parse_document(raw)
    return _render(parsed.front_matter, parsed.body, context, date_locale)


def render_document_file(
    path: str | Path,
    context: Mapping[str, Any] | None = None,
    *,
    date_locale: str = DEFAULT_LOCALE,
) -> Document:
    """Read a document from disk and render it."""
    parsed = load_document(path)
    return _render(parsed.front_matter, parsed.body, context, date_locale)


def _render(
    front_matter: dict[str, Any],
    body: str,
    context: Mapping[str, Any] | None,
    date_locale: str,
) -> Document:
    render_context = build_context(front_matter, context)
    rendered_body = render_template(body, render_context, date_locale=date_locale)

    title_template = front_matter.get("title")
    title: str | None = None
    if title_template is not None:
        title = render_template(str(title_template), render_context, date_locale=date_locale)

    return Document(
        title=title,
        body=rendered_body,
        page=front_matter,
        context=render_context,
    )
