"""Render template strings with Jinja2."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jinja2 import ChainableUndefined, Environment, TemplateError

from .dates import DEFAULT_LOCALE, DateFormatError, format_date


class TemplateRenderError(RuntimeError):
    """Raised when a template cannot be compiled or evaluated."""


def _build_environment(date_locale: str) -> Environment:
    env = Environment(
        autoescape=False,  # Content is Markdown, not HTML
        undefined=ChainableUndefined,
        keep_trailing_newline=True,
    )

    def _date(value: Any, fmt: str, locale: str | None = None) -> str:
        return format_date(value, fmt, locale or date_locale)

    env.filters["date"] = _date
    return env


def render_template(
    template: str | None,
    context: Mapping[str, Any] | None = None,
    *,
    date_locale: str = DEFAULT_LOCALE,
) -> str:
    """Expand ``template`` against ``context``.

    A new environment is created on every call so filters and compiled
    templates never leak between unrelated renders. Missing variables render
    as empty strings.
    """
    if template is None:
        return ""
    env = _build_environment(date_locale)
    try:
        return env.from_string(template).render(context or {})
    except DateFormatError as exc:
        raise TemplateRenderError(f"Invalid value for date filter: {exc}") from exc
    except TemplateError as exc:
        raise TemplateRenderError(f"Template rendering failed: {exc}") from exc
    except (TypeError, ValueError, ArithmeticError, LookupError, AttributeError) as exc:
        raise TemplateRenderError(f"Template evaluation failed: {exc}") from exc
