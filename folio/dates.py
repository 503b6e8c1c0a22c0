"""Locale-aware date formatting used by the ``date`` template filter."""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime, time

from babel import Locale, UnknownLocaleError
from babel.dates import format_datetime

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en-GB"
NOW = "now"


class DateFormatError(ValueError):
    """Raised when a value cannot be interpreted or formatted as a date."""


def format_date(value: object, fmt: str, locale: str = DEFAULT_LOCALE) -> str:
    """Format ``value`` with a CLDR token pattern such as ``dd/MM/yyyy``.

    ``value`` is either the literal ``"now"`` (current local time), an
    ISO-8601 timestamp, or a ``datetime``/``date`` object. Timestamps without
    an offset are read as UTC; timestamps with one are converted to UTC.
    """
    moment = _coerce_datetime(value)
    babel_locale = _parse_locale(locale)
    try:
        return format_datetime(moment, fmt, tzinfo=moment.tzinfo, locale=babel_locale)
    except (ValueError, KeyError) as exc:
        raise DateFormatError(f"Invalid date format {fmt!r}: {exc}") from exc


def _coerce_datetime(value: object) -> datetime:
    if isinstance(value, str):
        text = value.strip()
        if text == NOW:
            return datetime.now().astimezone()
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise DateFormatError(f"Invalid ISO-8601 timestamp: {value!r}") from exc
        return _as_utc(parsed)
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=UTC)
    raise DateFormatError(f"Cannot format {type(value).__name__} value {value!r} as a date")


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def _parse_locale(locale: str) -> Locale:
    try:
        return Locale.parse(locale.replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError, AttributeError) as exc:
        logger.debug("Locale lookup failed for %r", locale, exc_info=True)
        raise DateFormatError(f"Unknown locale: {locale!r}") from exc
