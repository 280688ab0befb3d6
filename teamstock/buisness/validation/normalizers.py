"""
Field normalizers

Total functions that turn raw form/CSV values into in-domain values. Malformed
input degrades to a documented default instead of raising, so a bulk import is
never aborted by an optional field. Defaults applied to non-blank input are
logged at DEBUG level only.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from teamstock.logger import get_logger
from teamstock.utils.timestamps import utcnow

logger = get_logger("teamstock.buisness.validation")


PRIORITIES = ('urgent', 'important', 'normal', 'low')
URGENCIES = ('low', 'medium', 'high', 'critical')
REQUEST_STATUSES = ('pending', 'approved', 'rejected', 'ordered')
EISENHOWER_QUADRANTS = (
    'important-urgent',
    'important-not-urgent',
    'not-important-urgent',
    'not-important-not-urgent',
)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def clean_optional_str(value: object) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def clean_str(value: object) -> str:
    """Required text field; None becomes the empty string, anything else is stringified"""
    return clean_optional_str(value) or ''


def clean_str_list(value) -> list[str]:
    """A list of non-blank strings; a lone scalar becomes a one-element list"""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        value = [value]
    return [s for s in (clean_optional_str(entry) for entry in value) if s]


def validate_enum(value, allowed: Iterable[str], default: Optional[str] = None) -> Optional[str]:
    """
    Match ``value`` against ``allowed`` ignoring case and surrounding whitespace.

    Args:
        value: Raw value
        allowed: Canonical members
        default: Returned when nothing matches (may be None)

    Returns:
        The canonical member of ``allowed`` or ``default``
    """
    if not _is_blank(value):
        needle = str(value).strip().lower()
        for member in allowed:
            if member.lower() == needle:
                return member
        logger.debug(f"Value {value!r} not in {list(allowed)}, using default {default!r}")
    return default


def validate_priority(value) -> str:
    return validate_enum(value, PRIORITIES, 'normal')


def validate_urgency(value) -> str:
    return validate_enum(value, URGENCIES, 'medium')


def validate_status(value) -> str:
    return validate_enum(value, REQUEST_STATUSES, 'pending')


def validate_team(value, teams: Iterable[str], default: str) -> str:
    return validate_enum(value, teams, default)


def validate_quadrant(value) -> str | None:
    return validate_enum(value, EISENHOWER_QUADRANTS, None)


def _parse_float(raw) -> float | None:
    if isinstance(raw, bool) or _is_blank(raw):
        return None
    try:
        number = float(str(raw).strip()) if not isinstance(raw, (int, float)) else float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def coerce_number(raw, floor: float = 0) -> float:
    """Decimal parse; non-numeric or below-floor input becomes ``floor``"""
    number = _parse_float(raw)
    if number is None or number < floor:
        if not _is_blank(raw):
            logger.debug(f"Number {raw!r} invalid or below {floor}, using {floor}")
        return float(floor)
    return number


def coerce_int(raw, floor: int = 0) -> int:
    """Integer parse (truncating toward zero); invalid or below-floor input becomes ``floor``"""
    number = _parse_float(raw)
    if number is None or int(number) < floor:
        if not _is_blank(raw):
            logger.debug(f"Integer {raw!r} invalid or below {floor}, using {floor}")
        return int(floor)
    return int(number)


def coerce_optional_int(raw, floor: int = 0) -> int | None:
    if _is_blank(raw):
        return None
    return coerce_int(raw, floor)


def _parse_date(raw) -> datetime | None:
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day)
    elif _is_blank(raw):
        return None
    else:
        text = str(raw).strip()
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            try:
                parsed = datetime.strptime(text, '%Y/%m/%d')
            except ValueError:
                return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def coerce_date(raw, default: datetime | None = None) -> datetime:
    """
    Parse an ISO-like date or datetime.

    Unparsable input falls back to ``default``, or to the current time when no
    default is given (required-date fields).
    """
    parsed = _parse_date(raw)
    if parsed is None:
        if not _is_blank(raw):
            logger.debug(f"Date {raw!r} not parseable, using default")
        return default if default is not None else utcnow()
    return parsed


def coerce_optional_date(raw) -> datetime | None:
    parsed = _parse_date(raw)
    if parsed is None and not _is_blank(raw):
        logger.debug(f"Optional date {raw!r} not parseable, dropping it")
    return parsed
