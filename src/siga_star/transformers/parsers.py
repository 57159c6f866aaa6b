"""
Null- and locale-safe value parsers for SIGA source fields.

Numbers arrive in the Brazilian convention (``1.234,56``) and are written
back with a comma decimal separator. Dates are ISO strings that may carry
a trailing time component.
"""

import math
import re
from datetime import date
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional

_ISO_DATE = re.compile(r'^([0-9]{4})-([0-9]{2})-([0-9]{2})$')
_PLAIN_NUMBER = re.compile(r'^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$')
_TWO_PLACES = Decimal('0.01')
_WIDE = Context(prec=400)  # wide enough for any finite double


def parse_decimal(text: Optional[str]) -> float:
    """Parse ``1.234,56`` style text. Anything unparseable becomes 0.0."""
    if not text:
        return 0.0
    cleaned = text.replace('.', '').replace(',', '.')
    if not _PLAIN_NUMBER.match(cleaned):
        return 0.0
    value = float(cleaned)
    if not math.isfinite(value):
        return 0.0
    return value


def format_decimal(value: float) -> str:
    """Render with two decimals, half-up, comma separator and no grouping."""
    rounded = Decimal(repr(float(value))).quantize(
        _TWO_PLACES, rounding=ROUND_HALF_UP, context=_WIDE)
    return f'{rounded:f}'.replace('.', ',')


def parse_date(text: Optional[str]) -> Optional[date]:
    """
    Parse the leading ``YYYY-MM-DD`` of a date string.

    Strings shorter than 10 characters, and prefixes that are not a real
    calendar date, yield None.
    """
    if not text or len(text) < 10:
        return None
    match = _ISO_DATE.match(text[:10])
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def date_key(value: Optional[date]) -> int:
    """Integer date key (YYYYMMDD). A missing date maps to 0."""
    if value is None:
        return 0
    return value.year * 10000 + value.month * 100 + value.day


def parse_date_key(text: Optional[str]) -> int:
    return date_key(parse_date(text))
