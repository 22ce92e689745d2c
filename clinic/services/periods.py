"""
Date helpers shared by the report builder and the serializers.

Timestamps coming out of the store are bucketed in the configured local
time zone, so a request filed at 07:30 on 1 February in Manila counts
for February even though it is still January in UTC.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime


def coerce_datetime(value) -> Optional[datetime]:
    """Return ``value`` as a local-time datetime, or ``None`` if unusable.

    Accepts datetimes (aware or naive), dates and ISO 8601 strings.
    Anything else (``None``, numbers, malformed strings) gives ``None``.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            dt = parse_datetime(text)
            if dt is None:
                d = parse_date(text)
                return datetime(d.year, d.month, d.day) if d else None
        except ValueError:
            return None
    else:
        return None
    if timezone.is_aware(dt):
        dt = timezone.localtime(dt)
    return dt


def month_key(dt: datetime) -> str:
    return f"{dt.year:04d}-{dt.month:02d}"


def in_period(dt: datetime, year: int, month: Optional[int] = None) -> bool:
    if dt.year != year:
        return False
    return month is None or dt.month == month
