"""
Document expiry classification.

Plain dates are treated as local midnight. A document expiring today
(0 days left) is neither expired nor expiring soon.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Union

EXPIRY_WARNING_DAYS = 30
ONE_DAY_SECONDS = 24 * 60 * 60

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class ExpiryInfo:
    days_until_expiry: Optional[int]
    is_expired: bool
    is_expiring_soon: bool


NO_EXPIRY = ExpiryInfo(days_until_expiry=None, is_expired=False, is_expiring_soon=False)


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def classify_expiry(expiry_date: Optional[DateLike], now: DateLike,
                    warning_days: int = EXPIRY_WARNING_DAYS) -> ExpiryInfo:
    if expiry_date is None:
        return NO_EXPIRY

    expiry = _as_datetime(expiry_date)
    ref = _as_datetime(now)
    days = math.ceil((expiry - ref).total_seconds() / ONE_DAY_SECONDS)
    return ExpiryInfo(
        days_until_expiry=days,
        is_expired=expiry < ref,
        is_expiring_soon=0 < days <= warning_days,
    )
