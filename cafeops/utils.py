from __future__ import annotations

import calendar
import uuid
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union
from zoneinfo import ZoneInfo

CENTS = Decimal("0.01")

DayLike = Union[date, datetime]


def now(tz: Optional[str] = None) -> datetime:
    # Naive local time unless a zone is configured.
    if tz:
        return datetime.now(ZoneInfo(tz)).replace(microsecond=0)
    return datetime.now().replace(microsecond=0)


def day_key(value: DayLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def same_month(value: DayLike, ref: DayLike) -> bool:
    return value.year == ref.year and value.month == ref.month


def days_in_month(ref: DayLike) -> int:
    return calendar.monthrange(ref.year, ref.month)[1]


def to_money(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError("Amount must be a number.")
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Amount must be a number, got {value!r}.")


def quantize_money(value) -> Decimal:
    return to_money(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def fmt_money(value, currency: str = "") -> str:
    return f"{currency}{quantize_money(value):,.2f}"


def new_id(prefix: str) -> str:
    return f"{prefix}{uuid.uuid4().hex}"
