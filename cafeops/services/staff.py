from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from cafeops.models import AttendanceStatus, Snapshot, Staff
from cafeops.utils import DayLike, day_key, days_in_month, same_month


@dataclass(frozen=True)
class PayrollRow:
    staff_id: str
    name: str
    role: str
    base_salary: Decimal
    present_days: int
    calculated_salary: Decimal


def present_days(snapshot: Snapshot, staff_id: str, now: datetime) -> int:
    return sum(
        1
        for a in snapshot.attendance
        if a.staff_id == staff_id and a.status == AttendanceStatus.PRESENT and same_month(a.date, now)
    )


def calculated_salary(snapshot: Snapshot, member: Staff, now: datetime) -> Decimal:
    """
    Pro-rated monthly pay: base / days in now's month x Present days this month.
    The denominator is the real month length (28-31).
    """
    per_day = member.salary / days_in_month(now)
    return per_day * present_days(snapshot, member.id, now)


def payroll(snapshot: Snapshot, now: datetime) -> list[PayrollRow]:
    return [
        PayrollRow(
            staff_id=s.id,
            name=s.name,
            role=s.role.value,
            base_salary=s.salary,
            present_days=present_days(snapshot, s.id, now),
            calculated_salary=calculated_salary(snapshot, s, now),
        )
        for s in snapshot.staff
    ]


def attendance_status(snapshot: Snapshot, staff_id: str, day: DayLike) -> Optional[AttendanceStatus]:
    # None means not marked for that day.
    key = day_key(day)
    rec = next((a for a in snapshot.attendance if a.staff_id == staff_id and a.date == key), None)
    return rec.status if rec else None


def attendance_sheet(snapshot: Snapshot, day: DayLike) -> list[dict]:
    out = []
    for s in snapshot.staff:
        status = attendance_status(snapshot, s.id, day)
        out.append(
            {
                "staff_id": s.id,
                "name": s.name,
                "role": s.role.value,
                "status": status.value if status else "Not Marked",
            }
        )
    return out
