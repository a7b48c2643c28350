from datetime import date, datetime
from decimal import Decimal

from cafeops.models import AttendanceStatus, StaffRole
from cafeops.services.staff import (
    attendance_sheet,
    attendance_status,
    calculated_salary,
    payroll,
    present_days,
)
from cafeops.utils import quantize_money


def test_salary_prorated_by_present_days(empty_store, make_staff, now):
    member = make_staff(salary="30000")
    for dom in range(1, 21):
        empty_store.mark_attendance(member.id, date(2026, 6, dom), AttendanceStatus.PRESENT)

    snap = empty_store.snapshot()
    assert present_days(snap, member.id, now) == 20
    assert calculated_salary(snap, member, now) == Decimal("20000")


def test_salary_counts_only_present_in_current_month(empty_store, make_staff, now):
    member = make_staff(salary="30000")
    empty_store.mark_attendance(member.id, date(2026, 6, 1), AttendanceStatus.PRESENT)
    empty_store.mark_attendance(member.id, date(2026, 6, 2), AttendanceStatus.ABSENT)
    empty_store.mark_attendance(member.id, date(2026, 6, 3), AttendanceStatus.LEAVE)
    empty_store.mark_attendance(member.id, date(2026, 5, 31), AttendanceStatus.PRESENT)
    empty_store.mark_attendance(member.id, date(2025, 6, 10), AttendanceStatus.PRESENT)

    assert calculated_salary(empty_store.snapshot(), member, now) == Decimal("1000")


def test_salary_uses_real_month_length(empty_store, make_staff):
    member = make_staff(salary="31000")
    empty_store.mark_attendance(member.id, date(2026, 7, 1), AttendanceStatus.PRESENT)
    july = datetime(2026, 7, 20, 9, 0)
    assert calculated_salary(empty_store.snapshot(), member, july) == Decimal("1000")

    member_feb = make_staff(name="Feb", salary="28000")
    empty_store.mark_attendance(member_feb.id, date(2026, 2, 10), AttendanceStatus.PRESENT)
    feb = datetime(2026, 2, 20, 9, 0)
    assert calculated_salary(empty_store.snapshot(), member_feb, feb) == Decimal("1000")


def test_salary_with_no_attendance_is_zero(empty_store, make_staff, now):
    member = make_staff()
    assert calculated_salary(empty_store.snapshot(), member, now) == 0


def test_payroll_for_demo_staff(store, now):
    rows = {r.staff_id: r for r in payroll(store.snapshot(), now)}
    assert len(rows) == 4
    # Alice: Present on the 1st, 2nd, 4th; Leave on the 3rd.
    assert rows["staff1"].present_days == 3
    assert rows["staff1"].calculated_salary == Decimal("3000")
    assert rows["staff2"].present_days == 3
    assert quantize_money(rows["staff2"].calculated_salary) == Decimal("1800.00")
    assert rows["staff3"].calculated_salary == 0


def test_attendance_status_lookup(store):
    snap = store.snapshot()
    assert attendance_status(snap, "staff1", date(2026, 6, 3)) == AttendanceStatus.LEAVE
    assert attendance_status(snap, "staff1", datetime(2026, 6, 3, 17, 45)) == AttendanceStatus.LEAVE
    assert attendance_status(snap, "staff3", date(2026, 6, 3)) is None


def test_attendance_sheet_marks_unrecorded_staff(store):
    store.mark_attendance("staff3", date(2026, 6, 2), AttendanceStatus.ABSENT)
    sheet = {r["staff_id"]: r["status"] for r in attendance_sheet(store.snapshot(), date(2026, 6, 2))}
    assert sheet == {
        "staff1": "Present",
        "staff2": "Absent",
        "staff3": "Absent",
        "staff4": "Not Marked",
    }


def test_payroll_skips_deleted_staff(empty_store, make_staff, now):
    keep = make_staff(name="Keep", role=StaffRole.CHEF)
    gone = make_staff(name="Gone")
    empty_store.delete_staff(gone.id)
    assert [r.staff_id for r in payroll(empty_store.snapshot(), now)] == [keep.id]
