from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from cafeops.models import Expense, Order, Snapshot


@dataclass(frozen=True)
class FinancialSummary:
    total_revenue: Decimal
    total_expenses: Decimal
    profit: Decimal


def financial_summary(snapshot: Snapshot) -> FinancialSummary:
    # All-time figures; profit may be negative.
    revenue = sum((o.total for o in snapshot.orders), Decimal("0"))
    expenses = sum((e.amount for e in snapshot.expenses), Decimal("0"))
    return FinancialSummary(total_revenue=revenue, total_expenses=expenses, profit=revenue - expenses)


def recent_orders(snapshot: Snapshot) -> list[Order]:
    return sorted(snapshot.orders, key=lambda o: o.created_at, reverse=True)


def recent_expenses(snapshot: Snapshot) -> list[Expense]:
    return sorted(snapshot.expenses, key=lambda e: e.date, reverse=True)
