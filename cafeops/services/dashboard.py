from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

from cafeops.models import Order, Product, Snapshot
from cafeops.services.inventory import low_stock_products, product_name
from cafeops.utils import day_key, same_month


@dataclass(frozen=True)
class DailySales:
    day: date
    label: str
    total: Decimal


@dataclass(frozen=True)
class BestSeller:
    product_id: str
    name: str
    quantity: int


@dataclass(frozen=True)
class DashboardMetrics:
    todays_sales: Decimal
    todays_orders: int
    staff_count: int
    low_stock: list[Product]
    weekly_sales: list[DailySales]
    best_seller: Optional[BestSeller]


def _orders_on(snapshot: Snapshot, day: date) -> list[Order]:
    return [o for o in snapshot.orders if day_key(o.created_at) == day]


def todays_sales(snapshot: Snapshot, now: datetime) -> Decimal:
    return sum((o.total for o in _orders_on(snapshot, day_key(now))), Decimal("0"))


def todays_order_count(snapshot: Snapshot, now: datetime) -> int:
    return len(_orders_on(snapshot, day_key(now)))


def weekly_sales(snapshot: Snapshot, now: datetime) -> list[DailySales]:
    """Seven calendar days ending today, oldest first; empty days are 0."""
    today = day_key(now)
    totals: dict[date, Decimal] = {today - timedelta(days=i): Decimal("0") for i in range(6, -1, -1)}
    for o in snapshot.orders:
        d = day_key(o.created_at)
        if d in totals:
            totals[d] += o.total
    return [DailySales(day=d, label=d.strftime("%a"), total=t) for d, t in totals.items()]


def monthly_best_seller(snapshot: Snapshot, now: datetime) -> Optional[BestSeller]:
    """
    Product with the largest quantity sold in now's month.
    Ties go to the product that appeared first (order insertion, then item order).
    """
    qty_by_product: dict[str, int] = {}
    for o in snapshot.orders:
        if not same_month(o.created_at, now):
            continue
        for item in o.items:
            qty_by_product[item.product_id] = qty_by_product.get(item.product_id, 0) + item.quantity

    if not qty_by_product:
        return None

    # max() keeps the first of equal keys, and dicts keep first-seen order.
    best_id = max(qty_by_product, key=qty_by_product.__getitem__)
    return BestSeller(
        product_id=best_id,
        name=product_name(snapshot, best_id, default="Unknown"),
        quantity=qty_by_product[best_id],
    )


def dashboard_metrics(snapshot: Snapshot, now: datetime) -> DashboardMetrics:
    return DashboardMetrics(
        todays_sales=todays_sales(snapshot, now),
        todays_orders=todays_order_count(snapshot, now),
        staff_count=len(snapshot.staff),
        low_stock=low_stock_products(snapshot),
        weekly_sales=weekly_sales(snapshot, now),
        best_seller=monthly_best_seller(snapshot, now),
    )
