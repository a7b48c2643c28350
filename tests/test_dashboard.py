from datetime import date, timedelta
from decimal import Decimal

from cafeops.services.dashboard import (
    dashboard_metrics,
    monthly_best_seller,
    todays_order_count,
    todays_sales,
    weekly_sales,
)
from cafeops.services.inventory import low_stock_products
from tests.conftest import NOW, order_form


def test_todays_sales_only_counts_today(store, now):
    # Demo order placed today: 85.00 + 8% tax.
    assert todays_sales(store.snapshot(), now) == Decimal("91.80")
    assert todays_order_count(store.snapshot(), now) == 1


def test_todays_sales_is_zero_without_orders(empty_store, now):
    assert todays_sales(empty_store.snapshot(), now) == Decimal("0")


def test_low_stock_set(store):
    ids = {p.id for p in low_stock_products(store.snapshot())}
    # Green Tea 18<=20, Peach Iced Tea 12<=15, Croissant 10<=10 (boundary counts).
    assert ids == {"prod2", "prod4", "prod6"}


def test_weekly_series_has_seven_zero_filled_days(empty_store, now):
    series = weekly_sales(empty_store.snapshot(), now)
    assert len(series) == 7
    assert [d.day for d in series] == [now.date() - timedelta(days=i) for i in range(6, -1, -1)]
    assert all(d.total == 0 for d in series)


def test_weekly_series_totals(store, now):
    series = weekly_sales(store.snapshot(), now)
    assert len(series) == 7
    by_day = {d.day: d.total for d in series}
    assert by_day[date(2026, 6, 13)] == Decimal("59.40")
    assert by_day[date(2026, 6, 14)] == Decimal("43.20")
    assert by_day[date(2026, 6, 15)] == Decimal("91.80")
    assert by_day[date(2026, 6, 9)] == 0
    assert series[-1].label == "Mon"


def test_weekly_series_ignores_orders_outside_window(empty_store, make_product):
    chai = make_product(stock=100)
    empty_store.clock = lambda: NOW - timedelta(days=7)
    empty_store.create_order(order_form((chai, 1)))

    series = weekly_sales(empty_store.snapshot(), NOW)
    assert len(series) == 7
    assert sum(d.total for d in series) == 0


def test_best_seller_sums_quantities_across_orders(empty_store, make_product, now):
    p1 = make_product(name="Masala Chai", stock=100)
    p2 = make_product(name="Green Tea", stock=100)
    empty_store.create_order(order_form((p1, 3)))
    empty_store.create_order(order_form((p1, 5), (p2, 2)))

    best = monthly_best_seller(empty_store.snapshot(), now)
    assert best.product_id == p1.id
    assert best.name == "Masala Chai"
    assert best.quantity == 8


def test_best_seller_tie_goes_to_first_seen_product(empty_store, make_product, now):
    p1 = make_product(name="Masala Chai", stock=100)
    p2 = make_product(name="Green Tea", stock=100)
    empty_store.create_order(order_form((p2, 4)))
    empty_store.create_order(order_form((p1, 4)))

    assert monthly_best_seller(empty_store.snapshot(), now).product_id == p2.id


def test_best_seller_ignores_other_months(empty_store, make_product):
    p1 = make_product(stock=100)
    empty_store.clock = lambda: NOW.replace(month=5, day=31)
    empty_store.create_order(order_form((p1, 9)))

    assert monthly_best_seller(empty_store.snapshot(), NOW) is None


def test_best_seller_none_without_orders(empty_store, now):
    assert monthly_best_seller(empty_store.snapshot(), now) is None


def test_best_seller_reports_unknown_after_product_deletion(store, now):
    assert store.delete_product("prod1")
    best = monthly_best_seller(store.snapshot(), now)
    assert best.product_id == "prod1"
    assert best.name == "Unknown"
    assert best.quantity == 2


def test_dashboard_metrics_bundle(store, now):
    m = dashboard_metrics(store.snapshot(), now)
    assert m.todays_sales == Decimal("91.80")
    assert m.todays_orders == 1
    assert m.staff_count == 4
    assert len(m.low_stock) == 3
    assert len(m.weekly_sales) == 7
    assert m.best_seller.name == "Masala Chai"
