from __future__ import annotations

import random
from datetime import datetime, timedelta
from decimal import Decimal

from cafeops.models import (
    Attendance,
    AttendanceStatus,
    Expense,
    Order,
    OrderItem,
    PaymentMode,
    Product,
    Staff,
    StaffRole,
    Supplier,
)
from cafeops.services.billing import compute_order_totals
from cafeops.utils import day_key

DEFAULT_SUPPLIERS = [
    ("sup1", "Fresh Teas Co.", "contact@freshteas.com"),
    ("sup2", "Bakery Delights", "sales@bakerydelights.com"),
    ("sup3", "Dairy Farms Inc.", "orders@dairyfarms.com"),
]

# (id, name, category, price, stock, low_stock_threshold, supplier_id)
DEFAULT_PRODUCTS = [
    ("prod1", "Masala Chai", "Hot Teas", "20", 100, 20, "sup1"),
    ("prod2", "Green Tea", "Hot Teas", "25", 18, 20, "sup1"),
    ("prod3", "Iced Lemon Tea", "Iced Teas", "40", 60, 15, "sup1"),
    ("prod4", "Peach Iced Tea", "Iced Teas", "50", 12, 15, "sup1"),
    ("prod5", "Samosa", "Snacks", "15", 120, 30, "sup2"),
    ("prod6", "Croissant", "Snacks", "60", 10, 10, "sup2"),
    ("prod7", "Milk Unit", "Ingredients", "10", 200, 50, "sup3"),
    ("prod8", "Sugar Unit", "Ingredients", "5", 500, 100, "sup3"),
]

DEFAULT_STAFF = [
    ("staff1", "Alice Johnson", StaffRole.MANAGER, "Morning", "30000", "2023-01-15"),
    ("staff2", "Bob Williams", StaffRole.CASHIER, "Morning", "18000", "2023-03-01"),
    ("staff3", "Charlie Brown", StaffRole.CHEF, "Morning", "22000", "2023-02-20"),
    ("staff4", "Diana Miller", StaffRole.CASHIER, "Evening", "18000", "2023-05-10"),
]

# (id, days ago, [(product_id, qty, unit price)], payment mode)
DEFAULT_ORDERS = [
    ("ord1", 2, [("prod1", 2, "20"), ("prod5", 1, "15")], PaymentMode.CARD),
    ("ord2", 1, [("prod3", 1, "40")], PaymentMode.UPI),
    ("ord3", 0, [("prod2", 1, "25"), ("prod6", 1, "60")], PaymentMode.CASH),
]

# (staff_id, day of month, status)
DEFAULT_ATTENDANCE = [
    ("staff1", 1, AttendanceStatus.PRESENT),
    ("staff1", 2, AttendanceStatus.PRESENT),
    ("staff1", 3, AttendanceStatus.LEAVE),
    ("staff1", 4, AttendanceStatus.PRESENT),
    ("staff2", 1, AttendanceStatus.PRESENT),
    ("staff2", 2, AttendanceStatus.ABSENT),
    ("staff2", 3, AttendanceStatus.PRESENT),
    ("staff2", 4, AttendanceStatus.PRESENT),
]


def reference_suppliers() -> list[Supplier]:
    return [Supplier(id=i, name=n, contact=c) for i, n, c in DEFAULT_SUPPLIERS]


def _order(order_id: str, created_at: datetime, lines, mode: PaymentMode, tax_rate: Decimal) -> Order:
    items = tuple(OrderItem(product_id=p, quantity=int(q), price=Decimal(pr)) for p, q, pr in lines)
    totals = compute_order_totals(items, Decimal("0"), tax_rate)
    return Order(
        id=order_id,
        items=items,
        sub_total=totals.sub_total,
        tax=totals.tax,
        discount=totals.discount,
        total=totals.total,
        payment_mode=mode,
        created_at=created_at,
    )


def wipe_all(store) -> None:
    # Keep suppliers (reference data), drop everything else.
    store.reset(suppliers=reference_suppliers())


def load_demo_data(store, *, extra_orders: int = 0, seed: int = 7) -> None:
    """
    Replace the store contents with the demo café, dated relative to the store clock.
    Seeded orders are historical: they do not decrement stock.
    """
    rng = random.Random(seed)
    ref = store.clock()
    today = day_key(ref)

    products = [
        Product(id=i, name=n, category=c, price=Decimal(p), stock=s, low_stock_threshold=t, supplier_id=sup)
        for i, n, c, p, s, t, sup in DEFAULT_PRODUCTS
    ]
    staff = [
        Staff(id=i, name=n, role=r, shift=sh, salary=Decimal(sal), join_date=datetime.strptime(jd, "%Y-%m-%d").date())
        for i, n, r, sh, sal, jd in DEFAULT_STAFF
    ]

    orders = [
        _order(oid, ref - timedelta(days=ago), lines, mode, store.tax_rate)
        for oid, ago, lines, mode in DEFAULT_ORDERS
    ]
    for n in range(extra_orders):
        picks = rng.sample(products, k=rng.randint(1, 3))
        lines = [(p.id, rng.randint(1, 4), str(p.price)) for p in picks]
        created_at = ref - timedelta(days=rng.randint(0, 6), hours=rng.randint(0, 3))
        orders.append(_order(f"ord-demo{n + 1:03d}", created_at, lines, rng.choice(list(PaymentMode)), store.tax_rate))
    orders.sort(key=lambda o: o.created_at)

    expenses = [
        Expense(id="exp1", description="Monthly Rent", amount=Decimal("20000"), category="Rent", date=today.replace(day=1)),
        Expense(id="exp2", description="Tea & Snacks Purchase", amount=Decimal("8000"), category="Supplies", date=today - timedelta(days=5)),
        Expense(id="exp3", description="Electricity Bill", amount=Decimal("4500"), category="Utilities", date=today - timedelta(days=3)),
    ]

    attendance = [
        Attendance(id=f"att{n + 1}", staff_id=sid, date=today.replace(day=dom), status=status)
        for n, (sid, dom, status) in enumerate(DEFAULT_ATTENDANCE)
    ]

    store.reset(
        products=products,
        suppliers=reference_suppliers(),
        orders=orders,
        staff=staff,
        expenses=expenses,
        attendance=attendance,
    )
