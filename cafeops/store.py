from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from functools import partial
from typing import Callable, Iterable, Optional

import streamlit as st

from cafeops.config import get_settings
from cafeops.errors import InvalidInput, NotFound
from cafeops.models import (
    Attendance,
    AttendanceStatus,
    Expense,
    ExpenseForm,
    Order,
    OrderForm,
    OrderItem,
    PaymentMode,
    Product,
    ProductForm,
    Snapshot,
    Staff,
    StaffForm,
    StaffRole,
    Supplier,
)
from cafeops.services.billing import compute_order_totals
from cafeops.utils import day_key, new_id, now, to_money

logger = logging.getLogger(__name__)


# -------------------------
# Payload validation
# -------------------------

def _require_text(value, label: str) -> str:
    s = str(value or "").strip()
    if not s:
        raise InvalidInput(f"{label} is required.")
    return s


def _require_money(value, label: str) -> Decimal:
    try:
        amount = to_money(value)
    except ValueError:
        raise InvalidInput(f"{label} must be a number.")
    if not amount.is_finite() or amount < 0:
        raise InvalidInput(f"{label} must be >= 0.")
    return amount


def _require_count(value, label: str, *, minimum: Optional[int] = 0) -> int:
    if isinstance(value, bool):
        raise InvalidInput(f"{label} must be a whole number.")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        raise InvalidInput(f"{label} must be a whole number.")
    if minimum is not None and value < minimum:
        raise InvalidInput(f"{label} must be >= {minimum}.")
    return value


def _require_enum(enum_cls, value, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidInput(f"Invalid {label} {value!r}. Use one of: {allowed}.")


def _require_day(value, label: str) -> date:
    if not isinstance(value, (date, datetime)):
        raise InvalidInput(f"{label} must be a date.")
    return day_key(value)


class Store:
    """
    Exclusive owner of the café collections.

    Every action is applied under one lock: it either fully applies or raises
    before touching any collection. Readers get immutable snapshots.
    """

    def __init__(
        self,
        *,
        products: Iterable[Product] = (),
        suppliers: Iterable[Supplier] = (),
        orders: Iterable[Order] = (),
        staff: Iterable[Staff] = (),
        expenses: Iterable[Expense] = (),
        attendance: Iterable[Attendance] = (),
        tax_rate: Decimal = Decimal("0.08"),
        allow_negative_stock: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._lock = threading.RLock()
        self.tax_rate = to_money(tax_rate)
        self.allow_negative_stock = bool(allow_negative_stock)
        self.clock = clock or now
        self.reset(
            products=products,
            suppliers=suppliers,
            orders=orders,
            staff=staff,
            expenses=expenses,
            attendance=attendance,
        )

    def reset(
        self,
        *,
        products: Iterable[Product] = (),
        suppliers: Iterable[Supplier] = (),
        orders: Iterable[Order] = (),
        staff: Iterable[Staff] = (),
        expenses: Iterable[Expense] = (),
        attendance: Iterable[Attendance] = (),
    ) -> None:
        with self._lock:
            self._products = list(products)
            self._suppliers = list(suppliers)
            self._orders = list(orders)
            self._staff = list(staff)
            self._expenses = list(expenses)
            self._attendance = list(attendance)

    def snapshot(self) -> Snapshot:
        with self._lock:
            return Snapshot(
                products=tuple(self._products),
                suppliers=tuple(self._suppliers),
                orders=tuple(self._orders),
                staff=tuple(self._staff),
                expenses=tuple(self._expenses),
                attendance=tuple(self._attendance),
            )

    # -------------------------
    # Lookups
    # -------------------------

    def get_product(self, product_id: str) -> Product:
        with self._lock:
            for p in self._products:
                if p.id == product_id:
                    return p
        raise NotFound(f"Product {product_id!r} not found.")

    def get_staff(self, staff_id: str) -> Staff:
        with self._lock:
            for s in self._staff:
                if s.id == staff_id:
                    return s
        raise NotFound(f"Staff member {staff_id!r} not found.")

    def _supplier_exists(self, supplier_id: str) -> bool:
        return any(s.id == supplier_id for s in self._suppliers)

    # -------------------------
    # Products
    # -------------------------

    def _checked_product(self, product: Product) -> Product:
        supplier_id = _require_text(product.supplier_id, "Supplier")
        if not self._supplier_exists(supplier_id):
            raise InvalidInput(f"Unknown supplier {supplier_id!r}.")
        return replace(
            product,
            name=_require_text(product.name, "Product name"),
            category=_require_text(product.category, "Category"),
            price=_require_money(product.price, "Price"),
            stock=_require_count(product.stock, "Stock", minimum=None if self.allow_negative_stock else 0),
            low_stock_threshold=_require_count(product.low_stock_threshold, "Low-stock threshold"),
            supplier_id=supplier_id,
        )

    def create_product(self, form: ProductForm) -> Product:
        with self._lock:
            product = self._checked_product(
                Product(
                    id=new_id("prod"),
                    name=form.name,
                    category=form.category,
                    price=form.price,
                    stock=form.stock,
                    low_stock_threshold=form.low_stock_threshold,
                    supplier_id=form.supplier_id,
                )
            )
            self._products.append(product)
        logger.info("Created product %s (%s)", product.id, product.name)
        return product

    def update_product(self, product: Product) -> bool:
        with self._lock:
            idx = next((i for i, p in enumerate(self._products) if p.id == product.id), None)
            if idx is None:
                logger.warning("update_product ignored: no product %s", product.id)
                return False
            self._products[idx] = self._checked_product(product)
        logger.info("Updated product %s", product.id)
        return True

    def delete_product(self, product_id: str) -> bool:
        with self._lock:
            kept = [p for p in self._products if p.id != product_id]
            if len(kept) == len(self._products):
                logger.warning("delete_product ignored: no product %s", product_id)
                return False
            self._products = kept
        logger.info("Deleted product %s", product_id)
        return True

    # -------------------------
    # Orders
    # -------------------------

    def create_order(self, form: OrderForm) -> Order:
        if not form.items:
            raise InvalidInput("An order needs at least one item.")
        payment_mode = _require_enum(PaymentMode, form.payment_mode, "payment mode")
        items = tuple(
            OrderItem(
                product_id=_require_text(i.product_id, "Product"),
                quantity=_require_count(i.quantity, "Quantity", minimum=1),
                price=_require_money(i.price, "Item price"),
            )
            for i in form.items
        )

        with self._lock:
            by_id = {p.id: p for p in self._products}

            # Repeated lines for one product decrement its stock cumulatively.
            wanted: dict[str, int] = {}
            for item in items:
                if item.product_id not in by_id:
                    raise InvalidInput(f"Unknown product {item.product_id!r}.")
                wanted[item.product_id] = wanted.get(item.product_id, 0) + item.quantity

            if not self.allow_negative_stock:
                short = [by_id[pid].name for pid, qty in wanted.items() if by_id[pid].stock < qty]
                if short:
                    logger.warning("Order rejected, insufficient stock: %s", ", ".join(short))
                    raise InvalidInput(f"Not enough stock for: {', '.join(short)}.")

            totals = compute_order_totals(items, form.discount, self.tax_rate)
            order = Order(
                id=new_id("ord"),
                items=items,
                sub_total=totals.sub_total,
                tax=totals.tax,
                discount=totals.discount,
                total=totals.total,
                payment_mode=payment_mode,
                created_at=self.clock(),
            )

            # Build the new product list first, then swap both collections together.
            products = [
                replace(p, stock=p.stock - wanted[p.id]) if p.id in wanted else p
                for p in self._products
            ]
            self._products = products
            self._orders.append(order)

        logger.info("Created order %s: %d item(s), total %s", order.id, len(items), order.total)
        return order

    # -------------------------
    # Staff
    # -------------------------

    def _checked_staff(self, member: Staff) -> Staff:
        return replace(
            member,
            name=_require_text(member.name, "Staff name"),
            role=_require_enum(StaffRole, member.role, "role"),
            shift=_require_text(member.shift, "Shift"),
            salary=_require_money(member.salary, "Salary"),
            join_date=_require_day(member.join_date, "Join date"),
        )

    def create_staff(self, form: StaffForm) -> Staff:
        with self._lock:
            member = self._checked_staff(
                Staff(
                    id=new_id("staff"),
                    name=form.name,
                    role=form.role,
                    shift=form.shift,
                    salary=form.salary,
                    join_date=form.join_date or day_key(self.clock()),
                )
            )
            self._staff.append(member)
        logger.info("Created staff %s (%s)", member.id, member.name)
        return member

    def update_staff(self, member: Staff) -> bool:
        with self._lock:
            idx = next((i for i, s in enumerate(self._staff) if s.id == member.id), None)
            if idx is None:
                logger.warning("update_staff ignored: no staff %s", member.id)
                return False
            self._staff[idx] = self._checked_staff(member)
        logger.info("Updated staff %s", member.id)
        return True

    def delete_staff(self, staff_id: str) -> bool:
        with self._lock:
            kept = [s for s in self._staff if s.id != staff_id]
            if len(kept) == len(self._staff):
                logger.warning("delete_staff ignored: no staff %s", staff_id)
                return False
            self._staff = kept
        logger.info("Deleted staff %s", staff_id)
        return True

    # -------------------------
    # Expenses
    # -------------------------

    def create_expense(self, form: ExpenseForm) -> Expense:
        with self._lock:
            expense = Expense(
                id=new_id("exp"),
                description=_require_text(form.description, "Description"),
                amount=_require_money(form.amount, "Amount"),
                category=_require_text(form.category, "Category"),
                date=_require_day(form.date or self.clock(), "Expense date"),
            )
            self._expenses.append(expense)
        logger.info("Created expense %s (%s)", expense.id, expense.amount)
        return expense

    # -------------------------
    # Attendance
    # -------------------------

    def mark_attendance(self, staff_id: str, day, status) -> Attendance:
        """
        One record per (staff, calendar day): a second mark for the same day
        overwrites the status and keeps the original record id.
        """
        status = _require_enum(AttendanceStatus, status, "attendance status")
        key = _require_day(day, "Attendance date")

        with self._lock:
            if not any(s.id == staff_id for s in self._staff):
                raise InvalidInput(f"Unknown staff member {staff_id!r}.")

            for idx, rec in enumerate(self._attendance):
                if rec.staff_id == staff_id and rec.date == key:
                    updated = replace(rec, status=status)
                    self._attendance[idx] = updated
                    logger.info("Attendance %s for %s on %s -> %s", rec.id, staff_id, key, status.value)
                    return updated

            rec = Attendance(id=new_id("att"), staff_id=staff_id, date=key, status=status)
            self._attendance.append(rec)
        logger.info("Attendance %s for %s on %s = %s", rec.id, staff_id, key, status.value)
        return rec


@st.cache_resource
def get_store() -> Store:
    # Shared across Streamlit sessions; the store lock serialises actions.
    from cafeops.services.demo_data import load_demo_data

    settings = get_settings()
    store = Store(
        tax_rate=settings.tax_rate,
        allow_negative_stock=settings.allow_negative_stock,
        clock=partial(now, settings.timezone),
    )
    load_demo_data(store)
    return store
