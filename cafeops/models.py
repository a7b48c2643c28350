from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class StaffRole(str, Enum):
    MANAGER = "Manager"
    CASHIER = "Cashier"
    CHEF = "Chef"
    WAITER = "Waiter"


class PaymentMode(str, Enum):
    CASH = "Cash"
    CARD = "Card"
    UPI = "UPI"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LEAVE = "Leave"


EXPENSE_CATEGORIES = ["Supplies", "Rent", "Salaries", "Utilities", "Other"]
SHIFTS = ["Morning", "Evening"]


@dataclass(frozen=True)
class Supplier:
    id: str
    name: str
    contact: str


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    category: str
    price: Decimal
    stock: int
    low_stock_threshold: int
    supplier_id: str


@dataclass(frozen=True)
class OrderItem:
    product_id: str
    quantity: int
    # Unit price captured at sale time.
    price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class Order:
    id: str
    items: tuple[OrderItem, ...]
    sub_total: Decimal
    tax: Decimal
    discount: Decimal
    total: Decimal
    payment_mode: PaymentMode
    created_at: datetime


@dataclass(frozen=True)
class Staff:
    id: str
    name: str
    role: StaffRole
    shift: str
    salary: Decimal
    join_date: date


@dataclass(frozen=True)
class Expense:
    id: str
    description: str
    amount: Decimal
    category: str
    date: date


@dataclass(frozen=True)
class Attendance:
    id: str
    staff_id: str
    date: date
    status: AttendanceStatus


# -------------------------
# Action payloads (entity minus id)
# -------------------------

@dataclass
class ProductForm:
    name: str
    category: str
    price: Decimal
    stock: int
    supplier_id: str
    low_stock_threshold: int = 10


@dataclass
class OrderForm:
    items: list[OrderItem]
    payment_mode: PaymentMode = PaymentMode.CASH
    discount: Decimal = Decimal("0")


@dataclass
class StaffForm:
    name: str
    role: StaffRole
    salary: Decimal
    shift: str = "Morning"
    join_date: Optional[date] = None


@dataclass
class ExpenseForm:
    description: str
    amount: Decimal
    category: str = "Other"
    date: Optional[date] = None


@dataclass(frozen=True)
class Snapshot:
    """All six collections at a single instant, in insertion order."""

    products: tuple[Product, ...] = ()
    suppliers: tuple[Supplier, ...] = ()
    orders: tuple[Order, ...] = ()
    staff: tuple[Staff, ...] = ()
    expenses: tuple[Expense, ...] = ()
    attendance: tuple[Attendance, ...] = ()
