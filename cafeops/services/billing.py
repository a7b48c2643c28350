from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from cafeops.errors import InvalidInput
from cafeops.models import OrderItem
from cafeops.utils import to_money


@dataclass(frozen=True)
class OrderTotals:
    sub_total: Decimal
    tax: Decimal
    discount: Decimal
    total: Decimal


def compute_order_totals(items: Iterable[OrderItem], discount=Decimal("0"), tax_rate=Decimal("0.08")) -> OrderTotals:
    """
    subTotal = sum(price x quantity), tax = subTotal x rate, total = subTotal + tax - discount.
    Values are kept exact; rounding happens only when rendering.
    """
    try:
        disc = to_money(discount)
    except ValueError as e:
        raise InvalidInput(str(e))
    if not disc.is_finite() or disc < 0:
        raise InvalidInput("Discount must be >= 0.")

    sub_total = sum((to_money(i.price) * int(i.quantity) for i in items), Decimal("0"))
    tax = sub_total * to_money(tax_rate)
    gross = sub_total + tax
    if disc > gross:
        raise InvalidInput("Discount cannot exceed the order amount.")

    return OrderTotals(sub_total=sub_total, tax=tax, discount=disc, total=gross - disc)
