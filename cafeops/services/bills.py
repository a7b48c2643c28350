from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from cafeops.models import Order, Snapshot
from cafeops.services.financials import recent_orders
from cafeops.services.inventory import product_name


@dataclass(frozen=True)
class BillLine:
    product_id: str
    name: str
    quantity: int
    unit_price: Decimal
    amount: Decimal


def bill_lines(snapshot: Snapshot, order: Order) -> list[BillLine]:
    return [
        BillLine(
            product_id=i.product_id,
            name=product_name(snapshot, i.product_id),
            quantity=i.quantity,
            unit_price=i.price,
            amount=i.line_total,
        )
        for i in order.items
    ]


def order_history(snapshot: Snapshot) -> list[dict[str, Any]]:
    """Newest-first order list for the Bills page."""
    return [
        {
            "order_id": o.id,
            "created_at": o.created_at,
            "items": sum(i.quantity for i in o.items),
            "sub_total": o.sub_total,
            "tax": o.tax,
            "discount": o.discount,
            "total": o.total,
            "payment_mode": o.payment_mode.value,
        }
        for o in recent_orders(snapshot)
    ]
