from __future__ import annotations

from decimal import Decimal
from typing import Optional

from cafeops.models import Order, OrderForm, OrderItem, PaymentMode, Product, Snapshot
from cafeops.services.billing import OrderTotals, compute_order_totals

ALL_CATEGORIES = "All"


def categories(snapshot: Snapshot) -> list[str]:
    out = [ALL_CATEGORIES]
    for p in snapshot.products:
        if p.category not in out:
            out.append(p.category)
    return out


def filter_products(snapshot: Snapshot, category: str = ALL_CATEGORIES, search: str = "") -> list[Product]:
    products = list(snapshot.products)
    if category and category != ALL_CATEGORIES:
        products = [p for p in products if p.category == category]
    term = (search or "").strip().lower()
    if term:
        products = [p for p in products if term in p.name.lower()]
    return products


class Cart:
    """
    Order being built at the counter. Unit prices are captured when a product
    is first added, so later price edits do not change an open cart.
    """

    def __init__(self) -> None:
        self._items: list[OrderItem] = []

    @property
    def items(self) -> list[OrderItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def quantity_of(self, product_id: str) -> int:
        return next((i.quantity for i in self._items if i.product_id == product_id), 0)

    def add(self, product: Product) -> None:
        for idx, item in enumerate(self._items):
            if item.product_id == product.id:
                self._items[idx] = OrderItem(item.product_id, item.quantity + 1, item.price)
                return
        self._items.append(OrderItem(product_id=product.id, quantity=1, price=product.price))

    def set_quantity(self, product_id: str, quantity: int) -> None:
        # Zero or less drops the line.
        if quantity <= 0:
            self._items = [i for i in self._items if i.product_id != product_id]
            return
        self._items = [
            OrderItem(i.product_id, int(quantity), i.price) if i.product_id == product_id else i
            for i in self._items
        ]

    def clear(self) -> None:
        self._items = []

    def totals(self, tax_rate=Decimal("0.08"), discount=Decimal("0")) -> OrderTotals:
        return compute_order_totals(self._items, discount, tax_rate)

    def to_order_form(self, payment_mode: PaymentMode = PaymentMode.CASH, discount: Optional[Decimal] = None) -> OrderForm:
        return OrderForm(
            items=self.items,
            payment_mode=payment_mode,
            discount=discount if discount is not None else Decimal("0"),
        )


def checkout(store, cart: Cart, payment_mode: PaymentMode = PaymentMode.CASH, discount: Optional[Decimal] = None) -> Order:
    # The cart is emptied only once the order is recorded.
    order = store.create_order(cart.to_order_form(payment_mode, discount))
    cart.clear()
    return order
