"""Pytest configuration and fixtures."""

from datetime import datetime
from decimal import Decimal

import pytest

from cafeops.models import OrderForm, OrderItem, ProductForm, StaffForm, StaffRole
from cafeops.services.demo_data import load_demo_data, reference_suppliers
from cafeops.store import Store

# June has 30 days, which keeps the salary arithmetic readable.
NOW = datetime(2026, 6, 15, 12, 0, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def empty_store():
    """Store holding only the reference suppliers, with a fixed clock."""
    return Store(suppliers=reference_suppliers(), clock=lambda: NOW)


@pytest.fixture
def store():
    """Store seeded with the demo café."""
    s = Store(clock=lambda: NOW)
    load_demo_data(s)
    return s


@pytest.fixture
def make_product(empty_store):
    def _make(name="Masala Chai", price="20", stock=100, threshold=20, category="Hot Teas"):
        return empty_store.create_product(
            ProductForm(
                name=name,
                category=category,
                price=Decimal(price),
                stock=stock,
                low_stock_threshold=threshold,
                supplier_id="sup1",
            )
        )

    return _make


@pytest.fixture
def make_staff(empty_store):
    def _make(name="Alice Johnson", salary="30000", role=StaffRole.MANAGER):
        return empty_store.create_staff(StaffForm(name=name, role=role, salary=Decimal(salary)))

    return _make


def order_form(*lines, discount="0"):
    """Build an order payload from (product, quantity) pairs at current prices."""
    return OrderForm(
        items=[OrderItem(product_id=p.id, quantity=q, price=p.price) for p, q in lines],
        discount=Decimal(discount),
    )
