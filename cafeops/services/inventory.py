from __future__ import annotations

from typing import Any, Optional

from cafeops.models import Product, Snapshot, Supplier

UNKNOWN_PRODUCT = "Unknown Product"


def find_product(snapshot: Snapshot, product_id: str) -> Optional[Product]:
    return next((p for p in snapshot.products if p.id == product_id), None)


def find_supplier(snapshot: Snapshot, supplier_id: str) -> Optional[Supplier]:
    return next((s for s in snapshot.suppliers if s.id == supplier_id), None)


def product_name(snapshot: Snapshot, product_id: str, default: str = UNKNOWN_PRODUCT) -> str:
    # Orders may still reference products that were deleted since.
    p = find_product(snapshot, product_id)
    return p.name if p else default


def is_low_stock(product: Product) -> bool:
    return product.stock <= product.low_stock_threshold


def low_stock_products(snapshot: Snapshot) -> list[Product]:
    return [p for p in snapshot.products if is_low_stock(p)]


def inventory_rows(snapshot: Snapshot) -> list[dict[str, Any]]:
    """Product table for the Inventory page, with supplier names resolved."""
    out: list[dict[str, Any]] = []
    for p in snapshot.products:
        sup = find_supplier(snapshot, p.supplier_id)
        out.append(
            {
                "id": p.id,
                "name": p.name,
                "category": p.category,
                "price": p.price,
                "stock": p.stock,
                "low_stock_threshold": p.low_stock_threshold,
                "supplier": sup.name if sup else "Unknown",
                "low_stock": is_low_stock(p),
            }
        )
    return out
