"""Cart lines and cart totals.

A cart is nothing more than the set of CartLines currently held by the
local store, keyed by product id. Totals are always recomputed from a
snapshot, never stored.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity, Variant


@dataclass(frozen=True)
class CartLine:
    """One product in the cart, with the price captured when it was added."""

    product_id: str
    product_name: str
    unit_price: Money
    quantity: Quantity
    selected_variant: Variant | None = None
    image_ref: str = ""

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    def with_quantity(self, quantity: int) -> CartLine:
        """Return a copy holding *quantity* units (must be >= 1)."""
        return replace(self, quantity=Quantity(quantity))

    @staticmethod
    def from_product(
        product: Product,
        quantity: int,
        variant: Variant | None = None,
    ) -> CartLine:
        return CartLine(
            product_id=product.id,
            product_name=product.name,
            unit_price=product.price,  # <-- price snapshot
            quantity=Quantity(quantity),
            selected_variant=variant,
            image_ref=product.primary_image,
        )


def cart_total(lines: Iterable[CartLine]) -> Money:
    """Sum of ``unit_price × quantity`` over every line."""
    result: Money | None = None
    for line in lines:
        result = line.line_total if result is None else result + line.line_total
    return result if result is not None else Money.zero()


def item_count(lines: Iterable[CartLine]) -> int:
    """Number of units in the cart (not the number of lines)."""
    return sum(line.quantity.value for line in lines)
