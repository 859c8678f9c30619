"""Application service: Add to Cart use case (product detail page).

Re-adding a product that is already in the cart replaces its line; the
previous quantity is not kept.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Variant
from storefront.domain.repository.cart_store import CartStore
from storefront.domain.repository.product_catalog import ProductCatalog

logger = logging.getLogger(__name__)


class AddToCartHandler:

    def __init__(self, catalog: ProductCatalog, cart_store: CartStore) -> None:
        self._catalog = catalog
        self._cart_store = cart_store

    async def handle(
        self,
        product_id: str,
        quantity: int = 1,
        variant: Variant | None = None,
    ) -> CartLine:
        """Put *quantity* units of a product in the cart.

        Steps:
        1. Load the product (fail if not found or out of stock).
        2. Clamp the quantity to what is available.
        3. Check the variant against the product's options.
        4. Upsert a CartLine carrying the *current* price.
        """
        product = await self._catalog.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")

        if not product.in_stock:
            raise ValidationError(f"{product.name} is out of stock")

        if variant is not None and variant not in product.variants:
            options = ", ".join(str(v) for v in product.variants) or "none"
            raise ValidationError(
                f"'{variant}' is not an option for {product.name} (options: {options})"
            )

        line = CartLine.from_product(
            product,
            quantity=product.clamp_quantity(quantity),
            variant=variant,
        )
        await self._cart_store.upsert(line)
        logger.info("Added %s x%d to cart", line.product_id, line.quantity.value)
        return line
