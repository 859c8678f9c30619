"""Application service: the Cart View.

Holds the visible cart model and keeps it in step with the local store.
Mutations are two-phase: a staged copy of the model is built and
persisted, and only becomes visible once the store call succeeds. If the
store fails, the staged copy is dropped and the visible model is left as
it was.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Iterable

from storefront.application.dto import CartDTO, CartLineDTO
from storefront.domain.exceptions import (
    EntityNotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from storefront.domain.model.cart import CartLine, cart_total, item_count
from storefront.domain.repository.cart_store import CartStore

logger = logging.getLogger(__name__)


class CartView:

    def __init__(self, cart_store: CartStore) -> None:
        self._cart_store = cart_store
        self._visible: dict[str, CartLine] = {}
        self._staged: dict[str, CartLine] | None = None

    # --- Loading --------------------------------------------------------------

    async def load(self) -> CartDTO:
        try:
            lines = await self._cart_store.list_all()
        except StorageUnavailableError:
            logger.exception("Failed to load cart")
            raise
        self._visible = {line.product_id: line for line in lines}
        return self.snapshot()

    # --- Mutations ------------------------------------------------------------

    async def change_quantity(self, product_id: str, quantity: int) -> CartDTO:
        """Set the quantity of one line. Quantities below 1 are rejected."""
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        line = self._visible.get(product_id)
        if line is None:
            raise EntityNotFoundError(f"Product '{product_id}' is not in the cart")

        updated = line.with_quantity(quantity)
        staged = self._stage()
        staged[product_id] = updated
        await self._persist(self._cart_store.upsert(updated), "update item")
        return self.snapshot()

    async def remove(self, product_id: str) -> CartDTO:
        staged = self._stage()
        staged.pop(product_id, None)
        await self._persist(self._cart_store.remove(product_id), "remove item")
        return self.snapshot()

    # --- Derived values -------------------------------------------------------

    def snapshot(self) -> CartDTO:
        return to_cart_dto(self._visible.values())

    # --- Two-phase helpers ----------------------------------------------------

    def _stage(self) -> dict[str, CartLine]:
        self._staged = dict(self._visible)
        return self._staged

    async def _persist(self, operation: Awaitable[None], description: str) -> None:
        try:
            await operation
        except StorageUnavailableError:
            logger.exception("Failed to %s; restoring previous cart", description)
            raise
        finally:
            staged, self._staged = self._staged, None
        self._visible = staged


def to_cart_dto(lines: Iterable[CartLine]) -> CartDTO:
    lines = list(lines)
    return CartDTO(
        items=[
            CartLineDTO(
                product_id=line.product_id,
                product_name=line.product_name,
                variant=str(line.selected_variant) if line.selected_variant else None,
                quantity=line.quantity.value,
                unit_price=str(line.unit_price),
                line_total=str(line.line_total),
                image_ref=line.image_ref,
            )
            for line in lines
        ],
        total=str(cart_total(lines)),
        item_count=item_count(lines),
    )
