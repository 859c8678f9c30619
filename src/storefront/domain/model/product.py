"""Product aggregate.

Products are owned by the remote catalog. The storefront only reads them:
prices and stock change upstream, never here.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.value_objects import Money, Variant

PLACEHOLDER_IMAGE = "/placeholder.svg"
LOW_STOCK_THRESHOLD = 10


@dataclass(frozen=True)
class Product:
    """A product in the catalog."""

    id: str
    name: str
    description: str
    price: Money
    images: tuple[str, ...] = ()
    available_quantity: int = 0
    variants: tuple[Variant, ...] = field(default_factory=tuple)

    @property
    def in_stock(self) -> bool:
        return self.available_quantity > 0

    @property
    def is_low_stock(self) -> bool:
        """True when only a handful of units remain ("Only N left")."""
        return 0 < self.available_quantity < LOW_STOCK_THRESHOLD

    @property
    def primary_image(self) -> str:
        return self.images[0] if self.images else PLACEHOLDER_IMAGE

    def matches(self, query: str) -> bool:
        """Case-insensitive search over name and description."""
        needle = query.strip().lower()
        if not needle:
            return True
        return needle in self.name.lower() or needle in self.description.lower()

    def clamp_quantity(self, quantity: int) -> int:
        """Normalize a requested quantity to ``[1, available_quantity]``."""
        return max(1, min(self.available_quantity, quantity))
