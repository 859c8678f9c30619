"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class View(Enum):
    CATALOG = "catalog"
    CART = "cart"
    ORDER_CONFIRMATION = "order-confirmation"


@dataclass(frozen=True)
class Redirect:
    """Output: the next view to show instead of the current one."""

    view: View
    order_id: str | None = None


@dataclass(frozen=True)
class CheckoutForm:
    """Input: the checkout fields exactly as the customer typed them."""

    full_name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    company_name: str = ""
    notes: str = ""


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    price: str  # formatted, e.g. "₦12,500.00"
    images: list[str]
    available_quantity: int
    in_stock: bool
    low_stock: bool
    variants: list[str]


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    variant: str | None
    quantity: int
    unit_price: str
    line_total: str
    image_ref: str


@dataclass(frozen=True)
class CartDTO:
    """Output: the visible cart with its derived totals."""

    items: list[CartLineDTO]
    total: str
    item_count: int

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_name: str
    variant: str | None
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a placed order as displayed to the customer."""

    id: str
    status: str
    items: list[OrderLineItemDTO]
    total: str
    item_count: int
    notes: str
    full_name: str
    company_name: str
    phone: str
    email: str
    address: str
    created_at: str


@dataclass(frozen=True)
class PaymentInstructions:
    """Static bank-transfer details shown with every order."""

    account_name: str
    bank_name: str
    account_number: str
