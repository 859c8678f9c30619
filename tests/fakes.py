"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON and Supabase
adapters but keep everything in a dict. No file I/O, no network. Each
fake can be switched into a failing mode to exercise error paths.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from storefront.application.order_confirmation import Clipboard
from storefront.domain.exceptions import NetworkFailureError, StorageUnavailableError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.repository.cart_store import CartStore
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_catalog import ProductCatalog


class FakeCartStore(CartStore):

    def __init__(self, lines: list[CartLine] | None = None) -> None:
        self._store: dict[str, CartLine] = {}
        for line in lines or []:
            self._store[line.product_id] = line
        self.is_open = False
        self.fail_writes = False
        self.fail_reads = False
        self.fail_clear = False
        self.write_calls = 0

    async def open(self) -> None:
        self.is_open = True

    async def close(self) -> None:
        self.is_open = False

    async def upsert(self, line: CartLine) -> None:
        self._write()
        self._store[line.product_id] = line

    async def remove(self, product_id: str) -> None:
        self._write()
        self._store.pop(product_id, None)

    async def list_all(self) -> list[CartLine]:
        if self.fail_reads:
            raise StorageUnavailableError("storage disabled")
        return list(self._store.values())

    async def clear(self) -> None:
        if self.fail_clear:
            raise StorageUnavailableError("storage disabled")
        self._write()
        self._store.clear()

    def _write(self) -> None:
        self.write_calls += 1
        if self.fail_writes:
            raise StorageUnavailableError("quota exceeded")

    # Test helper, not part of the interface
    def get(self, product_id: str) -> CartLine | None:
        return self._store.get(product_id)


class FakeProductCatalog(ProductCatalog):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p
        self.fail_lookups = False

    async def get_by_id(self, product_id: str) -> Product | None:
        if self.fail_lookups:
            raise NetworkFailureError("remote store unreachable")
        return self._store.get(product_id)

    async def list_all(self) -> list[Product]:
        return list(self._store.values())

    # Test helper, not part of the interface
    def save(self, product: Product) -> None:
        self._store[product.id] = product


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[str, Order] = {}
        self._next_id = 1
        self.fail_create = False
        self.fail_reads = False
        self.read_calls = 0

    async def create(self, order: Order) -> str:
        if self.fail_create:
            raise NetworkFailureError("remote store unreachable")
        order_id = f"order-{self._next_id}"
        self._next_id += 1
        self._store[order_id] = replace(
            order, id=order_id, created_at=datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc)
        )
        return order_id

    async def get_by_id(self, order_id: str) -> Order | None:
        self.read_calls += 1
        if self.fail_reads:
            raise NetworkFailureError("remote store unreachable")
        return self._store.get(order_id)

    # Test helpers, not part of the interface
    def all(self) -> list[Order]:
        return list(self._store.values())

    def save(self, order: Order) -> None:
        self._store[order.id] = order


class FakeClipboard(Clipboard):

    def __init__(self) -> None:
        self.contents: str | None = None
        self.copies = 0

    def copy(self, text: str) -> None:
        self.contents = text
        self.copies += 1
