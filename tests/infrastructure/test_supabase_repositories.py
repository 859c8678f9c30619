"""Tests for the Supabase catalog and order adapters.

A small fake stands in for the supabase AsyncClient query builder.
"""

import asyncio
from datetime import datetime, timezone
from types import SimpleNamespace

import httpx
import pytest
from postgrest.exceptions import APIError

from storefront.domain.exceptions import NetworkFailureError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import CustomerDetails, Order
from storefront.domain.model.value_objects import Money, Quantity, Variant
from storefront.infrastructure.remote.supabase_order_repository import SupabaseOrderRepository
from storefront.infrastructure.remote.supabase_product_catalog import SupabaseProductCatalog


class FakeQuery:

    def __init__(self, client: "FakeSupabaseClient", rows: list[dict]) -> None:
        self._client = client
        self._rows = rows
        self._filters: list[tuple[str, str]] = []
        self._payload: dict | None = None
        self._limit: int | None = None

    def select(self, columns: str) -> "FakeQuery":
        return self

    def eq(self, column: str, value: str) -> "FakeQuery":
        self._filters.append((column, value))
        return self

    def limit(self, count: int) -> "FakeQuery":
        self._limit = count
        return self

    def insert(self, payload: dict) -> "FakeQuery":
        self._payload = payload
        return self

    async def execute(self) -> SimpleNamespace:
        if self._client.error is not None:
            raise self._client.error
        if self._payload is not None:
            row = {
                "id": f"uuid-{len(self._rows) + 1}",
                "created_at": "2025-01-15T09:30:00+00:00",
                **self._payload,
            }
            self._rows.append(row)
            return SimpleNamespace(data=[row])
        rows = [r for r in self._rows if all(str(r.get(c)) == str(v) for c, v in self._filters)]
        return SimpleNamespace(data=rows[: self._limit] if self._limit else rows)


class FakeSupabaseClient:

    def __init__(self, tables: dict[str, list[dict]] | None = None) -> None:
        self.tables = tables or {}
        self.error: Exception | None = None

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, self.tables.setdefault(name, []))


PRODUCT_ROWS = [
    {
        "id": "p1",
        "product_name": "Tote Bag",
        "description": "Heavy canvas",
        "price": 8000,
        "images": ["https://i.postimg.cc/tote.jpg"],
        "quantity": 4,
        "variants": [{"name": "Colour", "value": "Navy"}],
    },
    {
        "id": "p2",
        "product_name": "Ceramic Mug",
        "description": None,
        "price": "4500.50",
        "images": None,
        "quantity": None,
        "variants": None,
    },
]


class TestSupabaseProductCatalog:

    def test_get_by_id(self):
        catalog = SupabaseProductCatalog(FakeSupabaseClient({"products": list(PRODUCT_ROWS)}))
        product = asyncio.run(catalog.get_by_id("p1"))
        assert product.name == "Tote Bag"
        assert product.price == Money.of("8000")
        assert product.images == ("https://i.postimg.cc/tote.jpg",)
        assert product.available_quantity == 4
        assert product.variants == (Variant("Colour", "Navy"),)

    def test_missing_optional_columns(self):
        catalog = SupabaseProductCatalog(FakeSupabaseClient({"products": list(PRODUCT_ROWS)}))
        product = asyncio.run(catalog.get_by_id("p2"))
        assert product.description == ""
        assert product.images == ()
        assert product.available_quantity == 0
        assert product.variants == ()
        assert product.price == Money.of("4500.50")

    def test_get_unknown_returns_none(self):
        catalog = SupabaseProductCatalog(FakeSupabaseClient({"products": list(PRODUCT_ROWS)}))
        assert asyncio.run(catalog.get_by_id("nope")) is None

    def test_list_all(self):
        catalog = SupabaseProductCatalog(FakeSupabaseClient({"products": list(PRODUCT_ROWS)}))
        assert [p.id for p in asyncio.run(catalog.list_all())] == ["p1", "p2"]

    def test_custom_table_name(self):
        client = FakeSupabaseClient({"catalog_items": list(PRODUCT_ROWS)})
        catalog = SupabaseProductCatalog(client, table="catalog_items")
        assert len(asyncio.run(catalog.list_all())) == 2

    @pytest.mark.parametrize(
        "error",
        [
            APIError({"message": "permission denied", "code": "42501"}),
            httpx.ConnectError("connection refused"),
        ],
    )
    def test_errors_become_network_failures(self, error):
        client = FakeSupabaseClient()
        client.error = error
        with pytest.raises(NetworkFailureError, match="list products"):
            asyncio.run(SupabaseProductCatalog(client).list_all())


def _order() -> Order:
    return Order.place(
        [
            CartLine(
                product_id="p1",
                product_name="Tote Bag",
                unit_price=Money.of("8000"),
                quantity=Quantity(2),
                selected_variant=Variant("Colour", "Navy"),
            ),
            CartLine(
                product_id="p2",
                product_name="Ceramic Mug",
                unit_price=Money.of("4500"),
                quantity=Quantity(1),
            ),
        ],
        CustomerDetails.create(
            full_name="Ada Obi",
            phone="0801",
            email="ada@example.com",
            address="Lagos",
        ),
        notes="Gift wrap",
    )


class TestSupabaseOrderRepository:

    def test_create_returns_store_assigned_id(self):
        client = FakeSupabaseClient()
        order_id = asyncio.run(SupabaseOrderRepository(client).create(_order()))
        assert order_id == "uuid-1"

    def test_payload_shape(self):
        client = FakeSupabaseClient()
        asyncio.run(SupabaseOrderRepository(client).create(_order()))
        row = client.tables["orders"][0]
        assert row["total_amount"] == "20500"
        assert row["status"] == "pending"
        assert row["customer_details"]["full_name"] == "Ada Obi"
        assert row["items"][0]["line_total"] == "16000"
        assert row["items"][0]["selected_variant"] == {"name": "Colour", "value": "Navy"}
        assert row["items"][1]["selected_variant"] is None

    def test_read_back(self):
        client = FakeSupabaseClient()
        repo = SupabaseOrderRepository(client)
        order_id = asyncio.run(repo.create(_order()))

        stored = asyncio.run(repo.get_by_id(order_id))

        assert stored.id == order_id
        assert stored.total_amount == Money.of("20500")
        assert stored.items == _order().items
        assert stored.customer == _order().customer
        assert stored.notes == "Gift wrap"
        assert stored.created_at == datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc)

    def test_unknown_order_returns_none(self):
        repo = SupabaseOrderRepository(FakeSupabaseClient())
        assert asyncio.run(repo.get_by_id("missing")) is None

    def test_create_failure(self):
        client = FakeSupabaseClient()
        client.error = httpx.ReadTimeout("timed out")
        with pytest.raises(NetworkFailureError, match="create order"):
            asyncio.run(SupabaseOrderRepository(client).create(_order()))
