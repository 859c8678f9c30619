"""Supabase-backed implementation of ProductCatalog."""

from __future__ import annotations

from supabase import AsyncClient

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Variant
from storefront.domain.repository.product_catalog import ProductCatalog
from storefront.infrastructure.remote.supabase_client import execute


class SupabaseProductCatalog(ProductCatalog):

    def __init__(self, client: AsyncClient, table: str = "products") -> None:
        self._client = client
        self._table = table

    # --- ProductCatalog interface ---------------------------------------------

    async def get_by_id(self, product_id: str) -> Product | None:
        query = self._client.table(self._table).select("*").eq("id", product_id).limit(1)
        rows = await execute(query, f"fetch product {product_id}")
        return self._to_domain(rows[0]) if rows else None

    async def list_all(self) -> list[Product]:
        query = self._client.table(self._table).select("*")
        rows = await execute(query, "list products")
        return [self._to_domain(row) for row in rows]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=str(raw["id"]),
            name=raw["product_name"],
            description=raw.get("description") or "",
            price=Money.of(raw["price"]),
            images=tuple(raw.get("images") or ()),
            available_quantity=int(raw.get("quantity") or 0),
            variants=tuple(
                Variant(name=v["name"], value=v["value"])
                for v in raw.get("variants") or ()
            ),
        )
