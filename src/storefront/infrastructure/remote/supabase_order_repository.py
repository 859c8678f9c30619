"""Supabase-backed implementation of OrderRepository.

The store generates ``id`` and ``created_at``; both are left out of the
insert payload.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from supabase import AsyncClient

from storefront.domain.exceptions import NetworkFailureError
from storefront.domain.model.order import CustomerDetails, Order, OrderLineItem
from storefront.domain.model.value_objects import Money, Quantity, Variant
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.remote.supabase_client import execute


class SupabaseOrderRepository(OrderRepository):

    def __init__(self, client: AsyncClient, table: str = "orders") -> None:
        self._client = client
        self._table = table

    # --- OrderRepository interface --------------------------------------------

    async def create(self, order: Order) -> str:
        query = self._client.table(self._table).insert(self._to_raw(order))
        rows = await execute(query, "create order")
        if not rows or "id" not in rows[0]:
            raise NetworkFailureError("Could not create order: no ID returned")
        return str(rows[0]["id"])

    async def get_by_id(self, order_id: str) -> Order | None:
        query = self._client.table(self._table).select("*").eq("id", order_id).limit(1)
        rows = await execute(query, f"fetch order {order_id}")
        return self._to_domain(rows[0]) if rows else None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        customer = order.customer
        return {
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                    "quantity": item.quantity.value,
                    "selected_variant": (
                        {"name": item.selected_variant.name, "value": item.selected_variant.value}
                        if item.selected_variant
                        else None
                    ),
                    "line_total": str(item.line_total.amount),
                }
                for item in order.items
            ],
            "total_amount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "notes": order.notes,
            "customer_details": {
                "full_name": customer.full_name,
                "company_name": customer.company_name,
                "phone": customer.phone,
                "email": customer.email,
                "address": customer.address,
            },
            "status": order.status,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency") or "NGN"
        items = tuple(
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                unit_price=Money(Decimal(str(i["price"])), i.get("currency", currency)),
                quantity=Quantity(int(i["quantity"])),
                selected_variant=(
                    Variant(i["selected_variant"]["name"], i["selected_variant"]["value"])
                    if i.get("selected_variant")
                    else None
                ),
            )
            for i in raw["items"]
        )
        details = raw.get("customer_details") or {}
        created_at = raw.get("created_at")
        return Order(
            id=str(raw["id"]),
            items=items,
            total_amount=Money(Decimal(str(raw["total_amount"])), currency),
            customer=CustomerDetails(
                full_name=details.get("full_name", ""),
                phone=details.get("phone", ""),
                email=details.get("email", ""),
                address=details.get("address", ""),
                company_name=details.get("company_name") or "",
            ),
            notes=raw.get("notes") or "",
            status=raw.get("status", "pending"),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )
