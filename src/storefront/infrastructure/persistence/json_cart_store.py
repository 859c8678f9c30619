"""JSON-file-backed implementation of CartStore.

The file holds one JSON object keyed by product id. File I/O runs in a
worker thread so the event loop is never blocked.
"""

from __future__ import annotations

import asyncio
import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

from storefront.domain.exceptions import StorageUnavailableError, ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Money, Quantity, Variant
from storefront.domain.repository.cart_store import CartStore

logger = logging.getLogger(__name__)


class JsonCartStore(CartStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._is_open = False

    # --- Lifecycle ------------------------------------------------------------

    async def open(self) -> None:
        await self._run(self._ensure_file, require_open=False)
        self._is_open = True

    async def close(self) -> None:
        self._is_open = False

    # --- CartStore interface --------------------------------------------------

    async def upsert(self, line: CartLine) -> None:
        def _upsert() -> None:
            records = self._load_raw()
            records[line.product_id] = self._to_raw(line)
            self._persist_raw(records)

        await self._run(_upsert)

    async def remove(self, product_id: str) -> None:
        def _remove() -> None:
            records = self._load_raw()
            if records.pop(product_id, None) is not None:
                self._persist_raw(records)

        await self._run(_remove)

    async def list_all(self) -> list[CartLine]:
        records = await self._run(self._load_raw)
        try:
            return [self._to_domain(raw) for raw in records.values()]
        except (KeyError, TypeError, InvalidOperation, ValidationError) as exc:
            raise StorageUnavailableError(
                f"Cart file {self._file_path} is corrupt: {exc}"
            ) from exc

    async def clear(self) -> None:
        await self._run(lambda: self._persist_raw({}))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(line: CartLine) -> dict:
        variant = line.selected_variant
        return {
            "product_id": line.product_id,
            "product_name": line.product_name,
            "price": str(line.unit_price.amount),
            "currency": line.unit_price.currency,
            "quantity": line.quantity.value,
            "selected_variant": (
                {"name": variant.name, "value": variant.value} if variant else None
            ),
            "image": line.image_ref,
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartLine:
        variant = raw.get("selected_variant")
        return CartLine(
            product_id=raw["product_id"],
            product_name=raw["product_name"],
            unit_price=Money(Decimal(raw["price"]), raw.get("currency", "NGN")),
            quantity=Quantity(raw["quantity"]),
            selected_variant=Variant(variant["name"], variant["value"]) if variant else None,
            image_ref=raw.get("image", ""),
        )

    # --- File helpers ---------------------------------------------------------

    async def _run(self, func, require_open: bool = True):
        if require_open and not self._is_open:
            raise StorageUnavailableError("Cart store is not open")
        try:
            return await asyncio.to_thread(func)
        except (OSError, ValueError) as exc:
            logger.error("Cart storage failure on %s: %s", self._file_path, exc)
            raise StorageUnavailableError(
                f"Cart storage unavailable: {exc}"
            ) from exc

    def _load_raw(self) -> dict[str, dict]:
        records = json.loads(self._file_path.read_text(encoding="utf-8"))
        if not isinstance(records, dict):
            raise ValueError("cart file must contain a JSON object")
        return records

    def _persist_raw(self, records: dict[str, dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
