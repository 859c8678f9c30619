"""Abstract local cart store.

Defined in the domain layer so application services never depend on
where the cart actually lives. The store is an explicit object with an
open/close lifecycle and is handed to whoever needs it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import CartLine


class CartStore(ABC):
    """Keyed CRUD over CartLines, one entry per product id.

    Every operation may raise StorageUnavailableError. The store never
    retries and never validates quantities.
    """

    @abstractmethod
    async def open(self) -> None:
        """Acquire the underlying storage."""

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying storage."""

    @abstractmethod
    async def upsert(self, line: CartLine) -> None:
        """Insert *line*, replacing any entry with the same product id."""

    @abstractmethod
    async def remove(self, product_id: str) -> None:
        """Delete the entry for *product_id*; absent ids are ignored."""

    @abstractmethod
    async def list_all(self) -> list[CartLine]:
        """Return every entry, in no particular order."""

    @abstractmethod
    async def clear(self) -> None:
        """Delete every entry."""

    async def __aenter__(self) -> CartStore:
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
