"""Application service: browse the catalog (queries)."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_catalog import ProductCatalog


class ListProductsHandler:

    def __init__(self, catalog: ProductCatalog) -> None:
        self._catalog = catalog

    async def handle(self, query: str = "") -> list[ProductDTO]:
        """List the catalog, keeping only products matching *query*."""
        products = await self._catalog.list_all()
        return [to_product_dto(p) for p in products if p.matches(query)]


class ShowProductHandler:

    def __init__(self, catalog: ProductCatalog) -> None:
        self._catalog = catalog

    async def handle(self, product_id: str) -> ProductDTO:
        product = await self._catalog.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        return to_product_dto(product)


def to_product_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        description=product.description,
        price=str(product.price),
        images=list(product.images),
        available_quantity=product.available_quantity,
        in_stock=product.in_stock,
        low_stock=product.is_low_stock,
        variants=[str(v) for v in product.variants],
    )
