"""Application service: Update Product use case.

Only the fields passed in are changed. Stock edits go through the same
clamping as any other direct stock-set.
"""

from __future__ import annotations

from packstock.application.dto import ProductDTO
from packstock.domain.exceptions import EntityNotFoundError, ValidationError
from packstock.domain.model.product import ProductType
from packstock.domain.model.value_objects import Money
from packstock.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        *,
        name: str | None = None,
        barcode: str | None = None,
        sku_code: str | None = None,
        cost: str | None = None,
        type: str | None = None,
        stock_quantity: int | None = None,
    ) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if barcode is not None and barcode.strip() != product.barcode:
            other = self._product_repo.get_by_barcode(barcode.strip())
            if other is not None and other.id != product.id:
                raise ValidationError(f"Barcode '{barcode.strip()}' is already in use")
            product.change_barcode(barcode)
        if name is not None:
            product.rename(name)
        if sku_code is not None:
            product.sku_code = sku_code.strip() or None
        if cost is not None:
            product.cost = Money.of(cost)
        if type is not None:
            product.type = ProductType.parse(type)
        if stock_quantity is not None:
            product.set_stock(stock_quantity)

        return ProductDTO.from_domain(self._product_repo.save(product))
