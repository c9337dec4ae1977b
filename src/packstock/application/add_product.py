"""Application service: Add Product use case."""

from __future__ import annotations

from packstock.domain.exceptions import ValidationError
from packstock.domain.model.product import Product, ProductType
from packstock.domain.model.value_objects import Money
from packstock.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        barcode: str,
        name: str,
        type: str | ProductType = ProductType.SINGLE,
        cost: str | int = 0,
        stock_quantity: int = 0,
        sku_code: str | None = None,
    ) -> Product:
        """Add a new product to the catalog.

        Barcodes are the scan key, so a second product with the same
        barcode is rejected.
        """
        product = Product.create(
            barcode=barcode,
            name=name,
            type=ProductType.parse(type),
            cost=Money.of(cost),
            stock_quantity=stock_quantity,
            sku_code=sku_code,
        )

        if self._product_repo.get_by_barcode(product.barcode) is not None:
            raise ValidationError(f"Barcode '{product.barcode}' is already in use")

        return self._product_repo.save(product)
