"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from packstock.domain.model.component import ProductComponent
from packstock.domain.model.packaging import BundleComponent
from packstock.domain.model.product import Product


@dataclass(frozen=True)
class ProductDTO:
    id: str
    barcode: str
    name: str
    type: str
    cost: str  # formatted, e.g. "12.50"
    stock_quantity: int
    sku_code: str | None

    @staticmethod
    def from_domain(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,  # type: ignore[arg-type]
            barcode=product.barcode,
            name=product.name,
            type=product.type.value,
            cost=str(product.cost),
            stock_quantity=product.stock_quantity,
            sku_code=product.sku_code,
        )


@dataclass(frozen=True)
class ProductListDTO:
    items: list[ProductDTO]
    total: int


@dataclass(frozen=True)
class BundleLineDTO:
    """One direct component of a bundle as displayed to the user."""

    product_id: str
    barcode: str
    name: str
    quantity: int
    stock_quantity: int

    @staticmethod
    def from_domain(component: BundleComponent) -> BundleLineDTO:
        return BundleLineDTO(
            product_id=component.product.id,  # type: ignore[arg-type]
            barcode=component.product.barcode,
            name=component.product.name,
            quantity=component.quantity,
            stock_quantity=component.product.stock_quantity,
        )


@dataclass(frozen=True)
class ProductDetailDTO:
    product: ProductDTO
    components: list[BundleLineDTO]


@dataclass(frozen=True)
class ComponentDTO:
    id: str
    parent_product_id: str
    child_product_id: str
    quantity: int

    @staticmethod
    def from_domain(component: ProductComponent) -> ComponentDTO:
        return ComponentDTO(
            id=component.id,  # type: ignore[arg-type]
            parent_product_id=component.parent_product_id,
            child_product_id=component.child_product_id,
            quantity=component.quantity,
        )
