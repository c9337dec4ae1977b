"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, document store,
in-memory) live in the infrastructure layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from packstock.domain.model.product import Product, ProductType


@dataclass(frozen=True)
class ProductQuery:
    """Filters for listing products.

    ``type`` is an equality filter. ``search`` matches when it is a
    substring of the barcode, the name or the SKU code.
    """

    type: ProductType | None = None
    search: str | None = None
    limit: int | None = None
    offset: int = 0

    def matches(self, product: Product) -> bool:
        if self.type is not None and product.type is not self.type:
            return False
        if self.search:
            haystacks = (product.barcode, product.name, product.sku_code or "")
            if not any(self.search in text for text in haystacks):
                return False
        return True

    def page(self, products: list[Product]) -> ProductPage:
        """Apply filters, id ordering and limit/offset to ``products``."""
        matched = sorted(
            (p for p in products if self.matches(p)), key=_id_sort_key
        )
        end = None if self.limit is None else self.offset + self.limit
        return ProductPage(items=matched[self.offset:end], total=len(matched))


@dataclass(frozen=True)
class ProductPage:
    items: list[Product] = field(default_factory=list)
    total: int = 0


def _id_sort_key(product: Product) -> tuple[int, str]:
    # Numeric ids sort numerically, anything else lexically after them
    pid = product.id or ""
    return (0, pid.zfill(20)) if pid.isdigit() else (1, pid)


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_barcode(self, barcode: str) -> Product | None:
        """Return the first product with this exact barcode, or None."""

    @abstractmethod
    def get_by_sku(self, sku_code: str) -> Product | None:
        """Return the first product with this exact SKU code, or None."""

    @abstractmethod
    def find(self, query: ProductQuery) -> ProductPage:
        """Return the page of products matching ``query``."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Persist a new or updated product, assigning an id if needed."""

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product. Raises EntityNotFoundError if absent."""
