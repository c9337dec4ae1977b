"""Product aggregate.

A product is either a single item picked from a shelf or a bundle made of
other products. Only ``stock_quantity`` is shared, mutable state between
packaging batches; everything else changes through explicit edits.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from packstock.domain.exceptions import ValidationError
from packstock.domain.model.value_objects import Money


class ProductType(Enum):
    SINGLE = "single"
    BUNDLE = "bundle"

    @classmethod
    def parse(cls, raw: str | ProductType) -> ProductType:
        if isinstance(raw, ProductType):
            return raw
        try:
            return cls(raw.strip().lower())
        except ValueError as exc:
            raise ValidationError(
                f"Unknown product type {raw!r}; expected 'single' or 'bundle'"
            ) from exc


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``barcode`` and ``name`` are never blank
    - ``stock_quantity`` is never stored negative

    The ``__init__`` is intentionally simple so repositories can
    reconstitute persisted products without re-validating; use
    ``Product.create()`` for new products.
    """

    id: str | None
    barcode: str
    name: str
    type: ProductType = ProductType.SINGLE
    cost: Money = field(default_factory=lambda: Money.of(0))
    stock_quantity: int = 0
    sku_code: str | None = None

    @property
    def is_bundle(self) -> bool:
        return self.type is ProductType.BUNDLE

    @staticmethod
    def create(
        barcode: str,
        name: str,
        type: ProductType = ProductType.SINGLE,
        cost: Money | None = None,
        stock_quantity: int = 0,
        sku_code: str | None = None,
    ) -> Product:
        """Factory for new products. The repository assigns the id."""
        if not barcode or not barcode.strip():
            raise ValidationError("Product barcode is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if stock_quantity < 0:
            raise ValidationError(
                f"Stock quantity cannot be negative, got {stock_quantity}"
            )
        return Product(
            id=None,
            barcode=barcode.strip(),
            name=name.strip(),
            type=type,
            cost=cost if cost is not None else Money.of(0),
            stock_quantity=stock_quantity,
            sku_code=sku_code.strip() if sku_code and sku_code.strip() else None,
        )

    def set_stock(self, quantity: int) -> None:
        """Overwrite the stock level, clamping negative values to zero."""
        self.stock_quantity = max(0, quantity)

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        self.name = name.strip()

    def change_barcode(self, barcode: str) -> None:
        if not barcode or not barcode.strip():
            raise ValidationError("Product barcode is required")
        self.barcode = barcode.strip()
