"""Transient packaging inputs.

A PackagingItem is one scanned line of a packaging batch. Bundle items carry
their expansion with them; the aggregator trusts it and never re-derives it
from the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from packstock.domain.model.product import Product
from packstock.domain.model.value_objects import Quantity


@dataclass(frozen=True)
class BundleComponent:
    """One direct child of a bundle with its per-bundle multiplier."""

    product: Product
    quantity: int

    def __post_init__(self) -> None:
        Quantity(self.quantity)


@dataclass(frozen=True)
class ProductWithComponents:
    """A product together with its direct components (empty for singles)."""

    product: Product
    components: list[BundleComponent] = field(default_factory=list)


@dataclass(frozen=True)
class PackagingItem:
    product_barcode: str
    is_bundle: bool = False
    bundle_components: tuple[BundleComponent, ...] | None = None

    @property
    def has_expansion(self) -> bool:
        return self.is_bundle and self.bundle_components is not None
