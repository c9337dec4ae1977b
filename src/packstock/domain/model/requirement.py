"""Requirement map — aggregated per-batch stock demand."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from packstock.domain.model.product import Product


@dataclass
class Requirement:
    """Demand for one product within a batch.

    ``product`` is the snapshot seen while aggregating; stock checks must
    re-read the product rather than trust ``product.stock_quantity``.
    """

    product: Product
    required: int


class RequirementMap:
    """Product id -> Requirement, iterated in encounter order.

    Encounter order is the order in which the mutator writes, and therefore
    the order of its undo journal.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Requirement] = {}
        self.skipped_barcodes: list[str] = []

    def add(self, product: Product, quantity: int) -> None:
        if product.id is None:
            raise ValueError("Cannot require a product that has no id")
        existing = self._entries.get(product.id)
        if existing is not None:
            existing.required += quantity
        else:
            self._entries[product.id] = Requirement(product=product, required=quantity)

    def skip(self, barcode: str) -> None:
        self.skipped_barcodes.append(barcode)

    def get(self, product_id: str) -> Requirement | None:
        return self._entries.get(product_id)

    def required_for(self, product_id: str) -> int:
        entry = self._entries.get(product_id)
        return entry.required if entry is not None else 0

    def items(self) -> Iterator[tuple[str, Requirement]]:
        return iter(self._entries.items())

    def __iter__(self) -> Iterator[Requirement]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._entries

    def __repr__(self) -> str:
        totals = {pid: req.required for pid, req in self._entries.items()}
        return f"RequirementMap({totals!r}, skipped={self.skipped_barcodes!r})"
