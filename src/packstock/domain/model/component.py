"""ProductComponent — the bundle membership edge.

One record says "one unit of the parent bundle contains ``quantity`` units
of the child product". Nothing prevents a bundle from referencing itself,
directly or through another bundle.
"""

from __future__ import annotations

from dataclasses import dataclass

from packstock.domain.model.value_objects import Quantity


@dataclass
class ProductComponent:

    id: str | None
    parent_product_id: str
    child_product_id: str
    quantity: int = 1

    @staticmethod
    def create(
        parent_product_id: str, child_product_id: str, quantity: int = 1
    ) -> ProductComponent:
        return ProductComponent(
            id=None,
            parent_product_id=parent_product_id,
            child_product_id=child_product_id,
            quantity=Quantity(quantity).value,
        )

    def change_quantity(self, quantity: int) -> None:
        self.quantity = Quantity(quantity).value
