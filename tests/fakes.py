"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. Records are copied on the way in and out,
so a caller mutating a returned object does not change the store until
it saves, just like a real backend.

``save_hook`` / ``delete_hook`` run before each write and may raise to
simulate a store failure.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from packstock.domain.exceptions import EntityNotFoundError
from packstock.domain.model.component import ProductComponent
from packstock.domain.model.product import Product
from packstock.domain.repository.component_repository import ComponentRepository
from packstock.domain.repository.product_repository import (
    ProductPage,
    ProductQuery,
    ProductRepository,
)


class FakeProductRepository(ProductRepository):

    def __init__(
        self,
        products: list[Product] | None = None,
        save_hook: Callable[[Product], None] | None = None,
    ) -> None:
        self._store: dict[str, Product] = {}
        self._next_id = 1
        self.save_hook: Callable[[Product], None] | None = None
        self.saves: list[tuple[str, int]] = []
        self.barcode_lookups = 0
        for p in products or []:
            self.save(p)
        self.saves.clear()
        self.save_hook = save_hook

    def get_by_id(self, product_id: str) -> Product | None:
        product = self._store.get(product_id)
        return replace(product) if product is not None else None

    def get_by_barcode(self, barcode: str) -> Product | None:
        self.barcode_lookups += 1
        for p in self._store.values():
            if p.barcode == barcode:
                return replace(p)
        return None

    def get_by_sku(self, sku_code: str) -> Product | None:
        for p in self._store.values():
            if p.sku_code == sku_code:
                return replace(p)
        return None

    def find(self, query: ProductQuery) -> ProductPage:
        return query.page([replace(p) for p in self._store.values()])

    def save(self, product: Product) -> Product:
        if self.save_hook is not None:
            self.save_hook(product)
        if product.id is None:
            product.id = str(self._next_id)
        if product.id.isdigit():
            self._next_id = max(self._next_id, int(product.id) + 1)
        self._store[product.id] = replace(product)
        self.saves.append((product.id, product.stock_quantity))
        return product

    def delete(self, product_id: str) -> None:
        if self._store.pop(product_id, None) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

    def stock_of(self, product_id: str) -> int:
        return self._store[product_id].stock_quantity


class FakeComponentRepository(ComponentRepository):

    def __init__(
        self,
        components: list[ProductComponent] | None = None,
        delete_hook: Callable[[str], None] | None = None,
    ) -> None:
        self._store: dict[str, ProductComponent] = {}
        self._next_id = 1
        for c in components or []:
            self.save(c)
        self.delete_hook: Callable[[str], None] | None = delete_hook

    def get_by_id(self, component_id: str) -> ProductComponent | None:
        component = self._store.get(component_id)
        return replace(component) if component is not None else None

    def list_by_parent(self, parent_product_id: str) -> list[ProductComponent]:
        return [
            replace(c) for c in self._store.values()
            if c.parent_product_id == parent_product_id
        ]

    def list_by_child(self, child_product_id: str) -> list[ProductComponent]:
        return [
            replace(c) for c in self._store.values()
            if c.child_product_id == child_product_id
        ]

    def save(self, component: ProductComponent) -> ProductComponent:
        if component.id is None:
            component.id = str(self._next_id)
        if component.id.isdigit():
            self._next_id = max(self._next_id, int(component.id) + 1)
        self._store[component.id] = replace(component)
        return component

    def delete(self, component_id: str) -> None:
        if self.delete_hook is not None:
            self.delete_hook(component_id)
        if self._store.pop(component_id, None) is None:
            raise EntityNotFoundError(f"Component with ID '{component_id}' not found")

    def all_ids(self) -> list[str]:
        return list(self._store)
