"""Domain service: Bundle Composition.

Owns the ProductComponent edges: resolving a bundle into its direct
children, expanding a scanned barcode into a PackagingItem, and removing
edges one by one (including the cascade run before a product is deleted).

Expansion is one level deep. A bundle of bundles resolves to the inner
bundle products themselves, not to their components.
"""

from __future__ import annotations

import time
from collections.abc import Callable

import structlog

from packstock.domain.exceptions import EntityNotFoundError
from packstock.domain.model.component import ProductComponent
from packstock.domain.model.packaging import (
    BundleComponent,
    PackagingItem,
    ProductWithComponents,
)
from packstock.domain.model.product import Product
from packstock.domain.repository.component_repository import ComponentRepository
from packstock.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class BundleCompositionResolver:

    def __init__(
        self,
        product_repo: ProductRepository,
        component_repo: ComponentRepository,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._product_repo = product_repo
        self._component_repo = component_repo
        self._sleep = sleep

    # --- Reading --------------------------------------------------------------

    def resolve_components(self, bundle_product_id: str) -> list[BundleComponent]:
        """Return the direct children of a bundle with their quantities."""
        return [
            BundleComponent(
                product=self._get_product(edge.child_product_id),
                quantity=edge.quantity,
            )
            for edge in self._component_repo.list_by_parent(bundle_product_id)
        ]

    def get_with_components(self, product_id: str) -> ProductWithComponents:
        product = self._get_product(product_id)
        if not product.is_bundle:
            return ProductWithComponents(product=product)
        return ProductWithComponents(
            product=product,
            components=self.resolve_components(product_id),
        )

    def expand(self, barcode: str) -> PackagingItem:
        """Turn a scanned barcode into a PackagingItem ready for aggregation.

        Unknown barcodes are passed through as plain items; the aggregator
        records them as skipped.
        """
        product = self._product_repo.get_by_barcode(barcode)
        if product is None or not product.is_bundle:
            return PackagingItem(product_barcode=barcode)
        return PackagingItem(
            product_barcode=barcode,
            is_bundle=True,
            bundle_components=tuple(self.resolve_components(product.id)),
        )

    def expand_all(self, barcodes: list[str]) -> list[PackagingItem]:
        return [self.expand(barcode) for barcode in barcodes]

    # --- Writing --------------------------------------------------------------

    def add_component(
        self, parent_id: str, child_id: str, quantity: int = 1
    ) -> ProductComponent:
        """Link ``quantity`` units of ``child_id`` into bundle ``parent_id``."""
        self._get_product(parent_id)
        self._get_product(child_id)
        component = ProductComponent.create(parent_id, child_id, quantity)
        return self._component_repo.save(component)

    def update_component_quantity(
        self, component_id: str, quantity: int
    ) -> ProductComponent:
        component = self._get_component(component_id)
        component.change_quantity(quantity)
        return self._component_repo.save(component)

    def remove_component(self, component_id: str) -> None:
        self._component_repo.delete(component_id)

    def remove_all_components(
        self, parent_id: str, inter_delete_delay_ms: int = 0
    ) -> int:
        """Delete every edge of a bundle, one at a time.

        When ``inter_delete_delay_ms`` is positive the service pauses before
        each delete to stay under the store's rate limit. The first failing
        delete propagates and leaves the remaining edges in place.
        Returns the number of edges deleted.
        """
        edges = self._component_repo.list_by_parent(parent_id)
        for edge in edges:
            if inter_delete_delay_ms > 0:
                self._sleep(inter_delete_delay_ms / 1000)
            self._component_repo.delete(edge.id)
        logger.info("Cleared bundle components", parent_id=parent_id, count=len(edges))
        return len(edges)

    def remove_links_for_product(self, product_id: str) -> int:
        """Delete every edge where the product is the parent or the child."""
        edges = [
            *self._component_repo.list_by_parent(product_id),
            *self._component_repo.list_by_child(product_id),
        ]
        removed: set[str] = set()
        for edge in edges:
            # A self-referencing edge shows up in both lists
            if edge.id in removed:
                continue
            self._component_repo.delete(edge.id)
            removed.add(edge.id)
        logger.debug("Removed component links", product_id=product_id, count=len(removed))
        return len(removed)

    # --- Internal helpers -----------------------------------------------------

    def _get_product(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product

    def _get_component(self, component_id: str) -> ProductComponent:
        component = self._component_repo.get_by_id(component_id)
        if component is None:
            raise EntityNotFoundError(f"Component with ID '{component_id}' not found")
        return component
