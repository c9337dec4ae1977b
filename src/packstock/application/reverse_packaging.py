"""Application service: Reverse Packaging use case.

Runs when a packaging record is deleted: gives the stock back. Bundles
are expanded against their current composition, so a bundle edited since
it was packed restores its new components.
"""

from __future__ import annotations

from packstock.domain.model.stock_outcome import StockMutationResult
from packstock.domain.repository.component_repository import ComponentRepository
from packstock.domain.repository.product_repository import ProductRepository
from packstock.domain.service.bundle_composition import BundleCompositionResolver
from packstock.domain.service.stock_reconciliation_service import (
    StockReconciliationService,
)


class ReversePackagingHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        component_repo: ComponentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._component_repo = component_repo

    def handle(self, barcodes: list[str]) -> StockMutationResult:
        resolver = BundleCompositionResolver(self._product_repo, self._component_repo)
        items = resolver.expand_all(barcodes)

        svc = StockReconciliationService(self._product_repo)
        return svc.restore(items)
