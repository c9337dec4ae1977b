"""Application service: Check Packaging Stock use case (query).

Expands scanned barcodes (bundles into their components) and reports
which products cannot cover the batch. Nothing is written.
"""

from __future__ import annotations

from packstock.domain.model.stock_outcome import StockValidationResult
from packstock.domain.repository.component_repository import ComponentRepository
from packstock.domain.repository.product_repository import ProductRepository
from packstock.domain.service.bundle_composition import BundleCompositionResolver
from packstock.domain.service.stock_reconciliation_service import (
    StockReconciliationService,
)


class CheckPackagingStockHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        component_repo: ComponentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._component_repo = component_repo

    def handle(self, barcodes: list[str]) -> StockValidationResult:
        resolver = BundleCompositionResolver(self._product_repo, self._component_repo)
        items = resolver.expand_all(barcodes)

        svc = StockReconciliationService(self._product_repo)
        return svc.validate(items)
