"""Application service: Set Stock use case."""

from __future__ import annotations

from packstock.application.dto import ProductDTO
from packstock.domain.repository.product_repository import ProductRepository
from packstock.domain.service.stock_reconciliation_service import (
    StockReconciliationService,
)


class SetStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, quantity: int) -> ProductDTO:
        """Overwrite a product's stock level (negative values become 0)."""
        svc = StockReconciliationService(self._product_repo)
        return ProductDTO.from_domain(svc.update_stock(product_id, quantity))
