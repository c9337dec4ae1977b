"""Domain service: Stock Reconciliation.

Validates, deducts and restores stock for a packaging batch. Every product
is re-read right before it is checked or written, which narrows (but does
not close) the window in which a concurrent batch can change the same
product. Nothing here locks.

Deduction is all-or-nothing in intent only: products are written one at a
time, and if any product fails, the writes already made are undone by
writing back the recorded previous stock. Those compensating writes can
overwrite changes another caller made in between.

Any error raised while reading or writing one product (domain or backend)
is turned into an error string for that product; the loop moves on.
"""

from __future__ import annotations

import structlog

from packstock.domain.exceptions import EntityNotFoundError
from packstock.domain.model.packaging import PackagingItem
from packstock.domain.model.product import Product
from packstock.domain.model.stock_outcome import (
    RollbackFailure,
    StockAdjustment,
    StockMutationResult,
    StockShortfall,
    StockValidationResult,
)
from packstock.domain.repository.product_repository import ProductRepository
from packstock.domain.service.requirement_aggregator import RequirementAggregator

logger = structlog.get_logger(__name__)


class StockReconciliationService:

    def __init__(
        self,
        product_repo: ProductRepository,
        aggregator: RequirementAggregator | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._aggregator = aggregator or RequirementAggregator(product_repo)

    def update_stock(self, product_id: str, new_quantity: int) -> Product:
        """Set a product's stock. Negative values are stored as zero."""
        product = self._get_product(product_id)
        return self._write_stock(product, new_quantity)

    def validate(self, items: list[PackagingItem]) -> StockValidationResult:
        """Report every product whose current stock cannot cover the batch.

        Read-only and advisory: stock may change again before ``deduct``
        runs. Store failures propagate; shortfalls never raise.
        """
        requirements = self._aggregator.aggregate(items)
        insufficient: list[StockShortfall] = []

        for product_id, requirement in requirements.items():
            latest = self._get_product(product_id)
            if latest.stock_quantity < requirement.required:
                insufficient.append(
                    StockShortfall(
                        barcode=latest.barcode,
                        name=latest.name,
                        required=requirement.required,
                        available=latest.stock_quantity,
                    )
                )

        return StockValidationResult(
            insufficient=insufficient,
            skipped_barcodes=list(requirements.skipped_barcodes),
        )

    def deduct(self, items: list[PackagingItem]) -> StockMutationResult:
        """Deduct the batch's requirements from stock.

        Call after the packaging record has been created. Products are
        processed one at a time in requirement order:

          1. re-read the product
          2. if stock would go negative, record an error and leave it alone
          3. otherwise journal the previous stock and write the new one

        If anything failed, the journal is replayed to put back the previous
        stock of every product this call already wrote.
        """
        requirements = self._aggregator.aggregate(items)
        errors: list[str] = []
        journal: list[StockAdjustment] = []

        logger.info("Deducting stock for packaging", products=len(requirements))

        for product_id, requirement in requirements.items():
            name = requirement.product.name
            try:
                latest = self._get_product(product_id)
                new_stock = latest.stock_quantity - requirement.required

                if new_stock < 0:
                    logger.warning(
                        "Insufficient stock for packaging",
                        product_id=product_id,
                        required=requirement.required,
                        available=latest.stock_quantity,
                    )
                    errors.append(
                        f"Insufficient stock for {name}: required "
                        f"{requirement.required}, available {latest.stock_quantity}"
                    )
                    continue

                journal.append(
                    StockAdjustment(product_id=product_id, previous_stock=latest.stock_quantity)
                )
                self._write_stock(latest, new_stock)
            except Exception as exc:
                logger.warning(
                    "Stock deduction failed", product_id=product_id, error=str(exc)
                )
                errors.append(f"Failed to update stock for {name}: {exc}")

        rolled_back: list[str] = []
        rollback_failures: list[RollbackFailure] = []
        if errors:
            rolled_back, rollback_failures = self._rollback(journal)

        return StockMutationResult(
            errors=errors,
            rolled_back=rolled_back,
            rollback_failures=rollback_failures,
            skipped_barcodes=list(requirements.skipped_barcodes),
        )

    def restore(self, items: list[PackagingItem]) -> StockMutationResult:
        """Add the batch's requirements back to stock.

        Call when a packaging record is deleted. There is no rollback: a
        product that fails is reported and the ones already restored stay
        restored.
        """
        requirements = self._aggregator.aggregate(items)
        errors: list[str] = []

        logger.info("Restoring stock for packaging", products=len(requirements))

        for product_id, requirement in requirements.items():
            try:
                latest = self._get_product(product_id)
                self._write_stock(latest, latest.stock_quantity + requirement.required)
            except Exception as exc:
                logger.warning(
                    "Stock restoration failed", product_id=product_id, error=str(exc)
                )
                errors.append(
                    f"Failed to restore stock for {requirement.product.name}: {exc}"
                )

        return StockMutationResult(
            errors=errors,
            skipped_barcodes=list(requirements.skipped_barcodes),
        )

    # --- Internal helpers -----------------------------------------------------

    def _rollback(
        self, journal: list[StockAdjustment]
    ) -> tuple[list[str], list[RollbackFailure]]:
        """Write back previous stock for every journaled product, in order."""
        rolled_back: list[str] = []
        failures: list[RollbackFailure] = []

        if journal:
            logger.info("Rolling back stock deduction", products=len(journal))

        for adjustment in journal:
            try:
                self.update_stock(adjustment.product_id, adjustment.previous_stock)
                rolled_back.append(adjustment.product_id)
            except Exception as exc:
                # No retry; the batch already reports its original errors
                logger.error(
                    "Failed to roll back stock",
                    product_id=adjustment.product_id,
                    previous_stock=adjustment.previous_stock,
                    error=str(exc),
                )
                failures.append(
                    RollbackFailure(
                        product_id=adjustment.product_id,
                        previous_stock=adjustment.previous_stock,
                        reason=str(exc),
                    )
                )
        return rolled_back, failures

    def _write_stock(self, product: Product, quantity: int) -> Product:
        product.set_stock(quantity)
        return self._product_repo.save(product)

    def _get_product(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product
