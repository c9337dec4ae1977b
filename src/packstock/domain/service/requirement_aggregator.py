"""Domain service: Requirement Aggregation.

Turns a batch of scanned packaging items into the total number of units
needed per product. Bundle items contribute their pre-resolved components;
every other item contributes one unit of the product its barcode names.
"""

from __future__ import annotations

import structlog

from packstock.domain.model.packaging import PackagingItem
from packstock.domain.model.requirement import RequirementMap
from packstock.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class RequirementAggregator:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def aggregate(self, items: list[PackagingItem]) -> RequirementMap:
        """Build a fresh RequirementMap for ``items``.

        A barcode that resolves to no product is recorded in
        ``skipped_barcodes`` and does not abort the batch. Each non-bundle
        item costs one store lookup; nothing is cached between calls.
        """
        requirements = RequirementMap()

        for item in items:
            if item.has_expansion:
                for component in item.bundle_components or ():
                    requirements.add(component.product, component.quantity)
                continue

            product = self._product_repo.get_by_barcode(item.product_barcode)
            if product is None:
                requirements.skip(item.product_barcode)
                continue
            requirements.add(product, 1)

        if requirements.skipped_barcodes:
            logger.info(
                "Skipped unresolved barcodes while aggregating",
                barcodes=requirements.skipped_barcodes,
            )
        return requirements
