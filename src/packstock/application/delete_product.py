"""Application service: Delete Product use case.

Component edges that mention the product, as bundle or as component, are
removed first so no bundle is left pointing at a missing product.
"""

from __future__ import annotations

import structlog

from packstock.domain.exceptions import EntityNotFoundError
from packstock.domain.repository.component_repository import ComponentRepository
from packstock.domain.repository.product_repository import ProductRepository
from packstock.domain.service.bundle_composition import BundleCompositionResolver

logger = structlog.get_logger(__name__)


class DeleteProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        component_repo: ComponentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._component_repo = component_repo

    def handle(self, product_id: str) -> None:
        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        resolver = BundleCompositionResolver(self._product_repo, self._component_repo)
        links = resolver.remove_links_for_product(product_id)
        self._product_repo.delete(product_id)

        logger.info("Deleted product", product_id=product_id, component_links=links)
