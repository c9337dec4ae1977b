"""Application service: Add Component use case (compose a bundle)."""

from __future__ import annotations

from packstock.application.dto import ComponentDTO
from packstock.domain.repository.component_repository import ComponentRepository
from packstock.domain.repository.product_repository import ProductRepository
from packstock.domain.service.bundle_composition import BundleCompositionResolver


class AddComponentHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        component_repo: ComponentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._component_repo = component_repo

    def handle(self, parent_id: str, child_id: str, quantity: int = 1) -> ComponentDTO:
        resolver = BundleCompositionResolver(self._product_repo, self._component_repo)
        return ComponentDTO.from_domain(
            resolver.add_component(parent_id, child_id, quantity)
        )
