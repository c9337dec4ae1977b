"""Application service: Update Component Quantity use case."""

from __future__ import annotations

from packstock.application.dto import ComponentDTO
from packstock.domain.repository.component_repository import ComponentRepository
from packstock.domain.repository.product_repository import ProductRepository
from packstock.domain.service.bundle_composition import BundleCompositionResolver


class UpdateComponentHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        component_repo: ComponentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._component_repo = component_repo

    def handle(self, component_id: str, quantity: int) -> ComponentDTO:
        resolver = BundleCompositionResolver(self._product_repo, self._component_repo)
        return ComponentDTO.from_domain(
            resolver.update_component_quantity(component_id, quantity)
        )
