"""Application service: Remove Component use case."""

from __future__ import annotations

from packstock.domain.repository.component_repository import ComponentRepository
from packstock.domain.repository.product_repository import ProductRepository
from packstock.domain.service.bundle_composition import BundleCompositionResolver


class RemoveComponentHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        component_repo: ComponentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._component_repo = component_repo

    def handle(self, component_id: str) -> None:
        resolver = BundleCompositionResolver(self._product_repo, self._component_repo)
        resolver.remove_component(component_id)
