"""Application service: List Components use case (query)."""

from __future__ import annotations

from packstock.application.dto import ComponentDTO
from packstock.domain.repository.component_repository import ComponentRepository


class ListComponentsHandler:

    def __init__(self, component_repo: ComponentRepository) -> None:
        self._component_repo = component_repo

    def for_bundle(self, parent_product_id: str) -> list[ComponentDTO]:
        """Edges that make up the given bundle."""
        return [
            ComponentDTO.from_domain(c)
            for c in self._component_repo.list_by_parent(parent_product_id)
        ]

    def containing(self, child_product_id: str) -> list[ComponentDTO]:
        """Edges of every bundle that contains the given product."""
        return [
            ComponentDTO.from_domain(c)
            for c in self._component_repo.list_by_child(child_product_id)
        ]
