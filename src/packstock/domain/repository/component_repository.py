"""Abstract repository for ProductComponent edges."""

from __future__ import annotations

from abc import ABC, abstractmethod

from packstock.domain.model.component import ProductComponent


class ComponentRepository(ABC):

    @abstractmethod
    def get_by_id(self, component_id: str) -> ProductComponent | None:
        """Return a component edge by its ID, or None."""

    @abstractmethod
    def list_by_parent(self, parent_product_id: str) -> list[ProductComponent]:
        """Return every edge whose parent is the given bundle."""

    @abstractmethod
    def list_by_child(self, child_product_id: str) -> list[ProductComponent]:
        """Return every edge whose child is the given product."""

    @abstractmethod
    def save(self, component: ProductComponent) -> ProductComponent:
        """Persist a new or updated edge, assigning an id if needed."""

    @abstractmethod
    def delete(self, component_id: str) -> None:
        """Remove an edge. Raises EntityNotFoundError if absent."""
