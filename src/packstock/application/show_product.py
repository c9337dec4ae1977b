"""Application service: Show Product use case (query)."""

from __future__ import annotations

from packstock.application.dto import BundleLineDTO, ProductDetailDTO, ProductDTO
from packstock.domain.exceptions import EntityNotFoundError
from packstock.domain.repository.component_repository import ComponentRepository
from packstock.domain.repository.product_repository import ProductRepository
from packstock.domain.service.bundle_composition import BundleCompositionResolver


class ShowProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        component_repo: ComponentRepository,
    ) -> None:
        self._product_repo = product_repo
        self._component_repo = component_repo

    def by_id(self, product_id: str) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return ProductDTO.from_domain(product)

    def by_barcode(self, barcode: str) -> ProductDTO:
        product = self._product_repo.get_by_barcode(barcode)
        if product is None:
            raise EntityNotFoundError(f"No product with barcode '{barcode}'")
        return ProductDTO.from_domain(product)

    def by_sku(self, sku_code: str) -> ProductDTO:
        product = self._product_repo.get_by_sku(sku_code)
        if product is None:
            raise EntityNotFoundError(f"No product with SKU '{sku_code}'")
        return ProductDTO.from_domain(product)

    def with_components(self, product_id: str) -> ProductDetailDTO:
        """Return a product and, for bundles, its direct components."""
        resolver = BundleCompositionResolver(self._product_repo, self._component_repo)
        detail = resolver.get_with_components(product_id)
        return ProductDetailDTO(
            product=ProductDTO.from_domain(detail.product),
            components=[BundleLineDTO.from_domain(c) for c in detail.components],
        )
