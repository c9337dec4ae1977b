"""Application service: List Products use case (query)."""

from __future__ import annotations

from packstock.application.dto import ProductDTO, ProductListDTO
from packstock.domain.exceptions import ValidationError
from packstock.domain.model.product import ProductType
from packstock.domain.repository.product_repository import (
    ProductQuery,
    ProductRepository,
)


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        type: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> ProductListDTO:
        if limit is not None and limit < 0:
            raise ValidationError("Limit cannot be negative")
        if offset < 0:
            raise ValidationError("Offset cannot be negative")

        query = ProductQuery(
            type=ProductType.parse(type) if type else None,
            search=search or None,
            limit=limit,
            offset=offset,
        )
        page = self._product_repo.find(query)
        return ProductListDTO(
            items=[ProductDTO.from_domain(p) for p in page.items],
            total=page.total,
        )
