"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from packstock.infrastructure.config import get_settings
from packstock.infrastructure.persistence.json_component_repository import (
    JsonComponentRepository,
)
from packstock.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_settings().data_dir / "products.json")


def component_repository() -> JsonComponentRepository:
    return JsonComponentRepository(get_settings().data_dir / "components.json")


def bundle_delete_delay_ms() -> int:
    return get_settings().bundle_delete_delay_ms
