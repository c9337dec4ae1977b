"""Application service: Clear Bundle use case.

Removes every component of a bundle, optionally pausing between deletes
so a rate-limited store is not flooded.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from packstock.domain.exceptions import ValidationError
from packstock.domain.repository.component_repository import ComponentRepository
from packstock.domain.repository.product_repository import ProductRepository
from packstock.domain.service.bundle_composition import BundleCompositionResolver


class ClearBundleHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        component_repo: ComponentRepository,
        default_delay_ms: int = 0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._product_repo = product_repo
        self._component_repo = component_repo
        self._default_delay_ms = default_delay_ms
        self._sleep = sleep

    def handle(self, parent_id: str, delay_ms: int | None = None) -> int:
        """Delete all components of ``parent_id``; returns how many were removed."""
        delay = self._default_delay_ms if delay_ms is None else delay_ms
        if delay < 0:
            raise ValidationError("Delay cannot be negative")

        resolver = BundleCompositionResolver(
            self._product_repo, self._component_repo, sleep=self._sleep
        )
        return resolver.remove_all_components(parent_id, inter_delete_delay_ms=delay)
