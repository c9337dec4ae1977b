"""Structured results of stock validation and mutation.

Business-rule failures (insufficient stock) and recoverable store failures
are reported through these types instead of exceptions, so callers decide
whether a partially failed batch is acceptable.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StockShortfall:
    """Values are taken from the freshly read product, not the snapshot."""

    barcode: str
    name: str
    required: int
    available: int


@dataclass(frozen=True)
class StockValidationResult:
    insufficient: list[StockShortfall] = field(default_factory=list)
    skipped_barcodes: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.insufficient


@dataclass(frozen=True)
class StockAdjustment:
    """Undo journal entry: the stock a product had before this batch wrote it."""

    product_id: str
    previous_stock: int


@dataclass(frozen=True)
class RollbackFailure:
    product_id: str
    previous_stock: int
    reason: str


@dataclass(frozen=True)
class StockMutationResult:
    errors: list[str] = field(default_factory=list)
    rolled_back: list[str] = field(default_factory=list)
    rollback_failures: list[RollbackFailure] = field(default_factory=list)
    skipped_barcodes: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors
