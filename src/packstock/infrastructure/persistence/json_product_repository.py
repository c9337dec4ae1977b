"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from packstock.domain.exceptions import (
    EntityNotFoundError,
    StoreError,
    ValidationError,
)
from packstock.domain.model.product import Product, ProductType
from packstock.domain.model.value_objects import Money
from packstock.domain.repository.product_repository import (
    ProductPage,
    ProductQuery,
    ProductRepository,
)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def get_by_barcode(self, barcode: str) -> Product | None:
        for product in self._load().values():
            if product.barcode == barcode:
                return product
        return None

    def get_by_sku(self, sku_code: str) -> Product | None:
        for product in self._load().values():
            if product.sku_code == sku_code:
                return product
        return None

    def find(self, query: ProductQuery) -> ProductPage:
        return query.page(list(self._load().values()))

    def save(self, product: Product) -> Product:
        products = self._load()
        if product.id is None:
            product.id = self._next_id(products)
        products[product.id] = product
        self._persist(products)
        return product

    def delete(self, product_id: str) -> None:
        products = self._load()
        if products.pop(product_id, None) is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _next_id(products: dict[str, Product]) -> str:
        numeric = [int(pid) for pid in products if pid.isdigit()]
        return str(max(numeric) + 1) if numeric else "1"

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "barcode": product.barcode,
            "sku_code": product.sku_code,
            "name": product.name,
            "type": product.type.value,
            "cost": str(product.cost.amount),
            "stock_quantity": product.stock_quantity,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            barcode=raw["barcode"],
            name=raw["name"],
            type=ProductType(raw.get("type", "single")),
            cost=Money(Decimal(raw.get("cost", "0"))),
            stock_quantity=raw.get("stock_quantity", 0),
            sku_code=raw.get("sku_code"),
        )

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict[str, Product]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return {item["id"]: self._to_domain(item) for item in raw}
        except (OSError, ValueError) as exc:
            raise StoreError(f"Cannot read {self._file_path.name}: {exc}") from exc
        except (KeyError, TypeError, ArithmeticError, ValidationError) as exc:
            raise StoreError(
                f"Malformed record in {self._file_path.name}: {exc!r}"
            ) from exc

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [self._to_raw(p) for p in products.values()]
        try:
            self._file_path.write_text(
                json.dumps(raw, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise StoreError(f"Cannot write {self._file_path.name}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
