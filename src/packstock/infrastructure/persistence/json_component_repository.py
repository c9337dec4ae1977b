"""JSON-file-backed implementation of ComponentRepository."""

from __future__ import annotations

import json
from pathlib import Path

from packstock.domain.exceptions import EntityNotFoundError, StoreError
from packstock.domain.model.component import ProductComponent
from packstock.domain.repository.component_repository import ComponentRepository


class JsonComponentRepository(ComponentRepository):

    _REQUIRED_KEYS = frozenset({"id", "parent_product_id", "child_product_id"})

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ComponentRepository interface ----------------------------------------

    def get_by_id(self, component_id: str) -> ProductComponent | None:
        for raw in self._load_raw():
            if raw["id"] == component_id:
                return self._to_domain(raw)
        return None

    def list_by_parent(self, parent_product_id: str) -> list[ProductComponent]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["parent_product_id"] == parent_product_id
        ]

    def list_by_child(self, child_product_id: str) -> list[ProductComponent]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["child_product_id"] == child_product_id
        ]

    def save(self, component: ProductComponent) -> ProductComponent:
        records = self._load_raw()

        if component.id is None:
            numeric = [int(r["id"]) for r in records if str(r["id"]).isdigit()]
            component.id = str(max(numeric) + 1) if numeric else "1"

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(records):
            if raw["id"] == component.id:
                records[i] = self._to_raw(component)
                replaced = True
                break
        if not replaced:
            records.append(self._to_raw(component))

        self._persist_raw(records)
        return component

    def delete(self, component_id: str) -> None:
        records = self._load_raw()
        remaining = [r for r in records if r["id"] != component_id]
        if len(remaining) == len(records):
            raise EntityNotFoundError(f"Component with ID '{component_id}' not found")
        self._persist_raw(remaining)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(component: ProductComponent) -> dict:
        return {
            "id": component.id,
            "parent_product_id": component.parent_product_id,
            "child_product_id": component.child_product_id,
            "quantity": component.quantity,
        }

    @staticmethod
    def _to_domain(raw: dict) -> ProductComponent:
        return ProductComponent(
            id=raw["id"],
            parent_product_id=raw["parent_product_id"],
            child_product_id=raw["child_product_id"],
            quantity=raw.get("quantity", 1),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreError(f"Cannot read {self._file_path.name}: {exc}") from exc
        for raw in records:
            if not isinstance(raw, dict) or not self._REQUIRED_KEYS <= raw.keys():
                raise StoreError(
                    f"Malformed record in {self._file_path.name}: {raw!r}"
                )
        return records

    def _persist_raw(self, records: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(records, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise StoreError(f"Cannot write {self._file_path.name}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
