"""Unit tests for the StockReconciliationService domain service."""

from dataclasses import replace

import pytest

from packstock.domain.exceptions import EntityNotFoundError, StoreError
from packstock.domain.model.packaging import BundleComponent, PackagingItem
from packstock.domain.model.product import Product, ProductType
from packstock.domain.model.stock_outcome import StockShortfall
from packstock.domain.service.stock_reconciliation_service import (
    StockReconciliationService,
)
from tests.fakes import FakeProductRepository


def _make_repo(*rows: tuple[str, str, str, int], **kwargs) -> FakeProductRepository:
    """Create repo with (id, barcode, name, stock) tuples."""
    products = [
        Product(id=pid, barcode=barcode, name=name, stock_quantity=stock)
        for pid, barcode, name, stock in rows
    ]
    return FakeProductRepository(products, **kwargs)


def _bundle(repo: FakeProductRepository, *components: tuple[str, int]) -> PackagingItem:
    """Bundle item expanded from (product_id, quantity) pairs."""
    return PackagingItem(
        product_barcode="BOX",
        is_bundle=True,
        bundle_components=tuple(
            BundleComponent(repo.get_by_id(pid), qty) for pid, qty in components
        ),
    )


def _fail_saves_of(product_id: str, on_call: int = 1, error: Exception | None = None):
    """Save hook raising ``error`` (StoreError by default) on the n-th save of one product."""
    calls = {"n": 0}

    def hook(product: Product) -> None:
        if product.id == product_id:
            calls["n"] += 1
            if calls["n"] == on_call:
                raise error or StoreError("write rejected")

    return hook


class TestUpdateStock:

    def test_sets_stock(self):
        repo = _make_repo(("1", "A1", "Widget", 10))
        StockReconciliationService(repo).update_stock("1", 4)
        assert repo.stock_of("1") == 4

    def test_negative_is_clamped_to_zero(self):
        repo = _make_repo(("1", "A1", "Widget", 10))
        product = StockReconciliationService(repo).update_stock("1", -5)
        assert product.stock_quantity == 0
        assert repo.stock_of("1") == 0

    def test_missing_product_rejected(self):
        repo = _make_repo()
        with pytest.raises(EntityNotFoundError, match="not found"):
            StockReconciliationService(repo).update_stock("9", 1)


class TestValidate:

    def test_sufficient_stock_is_valid(self):
        repo = _make_repo(("1", "A1", "Widget", 2))
        result = StockReconciliationService(repo).validate([PackagingItem("A1")] * 2)
        assert result.valid
        assert result.insufficient == []

    def test_bundle_shortfall_reported(self):
        repo = _make_repo(("1", "A1", "Widget", 3))
        items = [_bundle(repo, ("1", 2)), _bundle(repo, ("1", 2))]

        result = StockReconciliationService(repo).validate(items)

        assert not result.valid
        assert result.insufficient == [
            StockShortfall(barcode="A1", name="Widget", required=4, available=3)
        ]

    def test_uses_fresh_stock_not_snapshot(self):
        repo = _make_repo(("1", "A1", "Widget", 2))
        stale = replace(repo.get_by_id("1"), stock_quantity=50, name="Old name")
        item = PackagingItem("BOX", is_bundle=True, bundle_components=(BundleComponent(stale, 3),))

        result = StockReconciliationService(repo).validate([item])

        assert result.insufficient == [
            StockShortfall(barcode="A1", name="Widget", required=3, available=2)
        ]

    def test_exact_stock_is_enough(self):
        repo = _make_repo(("1", "A1", "Widget", 4))
        items = [_bundle(repo, ("1", 2)), _bundle(repo, ("1", 2))]
        assert StockReconciliationService(repo).validate(items).valid

    def test_never_writes(self):
        repo = _make_repo(("1", "A1", "Widget", 0))
        StockReconciliationService(repo).validate([PackagingItem("A1")])
        assert repo.saves == []

    def test_reports_skipped_barcodes(self):
        repo = _make_repo(("1", "A1", "Widget", 1))
        result = StockReconciliationService(repo).validate([PackagingItem("ZZ")])
        assert result.valid
        assert result.skipped_barcodes == ["ZZ"]

    def test_vanished_product_propagates(self):
        repo = _make_repo(("1", "A1", "Widget", 1))
        ghost = Product(id="99", barcode="GH", name="Ghost")
        item = PackagingItem("BOX", is_bundle=True, bundle_components=(BundleComponent(ghost, 1),))

        with pytest.raises(EntityNotFoundError):
            StockReconciliationService(repo).validate([item])


class TestDeduct:

    def test_deducts_single_items(self):
        repo = _make_repo(("1", "A1", "Widget", 10))

        result = StockReconciliationService(repo).deduct([PackagingItem("A1")] * 2)

        assert result.success
        assert result.errors == []
        assert repo.stock_of("1") == 8

    def test_deducts_bundle_components(self):
        repo = _make_repo(("1", "A1", "Widget", 10), ("2", "G1", "Gadget", 10))

        result = StockReconciliationService(repo).deduct([_bundle(repo, ("1", 2), ("2", 3))])

        assert result.success
        assert repo.stock_of("1") == 8
        assert repo.stock_of("2") == 7

    def test_insufficient_stock_performs_no_write(self):
        repo = _make_repo(("1", "A1", "Widget", 3))
        items = [_bundle(repo, ("1", 2)), _bundle(repo, ("1", 2))]

        result = StockReconciliationService(repo).deduct(items)

        assert not result.success
        assert result.errors == ["Insufficient stock for Widget: required 4, available 3"]
        assert repo.saves == []
        assert repo.stock_of("1") == 3

    def test_rolls_back_earlier_products_when_later_one_is_short(self):
        repo = _make_repo(
            ("1", "A1", "Widget", 10),
            ("2", "G1", "Gadget", 10),
            ("3", "C1", "Cable", 1),
        )
        items = [_bundle(repo, ("1", 2), ("2", 2), ("3", 5))]

        result = StockReconciliationService(repo).deduct(items)

        assert not result.success
        assert len(result.errors) == 1
        assert "Cable" in result.errors[0]
        assert repo.stock_of("1") == 10
        assert repo.stock_of("2") == 10
        assert repo.stock_of("3") == 1
        assert result.rolled_back == ["1", "2"]
        # deduct A, deduct B, then restore A, restore B; C never written
        assert repo.saves == [("1", 8), ("2", 8), ("1", 10), ("2", 10)]

    def test_continues_after_failure_and_reports_every_product(self):
        repo = _make_repo(
            ("1", "A1", "Widget", 0),
            ("2", "G1", "Gadget", 10),
            ("3", "C1", "Cable", 0),
        )
        items = [PackagingItem("A1"), PackagingItem("G1"), PackagingItem("C1")]

        result = StockReconciliationService(repo).deduct(items)

        assert len(result.errors) == 2
        assert "Widget" in result.errors[0]
        assert "Cable" in result.errors[1]
        assert repo.stock_of("2") == 10

    def test_store_failure_becomes_error_and_triggers_rollback(self):
        repo = _make_repo(
            ("1", "A1", "Widget", 10),
            ("2", "G1", "Gadget", 10),
            save_hook=_fail_saves_of("2"),
        )

        result = StockReconciliationService(repo).deduct([PackagingItem("A1"), PackagingItem("G1")])

        assert result.errors == ["Failed to update stock for Gadget: write rejected"]
        assert repo.stock_of("1") == 10
        assert repo.stock_of("2") == 10

    def test_backend_error_is_caught_and_earlier_products_rolled_back(self):
        repo = _make_repo(
            ("1", "A1", "Widget", 10),
            ("2", "G1", "Gadget", 10),
            save_hook=_fail_saves_of("2", error=ConnectionError("backend down")),
        )

        result = StockReconciliationService(repo).deduct([PackagingItem("A1"), PackagingItem("G1")])

        assert result.errors == ["Failed to update stock for Gadget: backend down"]
        assert result.rolled_back == ["1"]
        assert repo.stock_of("1") == 10
        assert repo.stock_of("2") == 10

    def test_backend_error_during_rollback_is_recorded(self):
        repo = _make_repo(
            ("1", "A1", "Widget", 10),
            ("2", "G1", "Gadget", 0),
            save_hook=_fail_saves_of("1", on_call=2, error=TimeoutError("store timed out")),
        )

        result = StockReconciliationService(repo).deduct([PackagingItem("A1"), PackagingItem("G1")])

        assert not result.success
        assert [f.product_id for f in result.rollback_failures] == ["1"]
        assert "store timed out" in result.rollback_failures[0].reason

    def test_product_deleted_mid_batch_becomes_error(self):
        repo = _make_repo(("1", "A1", "Widget", 10))
        ghost = Product(id="99", barcode="GH", name="Ghost")
        item = PackagingItem(
            "BOX",
            is_bundle=True,
            bundle_components=(BundleComponent(repo.get_by_id("1"), 1), BundleComponent(ghost, 1)),
        )

        result = StockReconciliationService(repo).deduct([item])

        assert result.errors == ["Failed to update stock for Ghost: Product with ID '99' not found"]
        assert repo.stock_of("1") == 10

    def test_rollback_failure_is_recorded_not_raised(self):
        repo = _make_repo(
            ("1", "A1", "Widget", 10),
            ("2", "G1", "Gadget", 0),
            save_hook=_fail_saves_of("1", on_call=2),
        )

        result = StockReconciliationService(repo).deduct([PackagingItem("A1"), PackagingItem("G1")])

        assert result.errors == ["Insufficient stock for Gadget: required 1, available 0"]
        assert result.rolled_back == []
        assert len(result.rollback_failures) == 1
        failure = result.rollback_failures[0]
        assert failure.product_id == "1"
        assert failure.previous_stock == 10
        assert "write rejected" in failure.reason
        # the deduction stuck because the compensating write failed
        assert repo.stock_of("1") == 9

    def test_no_rollback_on_success(self):
        repo = _make_repo(("1", "A1", "Widget", 10))
        result = StockReconciliationService(repo).deduct([PackagingItem("A1")])
        assert result.rolled_back == []
        assert repo.saves == [("1", 9)]

    def test_unknown_barcodes_do_not_fail_the_batch(self):
        repo = _make_repo(("1", "A1", "Widget", 10))

        result = StockReconciliationService(repo).deduct([PackagingItem("A1"), PackagingItem("??")])

        assert result.success
        assert result.skipped_barcodes == ["??"]
        assert repo.stock_of("1") == 9

    def test_rereads_stock_before_writing(self):
        repo = _make_repo(("1", "A1", "Widget", 10))
        stale = replace(repo.get_by_id("1"), stock_quantity=100)
        item = PackagingItem("BOX", is_bundle=True, bundle_components=(BundleComponent(stale, 4),))

        StockReconciliationService(repo).deduct([item])

        assert repo.stock_of("1") == 6


class TestRestore:

    def test_restores_single_items(self):
        repo = _make_repo(("1", "A1", "Widget", 8))

        result = StockReconciliationService(repo).restore([PackagingItem("A1")] * 2)

        assert result.success
        assert repo.stock_of("1") == 10

    def test_deduct_then_restore_is_identity(self):
        repo = _make_repo(("1", "A1", "Widget", 10), ("2", "G1", "Gadget", 7))
        items = [_bundle(repo, ("1", 2), ("2", 1)), PackagingItem("A1"), PackagingItem("G1")]
        svc = StockReconciliationService(repo)

        assert svc.deduct(items).success
        assert (repo.stock_of("1"), repo.stock_of("2")) == (7, 5)

        assert svc.restore(items).success
        assert (repo.stock_of("1"), repo.stock_of("2")) == (10, 7)

    def test_failure_keeps_already_restored_products(self):
        repo = _make_repo(
            ("1", "A1", "Widget", 0),
            ("2", "G1", "Gadget", 0),
            ("3", "C1", "Cable", 0),
            save_hook=_fail_saves_of("3"),
        )
        items = [PackagingItem("A1"), PackagingItem("G1"), PackagingItem("C1")]

        result = StockReconciliationService(repo).restore(items)

        assert not result.success
        assert result.errors == ["Failed to restore stock for Cable: write rejected"]
        assert repo.stock_of("1") == 1
        assert repo.stock_of("2") == 1
        assert repo.stock_of("3") == 0
        assert result.rolled_back == []

    def test_backend_error_does_not_stop_the_loop(self):
        repo = _make_repo(
            ("1", "A1", "Widget", 0),
            ("2", "G1", "Gadget", 0),
            save_hook=_fail_saves_of("1", error=OSError("disk full")),
        )

        result = StockReconciliationService(repo).restore([PackagingItem("A1"), PackagingItem("G1")])

        assert result.errors == ["Failed to restore stock for Widget: disk full"]
        assert repo.stock_of("1") == 0
        assert repo.stock_of("2") == 1

    def test_no_upper_bound(self):
        repo = _make_repo(("1", "A1", "Widget", 10))
        item = _bundle(repo, ("1", 1000))
        StockReconciliationService(repo).restore([item])
        assert repo.stock_of("1") == 1010


class TestScenarios:

    def test_two_scans_deduct_and_restore(self):
        repo = _make_repo(("1", "A1", "Widget", 10))
        svc = StockReconciliationService(repo)
        batch = [PackagingItem("A1"), PackagingItem("A1")]

        assert svc.deduct(batch).success
        assert repo.stock_of("1") == 8

        assert svc.restore(batch).success
        assert repo.stock_of("1") == 10

    def test_bundle_of_two_against_three_in_stock(self):
        repo = FakeProductRepository([
            Product(id="1", barcode="A1", name="Widget", stock_quantity=3),
            Product(id="2", barcode="B1", name="Pair", type=ProductType.BUNDLE),
        ])
        widget = repo.get_by_id("1")
        item = PackagingItem("B1", is_bundle=True, bundle_components=(BundleComponent(widget, 2),))
        svc = StockReconciliationService(repo)

        validation = svc.validate([item, item])
        assert validation.insufficient == [
            StockShortfall(barcode="A1", name="Widget", required=4, available=3)
        ]

        result = svc.deduct([item, item])
        assert len(result.errors) == 1
        assert "Widget" in result.errors[0]
        assert repo.saves == []
