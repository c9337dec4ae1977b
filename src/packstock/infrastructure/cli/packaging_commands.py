"""CLI commands for packaging stock checks and movements."""

from __future__ import annotations

import click

from packstock.application.check_packaging_stock import CheckPackagingStockHandler
from packstock.application.commit_packaging import CommitPackagingHandler
from packstock.application.reverse_packaging import ReversePackagingHandler
from packstock.domain.exceptions import DomainException
from packstock.domain.model.stock_outcome import StockMutationResult
from packstock.infrastructure.bootstrap import component_repository, product_repository


def _echo_skipped(skipped: list[str]) -> None:
    for barcode in skipped:
        click.echo(f"Skipped unknown barcode: {barcode}")


def _report(result: StockMutationResult, done: str) -> None:
    """Shared output for commit/reverse; exits non-zero on failure."""
    _echo_skipped(result.skipped_barcodes)
    if result.success:
        click.echo(done)
        return

    for error in result.errors:
        click.echo(f"  - {error}")
    for failure in result.rollback_failures:
        click.echo(
            f"  ! rollback failed for product #{failure.product_id} "
            f"(should be {failure.previous_stock}): {failure.reason}"
        )
    raise click.ClickException(f"{len(result.errors)} product(s) failed")


@click.command("check")
@click.argument("barcodes", nargs=-1, required=True)
def packaging_check(barcodes: tuple[str, ...]) -> None:
    """Check that stock covers the scanned BARCODES (nothing is written)."""
    handler = CheckPackagingStockHandler(
        product_repo=product_repository(),
        component_repo=component_repository(),
    )

    try:
        result = handler.handle(list(barcodes))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_skipped(result.skipped_barcodes)
    if result.valid:
        click.echo("Stock is sufficient.")
        return

    click.echo(f"{'Barcode':<16} {'Name':<24} {'Required':>9} {'Available':>10}")
    click.echo("-" * 62)
    for s in result.insufficient:
        click.echo(f"{s.barcode:<16} {s.name:<24} {s.required:>9} {s.available:>10}")
    raise click.ClickException("Insufficient stock")


@click.command("commit")
@click.argument("barcodes", nargs=-1, required=True)
def packaging_commit(barcodes: tuple[str, ...]) -> None:
    """Deduct stock for the scanned BARCODES."""
    handler = CommitPackagingHandler(
        product_repo=product_repository(),
        component_repo=component_repository(),
    )

    try:
        result = handler.handle(list(barcodes))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _report(result, "Stock deducted.")


@click.command("reverse")
@click.argument("barcodes", nargs=-1, required=True)
def packaging_reverse(barcodes: tuple[str, ...]) -> None:
    """Give back stock for the scanned BARCODES."""
    handler = ReversePackagingHandler(
        product_repo=product_repository(),
        component_repo=component_repository(),
    )

    try:
        result = handler.handle(list(barcodes))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _report(result, "Stock restored.")
