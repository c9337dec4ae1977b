"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from packstock.application.add_product import AddProductHandler
from packstock.application.delete_product import DeleteProductHandler
from packstock.application.list_products import ListProductsHandler
from packstock.application.set_stock import SetStockHandler
from packstock.application.show_product import ShowProductHandler
from packstock.application.update_product import UpdateProductHandler
from packstock.domain.exceptions import DomainException
from packstock.infrastructure.bootstrap import component_repository, product_repository


@click.command("add")
@click.option("--barcode", required=True, help="Scan barcode (must be unique).")
@click.option("--name", required=True, help="Product name.")
@click.option("--type", "type_", type=click.Choice(["single", "bundle"]), default="single", show_default=True)
@click.option("--cost", default="0", help="Unit cost (e.g. 12.50).")
@click.option("--stock", default=0, type=int, help="Initial stock quantity.")
@click.option("--sku", default=None, help="Optional SKU code.")
def product_add(barcode: str, name: str, type_: str, cost: str, stock: int, sku: str | None) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            barcode=barcode, name=name, type=type_, cost=cost,
            stock_quantity=stock, sku_code=sku,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added ({product.type.value}, stock {product.stock_quantity})")


@click.command("list")
@click.option("--type", "type_", type=click.Choice(["single", "bundle"]), default=None)
@click.option("--search", default=None, help="Substring of barcode, name or SKU.")
@click.option("--limit", default=None, type=int)
@click.option("--offset", default=0, type=int)
def product_list(type_: str | None, search: str | None, limit: int | None, offset: int) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(product_repo=product_repository())

    try:
        page = handler.handle(type=type_, search=search, limit=limit, offset=offset)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not page.items:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Barcode':<16} {'Name':<24} {'Type':<7} {'Stock':>7}")
    click.echo("-" * 64)
    for p in page.items:
        click.echo(f"{p.id:<6} {p.barcode:<16} {p.name:<24} {p.type:<7} {p.stock_quantity:>7}")
    click.echo(f"{len(page.items)} of {page.total} product(s)")


@click.command("show")
@click.option("--id", "product_id", default=None, help="Product ID.")
@click.option("--barcode", default=None, help="Product barcode.")
@click.option("--sku", default=None, help="Product SKU code.")
def product_show(product_id: str | None, barcode: str | None, sku: str | None) -> None:
    """Show a product; bundles are shown with their components."""
    if sum(v is not None for v in (product_id, barcode, sku)) != 1:
        raise click.UsageError("Give exactly one of --id, --barcode or --sku.")

    handler = ShowProductHandler(
        product_repo=product_repository(),
        component_repo=component_repository(),
    )

    try:
        if product_id is None:
            found = handler.by_barcode(barcode) if barcode is not None else handler.by_sku(sku)
            product_id = found.id
        detail = handler.with_components(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    p = detail.product
    click.echo(f"Product #{p.id}  {p.name}  ({p.type})")
    click.echo(f"Barcode: {p.barcode}")
    click.echo(f"SKU:     {p.sku_code or '-'}")
    click.echo(f"Cost:    {p.cost}")
    click.echo(f"Stock:   {p.stock_quantity}")

    if detail.components:
        click.echo()
        click.echo(f"  {'Barcode':<16} {'Name':<24} {'Qty':>5} {'Stock':>7}")
        click.echo(f"  {'-'*55}")
        for line in detail.components:
            click.echo(f"  {line.barcode:<16} {line.name:<24} {line.quantity:>5} {line.stock_quantity:>7}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None)
@click.option("--barcode", default=None)
@click.option("--sku", default=None)
@click.option("--cost", default=None)
@click.option("--type", "type_", type=click.Choice(["single", "bundle"]), default=None)
def product_update(
    product_id: str,
    name: str | None,
    barcode: str | None,
    sku: str | None,
    cost: str | None,
    type_: str | None,
) -> None:
    """Edit product fields."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id, name=name, barcode=barcode, sku_code=sku, cost=cost, type=type_)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} updated.")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Delete a product and every bundle link that mentions it."""
    handler = DeleteProductHandler(
        product_repo=product_repository(),
        component_repo=component_repository(),
    )

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")


@click.command("set-stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New stock level (negative becomes 0).")
def product_set_stock(product_id: str, quantity: int) -> None:
    """Overwrite a product's stock level."""
    handler = SetStockHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{dto.name}' set to {dto.stock_quantity}")
