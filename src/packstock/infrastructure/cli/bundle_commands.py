"""CLI commands for bundle composition."""

from __future__ import annotations

import click

from packstock.application.add_component import AddComponentHandler
from packstock.application.clear_bundle import ClearBundleHandler
from packstock.application.list_components import ListComponentsHandler
from packstock.application.remove_component import RemoveComponentHandler
from packstock.application.update_component import UpdateComponentHandler
from packstock.domain.exceptions import DomainException
from packstock.infrastructure.bootstrap import (
    bundle_delete_delay_ms,
    component_repository,
    product_repository,
)


@click.command("add")
@click.option("--parent", "parent_id", required=True, help="Bundle product ID.")
@click.option("--child", "child_id", required=True, help="Component product ID.")
@click.option("--quantity", default=1, type=int, show_default=True, help="Units of child per bundle.")
def bundle_add(parent_id: str, child_id: str, quantity: int) -> None:
    """Add a component to a bundle."""
    handler = AddComponentHandler(
        product_repo=product_repository(),
        component_repo=component_repository(),
    )

    try:
        dto = handler.handle(parent_id, child_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Component #{dto.id}: {dto.quantity} x product #{dto.child_product_id} in bundle #{dto.parent_product_id}")


@click.command("list")
@click.option("--parent", "parent_id", default=None, help="List the components of this bundle.")
@click.option("--child", "child_id", default=None, help="List the bundles containing this product.")
def bundle_list(parent_id: str | None, child_id: str | None) -> None:
    """List component links."""
    if (parent_id is None) == (child_id is None):
        raise click.UsageError("Give exactly one of --parent or --child.")

    handler = ListComponentsHandler(component_repo=component_repository())

    try:
        lines = handler.for_bundle(parent_id) if parent_id is not None else handler.containing(child_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No components found.")
        return

    click.echo(f"{'ID':<6} {'Bundle':<8} {'Child':<8} {'Qty':>5}")
    click.echo("-" * 30)
    for c in lines:
        click.echo(f"{c.id:<6} {c.parent_product_id:<8} {c.child_product_id:<8} {c.quantity:>5}")


@click.command("update")
@click.option("--id", "component_id", required=True, help="Component ID.")
@click.option("--quantity", required=True, type=int)
def bundle_update(component_id: str, quantity: int) -> None:
    """Change how many units of a component a bundle holds."""
    handler = UpdateComponentHandler(
        product_repo=product_repository(),
        component_repo=component_repository(),
    )

    try:
        handler.handle(component_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Component #{component_id} quantity set to {quantity}")


@click.command("remove")
@click.option("--id", "component_id", required=True, help="Component ID.")
def bundle_remove(component_id: str) -> None:
    """Remove one component from a bundle."""
    handler = RemoveComponentHandler(
        product_repo=product_repository(),
        component_repo=component_repository(),
    )

    try:
        handler.handle(component_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Component #{component_id} removed.")


@click.command("clear")
@click.option("--parent", "parent_id", required=True, help="Bundle product ID.")
@click.option("--delay-ms", default=None, type=int, help="Pause between deletes (defaults to settings).")
def bundle_clear(parent_id: str, delay_ms: int | None) -> None:
    """Remove every component from a bundle."""
    handler = ClearBundleHandler(
        product_repo=product_repository(),
        component_repo=component_repository(),
        default_delay_ms=bundle_delete_delay_ms(),
    )

    try:
        removed = handler.handle(parent_id, delay_ms=delay_ms)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Removed {removed} component(s) from bundle #{parent_id}")
