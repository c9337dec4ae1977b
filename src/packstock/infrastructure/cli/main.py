import click

from packstock.infrastructure.cli.bundle_commands import (
    bundle_add,
    bundle_clear,
    bundle_list,
    bundle_remove,
    bundle_update,
)
from packstock.infrastructure.cli.packaging_commands import (
    packaging_check,
    packaging_commit,
    packaging_reverse,
)
from packstock.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_set_stock,
    product_show,
    product_update,
)
from packstock.infrastructure.config import get_settings
from packstock.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """packstock — packaging stock and bundle management"""
    configure_logging(get_settings())


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def bundle() -> None:
    """Manage bundle composition."""


@cli.group()
def packaging() -> None:
    """Check, deduct and restore stock for packaging batches."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_set_stock)
product.add_command(product_show)
product.add_command(product_update)
bundle.add_command(bundle_add)
bundle.add_command(bundle_clear)
bundle.add_command(bundle_list)
bundle.add_command(bundle_remove)
bundle.add_command(bundle_update)
packaging.add_command(packaging_check)
packaging.add_command(packaging_commit)
packaging.add_command(packaging_reverse)
