"""Supplier management commands."""

import click
from tillbook.cli.entity_resolution import resolve_entity_or_exit
from tillbook.cli.error_handling import handle_domain_error
from tillbook.cli.money import money
from tillbook.cli.tables import echo_entity_ledger
from tillbook.domain.supplier import SupplierService
from tillbook.domain.errors import DataIntegrityError, DomainError


@click.group()
def supplier_group():
    """Manage suppliers."""
    pass


@supplier_group.command("add")
@click.argument("name", metavar="SUPPLIER_NAME")
@click.option("--phone", help="Phone number")
@click.option("--email", help="Email address")
@click.option("--address", help="Postal address")
@click.option("--notes", help="Optional notes")
@click.pass_context
def add_supplier(ctx, name: str, phone: str | None, email: str | None, address: str | None, notes: str | None):
    """Add a supplier with a zero balance.

    Examples:
        tillbook supplier add "Fresh Farms"
        tillbook supplier add "Metro Wholesale" --phone 555-0199
    """
    db = ctx.obj["db"]
    service = SupplierService(db)

    try:
        supplier_id = service.create_supplier(
            name=name, phone=phone, email=email, address=address, notes=notes
        )
        click.echo(f"Created supplier '{name}' (ID: {supplier_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@supplier_group.command("list")
@click.pass_context
def list_suppliers(ctx):
    """List all suppliers with their balance (positive means we owe them)."""
    db = ctx.obj["db"]
    service = SupplierService(db)

    suppliers = service.list_suppliers()
    if not suppliers:
        click.echo("No suppliers found.")
        return

    click.echo("\nSuppliers:")
    click.echo("-" * 60)
    for c in suppliers:
        click.echo(f"ID: {c.id:3d} | {c.name:25s} | Balance: {money(db, c.balance):>12}")


@supplier_group.command("ledger")
@click.argument("supplier", metavar="SUPPLIER")
@click.pass_context
def supplier_ledger(ctx, supplier: str):
    """Show a supplier's purchases and payments with running balance.

    SUPPLIER can be a supplier name or ID.
    """
    db = ctx.obj["db"]
    service = SupplierService(db)
    supplier_id = resolve_entity_or_exit(ctx, service.list_suppliers(), supplier, "supplier")

    try:
        entity = service.get_supplier(supplier_id)
        entries = service.get_ledger(supplier_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    echo_entity_ledger(db, f"Supplier {entity.name} (ID: {entity.id})", entries, entity.balance)
    try:
        service.verify_balance(supplier_id)
    except DataIntegrityError as e:
        click.echo(f"Warning: {e}", err=True)


def register_commands(cli):
    """Register supplier commands with main CLI."""
    cli.add_command(supplier_group, name="supplier")
