"""Customer management commands."""

import click
from tillbook.cli.entity_resolution import resolve_entity_or_exit
from tillbook.cli.error_handling import handle_domain_error
from tillbook.cli.money import money
from tillbook.cli.tables import echo_entity_ledger
from tillbook.domain.customer import CustomerService
from tillbook.domain.errors import DataIntegrityError, DomainError


@click.group()
def customer_group():
    """Manage customers."""
    pass


@customer_group.command("add")
@click.argument("name", metavar="CUSTOMER_NAME")
@click.option("--phone", help="Phone number")
@click.option("--email", help="Email address")
@click.option("--address", help="Postal address")
@click.option("--notes", help="Optional notes")
@click.pass_context
def add_customer(ctx, name: str, phone: str | None, email: str | None, address: str | None, notes: str | None):
    """Add a customer with a zero balance.

    Examples:
        tillbook customer add "Alice Martin"
        tillbook customer add "Bob's Diner" --phone 555-0101
    """
    db = ctx.obj["db"]
    service = CustomerService(db)

    try:
        customer_id = service.create_customer(
            name=name, phone=phone, email=email, address=address, notes=notes
        )
        click.echo(f"Created customer '{name}' (ID: {customer_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@customer_group.command("list")
@click.pass_context
def list_customers(ctx):
    """List all customers with their balance (positive means they owe us)."""
    db = ctx.obj["db"]
    service = CustomerService(db)

    customers = service.list_customers()
    if not customers:
        click.echo("No customers found.")
        return

    click.echo("\nCustomers:")
    click.echo("-" * 60)
    for c in customers:
        click.echo(f"ID: {c.id:3d} | {c.name:25s} | Balance: {money(db, c.balance):>12}")


@customer_group.command("ledger")
@click.argument("customer", metavar="CUSTOMER")
@click.pass_context
def customer_ledger(ctx, customer: str):
    """Show a customer's sales and payments with running balance.

    CUSTOMER can be a customer name or ID.
    """
    db = ctx.obj["db"]
    service = CustomerService(db)
    customer_id = resolve_entity_or_exit(ctx, service.list_customers(), customer, "customer")

    try:
        entity = service.get_customer(customer_id)
        entries = service.get_ledger(customer_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    echo_entity_ledger(db, f"Customer {entity.name} (ID: {entity.id})", entries, entity.balance)
    try:
        service.verify_balance(customer_id)
    except DataIntegrityError as e:
        click.echo(f"Warning: {e}", err=True)


def register_commands(cli):
    """Register customer commands with main CLI."""
    cli.add_command(customer_group, name="customer")
