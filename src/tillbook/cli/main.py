"""Main CLI entry point."""

import logging

import click
from tillbook.database.factories import create_sqlite_database

# Import and register all commands at module level
from tillbook.cli.commands import (
    session,
    customer,
    supplier,
    record,
    currency,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides TILLBOOK_DB_PATH environment variable)",
    envvar="TILLBOOK_DB_PATH",
)
@click.option(
    "--operator",
    default="admin",
    show_default=True,
    envvar="TILLBOOK_OPERATOR",
    help="Name recorded as the operator opening or closing sessions",
)
@click.option("--verbose", "-v", is_flag=True, help="Log session and currency changes")
@click.pass_context
def cli(ctx, db_path: str | None, operator: str, verbose: bool):
    """Tillbook - cash register and shop ledger.

    Open and close cash register sessions, record sales, purchases,
    payments and expenses, and follow customer and supplier balances.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["operator"] = operator
        ctx.call_on_close(db.disconnect)


# Register all commands
session.register_commands(cli)
customer.register_commands(cli)
supplier.register_commands(cli)
record.register_commands(cli)
currency.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
