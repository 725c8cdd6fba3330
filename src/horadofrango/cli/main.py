"""Main CLI entry point."""

from datetime import datetime

import click
from horadofrango.database.factories import create_sqlite_database
from horadofrango.domain.store import FinanceStore
from horadofrango.utils.log_setup import setup_logging

# Import and register all commands at module level
from horadofrango.cli.commands import (
    bank,
    category,
    transaction,
    fiado,
    dashboard,
    forecast,
    reset,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides HDF_DB_PATH environment variable)",
    envvar="HDF_DB_PATH",
)
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    help="Log level (DEBUG, INFO, WARNING, ERROR)",
    envvar="HDF_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Hora do Frango - finance tracker for a small food business.

    Record sales and expenses, track customer credit (fiado), see the
    dashboard and simulate purchases.
    """
    ctx.ensure_object(dict)

    # Open the store only when actually running a command (not for --help)
    if ctx.invoked_subcommand is not None:
        setup_logging(log_level)
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["store"] = FinanceStore(db, now=ctx.obj.get("now", datetime.now))
        ctx.call_on_close(db.disconnect)


# Register all commands
bank.register_commands(cli)
category.register_commands(cli)
transaction.register_commands(cli)
fiado.register_commands(cli)
dashboard.register_commands(cli)
forecast.register_commands(cli)
reset.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
