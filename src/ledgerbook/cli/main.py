"""Main CLI entry point."""

import click
from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.logging_config import configure_logging
from ledgerbook.settings import DB_PATH_ENV, HST_RATE_ENV, LOG_LEVEL_ENV, Settings
from ledgerbook.utils.amount_parser import to_decimal

# Import and register all commands at module level
from ledgerbook.cli.commands import (
    accounts,
    transaction,
    budget,
    property,
    notifications,
    tax_lines,
    import_cmd,
    mileage,
    invoice,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV} environment variable)",
    envvar=DB_PATH_ENV,
)
@click.option(
    "--hst-rate",
    help="Sales tax rate as a fraction, e.g. 0.13",
    envvar=HST_RATE_ENV,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar=LOG_LEVEL_ENV,
    help="Log level for diagnostic output on stderr",
)
@click.option("--log-json", is_flag=True, help="Emit JSON log lines")
@click.pass_context
def cli(ctx, db_path: str | None, hst_rate: str | None, log_level: str | None, log_json: bool):
    """Ledgerbook - bookkeeping for business, rental and personal ledgers.

    Classifies transactions into double-entry journal entries, derives HST
    and CCA figures, and tracks monthly budgets.
    """
    ctx.ensure_object(dict)

    try:
        settings = Settings.from_env()
        rate = to_decimal(hst_rate, "hst_rate", non_negative=True) if hst_rate else settings.hst_rate
        settings = Settings(
            db_path=db_path or settings.db_path,
            hst_rate=rate,
            log_level=(log_level or settings.log_level).upper(),
            log_json=log_json or settings.log_json,
        )
        configure_logging(settings.log_level, json=settings.log_json)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    ctx.obj["settings"] = settings

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None and "db" not in ctx.obj:
        db = create_sqlite_database(database_path=settings.db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
accounts.register_commands(cli)
transaction.register_commands(cli)
budget.register_commands(cli)
property.register_commands(cli)
notifications.register_commands(cli)
tax_lines.register_commands(cli)
import_cmd.register_commands(cli)
mileage.register_commands(cli)
invoice.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
