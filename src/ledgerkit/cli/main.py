"""Main CLI entry point."""

import click
from ledgerkit.config import get_settings
from ledgerkit.database.factories import create_database
from ledgerkit.logging_config import setup_logging

# Import and register all commands at module level
from ledgerkit.cli.commands import (
    user,
    account,
    movement,
    history,
    statement,
)


@click.group()
@click.option(
    "--db-url",
    help="SQLAlchemy database URL (overrides LEDGERKIT_DATABASE_URL environment variable)",
    envvar="LEDGERKIT_DATABASE_URL",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    envvar="LEDGERKIT_LOG_LEVEL",
    help="Log level for messages written to stderr",
)
@click.pass_context
def cli(ctx, db_url: str | None, log_level: str | None):
    """ledgerkit - Account ledger.

    Open accounts, move money in and out, and browse transaction history.
    """
    ctx.ensure_object(dict)

    settings = get_settings()
    setup_logging(log_level or settings.log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=db_url, settings=settings)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["settings"] = settings


# Register all commands
user.register_commands(cli)
account.register_commands(cli)
movement.register_commands(cli)
history.register_commands(cli)
statement.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
