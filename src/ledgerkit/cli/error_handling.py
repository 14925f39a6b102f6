"""CLI error handling helpers."""

import click

from ledgerkit.domain.errors import DomainError, PersistenceError
from ledgerkit.logging_config import get_logger

logger = get_logger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_persistence_error(ctx: click.Context, error: PersistenceError) -> None:
    """Log a store failure in full and show the user a generic message."""
    logger.error("%s", error, exc_info=error)
    click.echo("Error: operation failed, please try again later", err=True)
    ctx.exit(1)
