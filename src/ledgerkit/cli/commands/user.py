"""User management commands."""

import click
from ledgerkit.cli.error_handling import handle_domain_error, handle_persistence_error
from ledgerkit.domain.errors import DomainError, PersistenceError
from ledgerkit.domain.user import UserService


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("first_name")
@click.argument("last_name")
@click.argument("email")
@click.pass_context
def create_user(ctx, first_name: str, last_name: str, email: str):
    """Create a new user.

    Examples:
        ledgerkit user create Ada Lovelace ada@example.com
    """
    service = UserService(ctx.obj["db"])

    try:
        user = service.create_user(first_name=first_name, last_name=last_name, email=email)
        click.echo(f"Created user '{user.full_name}' (ID: {user.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)
    except PersistenceError as e:
        handle_persistence_error(ctx, e)


@user_group.command("show")
@click.argument("user_id", type=int)
@click.pass_context
def show_user(ctx, user_id: int):
    """Show a user's details."""
    service = UserService(ctx.obj["db"])

    try:
        user = service.require_user(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    except PersistenceError as e:
        handle_persistence_error(ctx, e)
        return

    click.echo(f"ID:      {user.id}")
    click.echo(f"Name:    {user.full_name}")
    click.echo(f"Email:   {user.email}")
    click.echo(f"Created: {user.created_at:%Y-%m-%d %H:%M}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
