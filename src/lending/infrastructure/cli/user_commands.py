"""CLI commands for members."""

from __future__ import annotations

import click

from lending.application.register_user import ListUsersHandler, RegisterUserHandler
from lending.infrastructure.bootstrap import Container
from lending.infrastructure.cli.errors import reported_errors


@click.command("add")
@click.option("--username", required=True, help="Unique username.")
@click.option("--email", required=True, help="Contact email address.")
@click.option(
    "--role",
    type=click.Choice(["MEMBER", "ADMIN"], case_sensitive=False),
    default="MEMBER",
    show_default=True,
)
@click.pass_obj
def user_add(container: Container, username: str, email: str, role: str) -> None:
    """Register a new user."""
    handler = RegisterUserHandler(user_repo=container.users)

    with reported_errors():
        dto = handler.handle(username=username, email=email, role=role)

    click.echo(f"User #{dto.id} registered: {dto.username} <{dto.email}> ({dto.role})")


@click.command("list")
@click.pass_obj
def user_list(container: Container) -> None:
    """List registered users."""
    handler = ListUsersHandler(user_repo=container.users)

    with reported_errors():
        users = handler.handle()

    if not users:
        click.echo("No users registered.")
        return
    for dto in users:
        click.echo(f"{dto.id:>4}  {dto.username:<20} {dto.email:<30} {dto.role}")
