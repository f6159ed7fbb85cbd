from __future__ import annotations

from pathlib import Path

import click

from lending.infrastructure.bootstrap import build_container
from lending.infrastructure.cli.fine_commands import fine_list, fine_pay, fine_pay_all
from lending.infrastructure.cli.item_commands import item_add, item_list, item_search
from lending.infrastructure.cli.loan_commands import (
    loan_borrow,
    loan_eligible,
    loan_list,
    loan_overdue,
    loan_return,
)
from lending.infrastructure.cli.reservation_commands import (
    reservation_cancel,
    reservation_create,
    reservation_expire,
    reservation_fulfill,
    reservation_list,
    reservation_position,
    reservation_queue,
)
from lending.infrastructure.cli.user_commands import user_add, user_list
from lending.infrastructure.logging_config import configure_logging, resolve_level


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the JSON data files (overrides LENDING_DATA_DIR).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log state changes.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, verbose: bool) -> None:
    """Library lending and reservations"""
    configure_logging(resolve_level(verbose))
    ctx.obj = build_container(data_dir)


@cli.group()
def item() -> None:
    """Manage the media catalog."""


@cli.group()
def user() -> None:
    """Manage members."""


@cli.group()
def loan() -> None:
    """Borrow and return items."""


@cli.group()
def reservation() -> None:
    """Manage reservation queues."""


@cli.group()
def fine() -> None:
    """View and pay fines."""


# Register subcommands
item.add_command(item_add)
item.add_command(item_list)
item.add_command(item_search)
user.add_command(user_add)
user.add_command(user_list)
loan.add_command(loan_borrow)
loan.add_command(loan_return)
loan.add_command(loan_list)
loan.add_command(loan_eligible)
loan.add_command(loan_overdue)
reservation.add_command(reservation_create)
reservation.add_command(reservation_cancel)
reservation.add_command(reservation_fulfill)
reservation.add_command(reservation_expire)
reservation.add_command(reservation_position)
reservation.add_command(reservation_queue)
reservation.add_command(reservation_list)
fine.add_command(fine_list)
fine.add_command(fine_pay)
fine.add_command(fine_pay_all)
