"""CLI commands for borrowing and returning."""

from __future__ import annotations

from datetime import date, datetime

import click

from lending.application.borrow_item import BorrowItemHandler
from lending.application.return_item import ReturnItemHandler
from lending.application.show_loans import (
    CheckEligibilityHandler,
    OverdueReportHandler,
    ShowLoansHandler,
)
from lending.infrastructure.bootstrap import Container
from lending.infrastructure.cli.errors import DATE, reported_errors


def _as_date(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


@click.command("borrow")
@click.option("--user", "user_id", required=True, type=int, help="Borrowing user ID.")
@click.option("--item", "item_id", required=True, type=int, help="Item ID to borrow.")
@click.option("--date", "on", type=DATE, default=None, help="Loan date (default: today).")
@click.pass_obj
def loan_borrow(container: Container, user_id: int, item_id: int, on: datetime | None) -> None:
    """Borrow one copy of an item."""
    handler = BorrowItemHandler(coordinator=container.coordinator)

    with reported_errors():
        dto = handler.handle(user_id, item_id, _as_date(on))

    click.echo(f"Loan #{dto.id} opened: item #{dto.item_id} due {dto.due_date}.")


@click.command("return")
@click.option("--id", "loan_id", required=True, type=int, help="Loan ID to close.")
@click.option("--date", "on", type=DATE, default=None, help="Return date (default: today).")
@click.pass_obj
def loan_return(container: Container, loan_id: int, on: datetime | None) -> None:
    """Return a borrowed item (hands it to the next reservation, if any)."""
    handler = ReturnItemHandler(coordinator=container.coordinator, queue=container.queue)

    with reported_errors():
        dto = handler.handle(loan_id, _as_date(on))

    click.echo(f"Loan #{dto.loan.id} returned on {dto.loan.return_date}.")
    if dto.fine is not None:
        click.echo(f"Late return: fine #{dto.fine.id} of {dto.fine.amount} issued.")
    if dto.fulfilled is not None:
        click.echo(
            f"Reservation #{dto.fulfilled.id} for user #{dto.fulfilled.user_id} "
            f"fulfilled; pickup by {dto.fulfilled.expiry_date}."
        )


@click.command("list")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
@click.option("--active", is_flag=True, default=False, help="Only loans not yet returned.")
@click.pass_obj
def loan_list(container: Container, user_id: int, active: bool) -> None:
    """List a user's loans."""
    handler = ShowLoansHandler(coordinator=container.coordinator, user_repo=container.users)

    with reported_errors():
        loans = handler.handle(user_id, active_only=active)

    if not loans:
        click.echo("No loans found.")
        return
    click.echo(f"{'ID':>4}  {'Item':>5}  {'Loaned':<10}  {'Due':<10}  {'Returned':<10}  Status")
    click.echo("-" * 62)
    for dto in loans:
        status = "OVERDUE" if dto.overdue else dto.status
        click.echo(
            f"{dto.id:>4}  {dto.item_id:>5}  {dto.loan_date:<10}  {dto.due_date:<10}  "
            f"{dto.return_date or '-':<10}  {status}"
        )


@click.command("eligible")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
@click.option("--date", "on", type=DATE, default=None, help="Check as of (default: today).")
@click.pass_obj
def loan_eligible(container: Container, user_id: int, on: datetime | None) -> None:
    """Check whether a user may borrow."""
    handler = CheckEligibilityHandler(
        coordinator=container.coordinator, user_repo=container.users
    )

    with reported_errors():
        eligible = handler.handle(user_id, _as_date(on))

    if eligible:
        click.echo(f"User #{user_id} may borrow.")
    else:
        click.echo(f"User #{user_id} may not borrow: overdue loans or unpaid fines.")


@click.command("overdue")
@click.option("--date", "on", type=DATE, default=None, help="Report as of (default: today).")
@click.pass_obj
def loan_overdue(container: Container, on: datetime | None) -> None:
    """List users with overdue loans (input for reminder notices)."""
    handler = OverdueReportHandler(report=container.overdue_report)

    with reported_errors():
        notices = handler.handle(_as_date(on))

    if not notices:
        click.echo("No overdue loans.")
        return
    for notice in notices:
        click.echo(f"User #{notice.user_id} <{notice.email or '?'}>: {notice.message}")
