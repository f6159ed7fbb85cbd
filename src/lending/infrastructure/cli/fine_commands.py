"""CLI commands for fines."""

from __future__ import annotations

from datetime import datetime

import click

from lending.application.pay_fines import PayAllFinesHandler, PayFineHandler, ShowFinesHandler
from lending.infrastructure.bootstrap import Container
from lending.infrastructure.cli.errors import DATE, reported_errors


@click.command("list")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
@click.option("--unpaid", is_flag=True, default=False, help="Only fines not yet paid.")
@click.pass_obj
def fine_list(container: Container, user_id: int, unpaid: bool) -> None:
    """List a user's fines."""
    handler = ShowFinesHandler(ledger=container.ledger, user_repo=container.users)

    with reported_errors():
        statement = handler.handle(user_id, unpaid_only=unpaid)

    if not statement.fines:
        click.echo("No fines found.")
    else:
        click.echo(f"{'ID':>4}  {'Loan':>5}  {'Amount':>12}  {'Issued':<10}  {'Paid':<10}  Status")
        click.echo("-" * 60)
        for dto in statement.fines:
            click.echo(
                f"{dto.id:>4}  {dto.loan_id:>5}  {dto.amount:>12}  {dto.issued_date:<10}  "
                f"{dto.paid_date or '-':<10}  {dto.status}"
            )
    click.echo(f"Total unpaid: {statement.total_unpaid}")


@click.command("pay")
@click.option("--id", "fine_id", required=True, type=int, help="Fine ID to pay.")
@click.option("--date", "on", type=DATE, default=None, help="Payment date (default: today).")
@click.pass_obj
def fine_pay(container: Container, fine_id: int, on: datetime | None) -> None:
    """Pay a single fine."""
    handler = PayFineHandler(ledger=container.ledger)

    with reported_errors():
        dto = handler.handle(fine_id, on.date() if on else None)

    click.echo(f"Fine #{dto.id} of {dto.amount} paid on {dto.paid_date}.")


@click.command("pay-all")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
@click.option("--date", "on", type=DATE, default=None, help="Payment date (default: today).")
@click.pass_obj
def fine_pay_all(container: Container, user_id: int, on: datetime | None) -> None:
    """Pay every outstanding fine for a user."""
    handler = PayAllFinesHandler(ledger=container.ledger, user_repo=container.users)

    with reported_errors():
        paid = handler.handle(user_id, on.date() if on else None)

    if not paid:
        click.echo(f"User #{user_id} has no unpaid fines.")
        return
    click.echo(f"Paid {len(paid)} fine(s) for user #{user_id}.")
