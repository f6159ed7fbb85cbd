"""CLI commands for reservation queues."""

from __future__ import annotations

from datetime import datetime

import click

from lending.application.cancel_reservation import CancelReservationHandler
from lending.application.dto import ReservationDTO
from lending.application.fulfill_reservation import (
    ExpireReservationsHandler,
    FulfillReservationHandler,
)
from lending.application.reserve_item import ReserveItemHandler
from lending.application.show_queue import (
    ReservationPositionHandler,
    ShowQueueHandler,
    ShowUserReservationsHandler,
)
from lending.infrastructure.bootstrap import Container
from lending.infrastructure.cli.errors import TIMESTAMP, reported_errors


def _display_reservations(reservations: list[ReservationDTO]) -> None:
    if not reservations:
        click.echo("No reservations found.")
        return
    click.echo(f"{'Pos':>4}  {'ID':>4}  {'User':>5}  {'Item':>5}  {'Reserved':<16}  {'Expires':<16}  Status")
    click.echo("-" * 72)
    for dto in reservations:
        position = dto.position if dto.position > 0 else "-"
        click.echo(
            f"{position:>4}  {dto.id:>4}  {dto.user_id:>5}  {dto.item_id:>5}  "
            f"{dto.reservation_date:<16}  {dto.expiry_date:<16}  {dto.status}"
        )


@click.command("create")
@click.option("--user", "user_id", required=True, type=int, help="Reserving user ID.")
@click.option("--item", "item_id", required=True, type=int, help="Item ID to reserve.")
@click.option("--at", "now", type=TIMESTAMP, default=None, help="Reservation time (default: now).")
@click.pass_obj
def reservation_create(
    container: Container, user_id: int, item_id: int, now: datetime | None
) -> None:
    """Join the reservation queue for an unavailable item."""
    handler = ReserveItemHandler(queue=container.queue)

    with reported_errors():
        dto = handler.handle(user_id, item_id, now)

    click.echo(
        f"Reservation #{dto.id} created: position {dto.position} in the queue, "
        f"held until {dto.expiry_date}."
    )


@click.command("cancel")
@click.option("--id", "reservation_id", required=True, type=int, help="Reservation ID.")
@click.option("--user", "user_id", required=True, type=int, help="Owning user ID.")
@click.pass_obj
def reservation_cancel(container: Container, reservation_id: int, user_id: int) -> None:
    """Cancel one of your reservations."""
    handler = CancelReservationHandler(queue=container.queue)

    with reported_errors():
        handler.handle(reservation_id, user_id)

    click.echo(f"Reservation #{reservation_id} cancelled.")


@click.command("fulfill")
@click.option("--item", "item_id", required=True, type=int, help="Item ID.")
@click.option("--at", "now", type=TIMESTAMP, default=None, help="Fulfillment time (default: now).")
@click.pass_obj
def reservation_fulfill(container: Container, item_id: int, now: datetime | None) -> None:
    """Fulfill the head of an item's queue."""
    handler = FulfillReservationHandler(queue=container.queue)

    with reported_errors():
        dto = handler.handle(item_id, now)

    if dto is None:
        click.echo(f"No active reservations for item #{item_id}.")
        return
    click.echo(
        f"Reservation #{dto.id} for user #{dto.user_id} fulfilled; "
        f"pickup by {dto.expiry_date}."
    )


@click.command("expire")
@click.option("--at", "now", type=TIMESTAMP, default=None, help="Sweep time (default: now).")
@click.pass_obj
def reservation_expire(container: Container, now: datetime | None) -> None:
    """Expire reservations whose hold has run out."""
    handler = ExpireReservationsHandler(queue=container.queue)

    with reported_errors():
        count = handler.handle(now)

    click.echo(f"{count} reservation(s) expired.")


@click.command("position")
@click.option("--id", "reservation_id", required=True, type=int, help="Reservation ID.")
@click.option("--at", "now", type=TIMESTAMP, default=None, help="As of (default: now).")
@click.pass_obj
def reservation_position(
    container: Container, reservation_id: int, now: datetime | None
) -> None:
    """Show a reservation's place in its queue."""
    handler = ReservationPositionHandler(queue=container.queue)

    with reported_errors():
        position = handler.handle(reservation_id, now)

    click.echo(f"Reservation #{reservation_id} is number {position} in the queue.")


@click.command("queue")
@click.option("--item", "item_id", required=True, type=int, help="Item ID.")
@click.option("--at", "now", type=TIMESTAMP, default=None, help="As of (default: now).")
@click.pass_obj
def reservation_queue(container: Container, item_id: int, now: datetime | None) -> None:
    """Show an item's reservation queue."""
    handler = ShowQueueHandler(queue=container.queue, item_repo=container.items)

    with reported_errors():
        reservations = handler.handle(item_id, now)

    _display_reservations(reservations)


@click.command("list")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
@click.option("--active", is_flag=True, default=False, help="Only reservations still queued.")
@click.option("--at", "now", type=TIMESTAMP, default=None, help="As of (default: now).")
@click.pass_obj
def reservation_list(
    container: Container, user_id: int, active: bool, now: datetime | None
) -> None:
    """List a user's reservations."""
    handler = ShowUserReservationsHandler(queue=container.queue)

    with reported_errors():
        reservations = handler.handle(user_id, active_only=active, now=now)

    _display_reservations(reservations)
