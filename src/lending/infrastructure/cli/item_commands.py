"""CLI commands for the media catalog."""

from __future__ import annotations

import click

from lending.application.add_media_item import AddMediaItemHandler
from lending.application.dto import MediaItemDTO
from lending.application.show_inventory import SearchItemsHandler, ShowInventoryHandler
from lending.infrastructure.bootstrap import Container
from lending.infrastructure.cli.errors import reported_errors


def _display_items(items: list[MediaItemDTO]) -> None:
    if not items:
        click.echo("No items found.")
        return
    click.echo(
        f"{'ID':>4}  {'Title':<30} {'Category':<10} {'Total':>6} {'On loan':>8} {'Available':>10}"
    )
    click.echo("-" * 74)
    for item in items:
        click.echo(
            f"{item.id:>4}  {item.title:<30} {item.category:<10} "
            f"{item.total:>6} {item.on_loan:>8} {item.available:>10}"
        )


@click.command("add")
@click.option("--title", required=True, help="Title of the item.")
@click.option("--author", default="", help="Author or artist.")
@click.option("--category", required=True, help="Media category, e.g. BOOK or CD.")
@click.option("--copies", required=True, type=int, help="Number of physical copies.")
@click.pass_obj
def item_add(container: Container, title: str, author: str, category: str, copies: int) -> None:
    """Add a title to the catalog."""
    handler = AddMediaItemHandler(item_repo=container.items)

    with reported_errors():
        dto = handler.handle(title=title, author=author, category=category, copies=copies)

    click.echo(f"Item #{dto.id} added: '{dto.title}' ({dto.category}, {dto.total} copies)")


@click.command("list")
@click.pass_obj
def item_list(container: Container) -> None:
    """Show copy counts for every item."""
    _display_items(ShowInventoryHandler(item_repo=container.items).handle())


@click.command("search")
@click.argument("keyword", default="")
@click.pass_obj
def item_search(container: Container, keyword: str) -> None:
    """Search titles, authors and categories."""
    _display_items(SearchItemsHandler(item_repo=container.items).handle(keyword))
