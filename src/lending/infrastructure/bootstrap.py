"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Settings come from the environment:
    LENDING_DATA_DIR   directory holding the JSON data files
    LENDING_LOG_LEVEL  logging level name (see logging_config)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from lending.domain.service.fine_strategy import FineCalculator
from lending.domain.service.inventory_pool import InventoryPool
from lending.domain.service.lending_coordinator import LendingCoordinator
from lending.domain.service.overdue_report import OverdueReport
from lending.domain.service.payment_ledger import PaymentLedger
from lending.domain.service.reservation_queue import ReservationQueueManager
from lending.infrastructure.persistence.json_fine_repository import JsonFineRepository
from lending.infrastructure.persistence.json_loan_repository import JsonLoanRepository
from lending.infrastructure.persistence.json_media_item_repository import (
    JsonMediaItemRepository,
)
from lending.infrastructure.persistence.json_reservation_repository import (
    JsonReservationRepository,
)
from lending.infrastructure.persistence.json_user_repository import JsonUserRepository

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    configured = os.environ.get("LENDING_DATA_DIR")
    return Path(configured) if configured else _DEFAULT_DATA_DIR


@dataclass
class Container:
    """Repositories and services sharing one data directory."""

    users: JsonUserRepository
    items: JsonMediaItemRepository
    loans: JsonLoanRepository
    reservations: JsonReservationRepository
    fines: JsonFineRepository
    coordinator: LendingCoordinator
    queue: ReservationQueueManager
    ledger: PaymentLedger
    overdue_report: OverdueReport


def build_container(directory: Path | None = None) -> Container:
    directory = directory or data_dir()

    users = JsonUserRepository(directory / "users.json")
    items = JsonMediaItemRepository(directory / "items.json")
    loans = JsonLoanRepository(directory / "loans.json")
    reservations = JsonReservationRepository(directory / "reservations.json")
    fines = JsonFineRepository(directory / "fines.json")

    pool = InventoryPool(items)
    coordinator = LendingCoordinator(
        users, items, loans, fines, pool, FineCalculator.with_defaults()
    )
    return Container(
        users=users,
        items=items,
        loans=loans,
        reservations=reservations,
        fines=fines,
        coordinator=coordinator,
        queue=ReservationQueueManager(reservations, items, users),
        ledger=PaymentLedger(loans, fines),
        overdue_report=OverdueReport(loans, users),
    )
