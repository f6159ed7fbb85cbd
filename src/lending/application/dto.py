"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Dates are ISO strings
and amounts are formatted, ready for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from lending.domain.model.fine import Fine
from lending.domain.model.loan import Loan
from lending.domain.model.media_item import MediaItem
from lending.domain.model.reservation import Reservation
from lending.domain.model.user import User


@dataclass(frozen=True)
class UserDTO:

    id: int
    username: str
    email: str
    role: str

    @staticmethod
    def from_domain(user: User) -> UserDTO:
        return UserDTO(
            id=user.id,  # type: ignore[arg-type]
            username=user.username,
            email=user.email,
            role=user.role.value,
        )


@dataclass(frozen=True)
class MediaItemDTO:

    id: int
    title: str
    author: str
    category: str
    total: int
    available: int
    on_loan: int

    @staticmethod
    def from_domain(item: MediaItem) -> MediaItemDTO:
        return MediaItemDTO(
            id=item.id,  # type: ignore[arg-type]
            title=item.title,
            author=item.author,
            category=item.category,
            total=item.total_copies,
            available=item.available_copies,
            on_loan=item.on_loan,
        )


@dataclass(frozen=True)
class LoanDTO:

    id: int
    user_id: int
    item_id: int
    loan_date: str
    due_date: str
    return_date: str | None
    status: str
    overdue: bool

    @staticmethod
    def from_domain(loan: Loan, today: date) -> LoanDTO:
        return LoanDTO(
            id=loan.id,  # type: ignore[arg-type]
            user_id=loan.user_id,
            item_id=loan.item_id,
            loan_date=loan.loan_date.isoformat(),
            due_date=loan.due_date.isoformat(),
            return_date=loan.return_date.isoformat() if loan.return_date else None,
            status=loan.status.value,
            overdue=loan.is_overdue(today),
        )


@dataclass(frozen=True)
class FineDTO:

    id: int
    loan_id: int
    amount: str  # formatted, e.g. "30.00 ILS"
    issued_date: str
    status: str
    paid_date: str | None

    @staticmethod
    def from_domain(fine: Fine) -> FineDTO:
        return FineDTO(
            id=fine.id,  # type: ignore[arg-type]
            loan_id=fine.loan_id,
            amount=str(fine.amount),
            issued_date=fine.issued_date.isoformat(),
            status=fine.status.value,
            paid_date=fine.paid_date.isoformat() if fine.paid_date else None,
        )


@dataclass(frozen=True)
class ReservationDTO:

    id: int
    user_id: int
    item_id: int
    reservation_date: str
    expiry_date: str
    status: str
    position: int  # -1 once the reservation has left the queue

    @staticmethod
    def from_domain(reservation: Reservation, position: int = -1) -> ReservationDTO:
        return ReservationDTO(
            id=reservation.id,  # type: ignore[arg-type]
            user_id=reservation.user_id,
            item_id=reservation.item_id,
            reservation_date=reservation.reservation_date.strftime("%Y-%m-%d %H:%M"),
            expiry_date=reservation.expiry_date.strftime("%Y-%m-%d %H:%M"),
            status=reservation.status.value,
            position=position,
        )


@dataclass(frozen=True)
class ReturnDTO:
    """Output of a return: the closed loan, any fine, and any reservation
    fulfilled with the returned copy."""

    loan: LoanDTO
    fine: FineDTO | None
    fulfilled: ReservationDTO | None
