"""Domain service: facts an external notifier needs about overdue loans.

Only the data is produced here; delivering the message (email, SMS) is
the notifier's job.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date

from lending.domain.model.loan import LoanStatus
from lending.domain.repository.loan_repository import LoanRepository
from lending.domain.repository.user_repository import UserRepository


@dataclass(frozen=True)
class OverdueNotice:

    user_id: int
    email: str | None
    overdue_count: int

    @property
    def message(self) -> str:
        return f"You have {self.overdue_count} overdue item(s)."


class OverdueReport:

    def __init__(self, loan_repo: LoanRepository, user_repo: UserRepository) -> None:
        self._loan_repo = loan_repo
        self._user_repo = user_repo

    def notices(self, today: date) -> list[OverdueNotice]:
        """One notice per user holding at least one overdue loan."""
        counts = Counter(
            loan.user_id
            for loan in self._loan_repo.list_by_status(LoanStatus.ACTIVE)
            if loan.is_overdue(today)
        )
        notices = []
        for user_id in sorted(counts):
            user = self._user_repo.get_by_id(user_id)
            notices.append(
                OverdueNotice(
                    user_id=user_id,
                    email=user.email if user is not None else None,
                    overdue_count=counts[user_id],
                )
            )
        return notices
