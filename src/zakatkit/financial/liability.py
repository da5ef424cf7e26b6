"""Liability entity: a debt that can reduce zakatable wealth."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime

from zakatkit.core.exceptions import CurrencyMismatchError, ValidationError

from .money import Money


@dataclass
class Liability:
    """A user's debt.

    Only liabilities marked immediately due are deducted from zakatable
    wealth.

    Attributes:
        id: Unique identifier.
        user_id: Owner.
        amount: Outstanding amount.
        description: Human-readable label.
        due_date: When the debt falls due, if known.
        is_immediately_due: Deductible when True.
        created_at: Creation timestamp.
    """

    id: str
    user_id: str
    amount: Money
    description: str
    due_date: date | None = None
    is_immediately_due: bool = False
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if not self.id:
            raise ValidationError("Liability id cannot be empty")
        if not self.user_id:
            raise ValidationError("Liability user_id cannot be empty")

    @classmethod
    def create(
        cls,
        user_id: str,
        amount: Money,
        description: str,
        due_date: date | None = None,
        is_immediately_due: bool = False,
    ) -> Liability:
        return cls(
            id=f"liability-{uuid.uuid4().hex[:12]}",
            user_id=user_id,
            amount=amount,
            description=description,
            due_date=due_date,
            is_immediately_due=is_immediately_due,
        )

    def update_amount(self, new_amount: Money) -> None:
        """Replace the outstanding amount; the currency cannot change."""
        if new_amount.currency != self.amount.currency:
            raise CurrencyMismatchError(self.amount.currency, new_amount.currency)
        self.amount = new_amount

    def update_details(self, description: str, due_date: date | None) -> None:
        self.description = description
        self.due_date = due_date

    def mark_as_immediately_due(self) -> None:
        self.is_immediately_due = True

    def is_deductible(self) -> bool:
        return self.is_immediately_due

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "amount": self.amount.to_dict(),
            "description": self.description,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "isImmediatelyDue": self.is_immediately_due,
            "createdAt": self.created_at.isoformat(),
        }
