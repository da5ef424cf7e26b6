"""User registration."""

from __future__ import annotations

import uuid

from loguru import logger

from zakatkit.core.exceptions import DuplicateEntryError, ValidationError
from zakatkit.financial.user import NotificationPreferences, User
from zakatkit.financial.vocabulary import Currency, NisabMethod
from zakatkit.interfaces import UserRepository


class CreateUserUseCase:
    def __init__(self, user_repository: UserRepository):
        self.users = user_repository

    async def execute(self, request: dict) -> dict:
        """Register a user from ``{email, name, currency, nisabMethod, notificationPreferences}``.

        Raises:
            DuplicateEntryError: the email is already registered.
            ValidationError: a field is missing or malformed.
        """
        email = (request.get("email") or "").strip().lower()
        if not email:
            raise ValidationError("Missing required field: email")
        if await self.users.find_by_email(email) is not None:
            raise DuplicateEntryError(f"A user with email {email} already exists")

        preferences = request.get("notificationPreferences") or {}
        try:
            notification_preferences = NotificationPreferences(**preferences)
        except TypeError as e:
            raise ValidationError(f"Invalid notificationPreferences: {e}") from e

        user = User(
            id=f"user-{uuid.uuid4().hex[:12]}",
            email=email,
            name=request.get("name", ""),
            currency=Currency.from_string(request.get("currency", "USD")),
            nisab_method=NisabMethod.from_string(request.get("nisabMethod", "GOLD")),
            notification_preferences=notification_preferences,
        )
        await self.users.save(user)
        logger.info(f"Registered user {user.id}")
        return user.to_dict()
