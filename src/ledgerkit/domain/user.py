"""User domain service."""

from typing import Optional

from ledgerkit.database.base import Database, IsolationLevel
from ledgerkit.domain.entities import User as UserEntity
from ledgerkit.domain.errors import (
    ConflictError,
    UserNotFoundError,
    ValidationError,
    duplicate_email,
)


class UserService:
    """Service for managing account owners."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_user(self, first_name: str, last_name: str, email: str) -> UserEntity:
        """Create a new user.

        Args:
            first_name: First name
            last_name: Last name
            email: Email address, unique across users

        Returns:
            Created user entity

        Raises:
            ValidationError: If a field is empty
            ConflictError: If the email is already registered
        """
        first_name = first_name.strip()
        last_name = last_name.strip()
        email = email.strip().lower()
        if not first_name or not last_name:
            raise ValidationError("First and last name are required")
        if "@" not in email:
            raise ValidationError(f"Invalid email address '{email}'")

        def unit(handle):
            if handle.find_user_by_email(email) is not None:
                raise ConflictError(duplicate_email(email))
            return handle.insert_user(first_name, last_name, email)

        return self.db.run_atomic(IsolationLevel.READ_COMMITTED, unit, operation="create user")

    def get_user(self, user_id: int) -> Optional[UserEntity]:
        """Get user by ID, or None if not found."""
        return self.db.run_atomic(
            IsolationLevel.READ_COMMITTED,
            lambda handle: handle.get_user(user_id),
            read_only=True,
            operation="get user",
        )

    def require_user(self, user_id: int) -> UserEntity:
        """Get user by ID or raise UserNotFoundError."""
        user = self.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
