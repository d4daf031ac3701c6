"""Data access helpers for working with users."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from lireddit.models.user import User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by identifier."""
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.session.scalars(select(User).where(User.email == email)).first()

    def get_by_username(self, username: str) -> User | None:
        return self.session.scalars(select(User).where(User.username == username)).first()

    def get_by_username_or_email(self, username_or_email: str) -> User | None:
        """Look up by email when the identifier contains an ``@``, else by username."""
        if "@" in username_or_email:
            return self.get_by_email(username_or_email)
        return self.get_by_username(username_or_email)

    def get_many(self, user_ids: Sequence[int]) -> list[User]:
        """Return the users matching ``user_ids`` in a single query, in no particular order."""
        if not user_ids:
            return []
        return list(self.session.scalars(select(User).where(User.id.in_(set(user_ids)))))

    def create(self, *, username: str, email: str, password_hash: str) -> User:
        """Insert a new user and flush so unique-constraint violations surface here.

        Raises:
            sqlalchemy.exc.IntegrityError: If the username or email is taken.
        """
        user = User(username=username, email=email, password=password_hash)
        self.session.add(user)
        self.session.flush()
        return user

    def set_password(self, user: User, password_hash: str) -> User:
        user.password = password_hash
        self.session.flush()
        return user
