"""User account and session business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol

from calories_tracker.domain.errors import DuplicateEmailError, InvalidCredentialsError
from calories_tracker.domain.models import User

_logger = logging.getLogger(__name__)

DEMO_USER_NAME = "Test User"
DEMO_USER_EMAIL = "test@example.com"
DEMO_USER_PASSWORD = "password"  # noqa: S105


class UserRepository(Protocol):
    """Persistence interface for users and the current session."""

    def find_by_credentials(self, email: str, password: str) -> User | None:
        """Return the user matching the email and password, if present."""

    def find_by_email(self, email: str) -> User | None:
        """Return the user registered with the email, if present."""

    def create_user(self, name: str, email: str, password: str) -> User:
        """Create and return a new user."""

    def count_users(self) -> int:
        """Return the number of stored users."""

    def set_current_user(self, user: User | None) -> None:
        """Store or clear the signed-in user."""

    def get_current_user(self) -> User | None:
        """Return the signed-in user, if any."""


@dataclass
class AuthService:
    """Application service for sign-up, login and logout."""

    repository: UserRepository

    def signup(self, name: str, email: str, password: str) -> User:
        """Create a user and sign it in."""
        email = email.strip()
        if self.repository.find_by_email(email) is not None:
            raise DuplicateEmailError
        user = self.repository.create_user(name, email, password)
        self.repository.set_current_user(user)
        return user

    def login(self, email: str, password: str) -> User:
        """Sign in the user matching the credentials."""
        user = self.repository.find_by_credentials(email.strip(), password)
        if user is None:
            raise InvalidCredentialsError
        self.repository.set_current_user(user)
        return user

    def logout(self) -> None:
        """Clear the signed-in user."""
        self.repository.set_current_user(None)

    def current_user(self) -> User | None:
        """Return the signed-in user, if any."""
        return self.repository.get_current_user()

    def ensure_demo_user(self) -> User | None:
        """Create the demo account when the store is empty."""
        if self.repository.count_users():
            return None
        user = self.repository.create_user(
            DEMO_USER_NAME, DEMO_USER_EMAIL, DEMO_USER_PASSWORD
        )
        _logger.info("Demo user created: email=%s", user.email)
        return user
