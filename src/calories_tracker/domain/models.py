"""Domain models for user accounts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Represents a signed-up user, without credentials."""

    id: str
    name: str
    email: str
