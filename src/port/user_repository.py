from typing import Protocol
from domain.model.user import UserRecord


class UserRepository(Protocol):
    """Protocol defining the interface for locally stored user records.

    Implementations raise PersistenceError when the store fails.
    """
    def find_all(self) -> list[UserRecord]:
        """Return every stored user in store order."""
        ...

    def find_by_id(self, user_id: str) -> UserRecord | None:
        """Find a user by ID. Return UserRecord or None if not found."""
        ...

    def find_by_username(self, username: str) -> UserRecord | None:
        """Find a user by exact username. Assumes usernames are unique."""
        ...

    def find_by_username_like(self, username: str) -> list[UserRecord]:
        """Find users whose username contains the given text (case-insensitive)."""
        ...

    def save(self, user: UserRecord) -> UserRecord:
        """Insert or replace a user by ID and return the stored record."""
        ...
