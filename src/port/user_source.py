"""User source port: outbound interface for the read-only external user API."""

from typing import Protocol

from domain.model.user import UserRecord


class UserSource(Protocol):
    """Port for fetching users from a third-party directory.

    All calls are read-only and made once. Failures raise
    ExternalSourceError; deciding whether to tolerate them is up to
    the caller.
    """

    async def get_all(self) -> list[UserRecord]: ...

    async def get_by_id(self, user_id: str) -> UserRecord | None:
        """Return the user, or None if the source has no such id."""
        ...

    async def get_by_username(self, username: str) -> list[UserRecord]:
        """Return all users matching the username. Zero, one or many."""
        ...
