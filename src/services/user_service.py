"""User service: merges the local user store with the external user source.

Every record leaving this service is tagged with the origin that produced
it. External records always precede internal ones. Records are never
deduplicated across origins, so the same id can appear twice.

External source failures are tolerated: the failing lookup counts as
"no result" and the local store still answers. Store failures propagate.
"""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import replace
from typing import TypeVar

from domain.model.errors import ExternalSourceError, NotFoundError, ValidationError
from domain.model.user import UserOrigin, UserRecord, with_origin
from port.user_repository import UserRepository
from port.user_source import UserSource

logger = logging.getLogger(__name__)

T = TypeVar('T')


def tag_all(users: list[UserRecord], origin: UserOrigin) -> list[UserRecord]:
    return [with_origin(u, origin) for u in users]


class UserService:
    def __init__(self, repo: UserRepository, source: UserSource):
        self.repo = repo
        self.source = source

    async def list_all(self) -> list[UserRecord]:
        """All external users, then all stored users."""
        external, internal = await asyncio.gather(
            self._soft(self.source.get_all(), [], op='get_all'),
            asyncio.to_thread(self.repo.find_all),
        )
        return tag_all(external, UserOrigin.EXTERNAL) + tag_all(internal, UserOrigin.INTERNAL)

    async def get_by_id(self, user_id: str) -> UserRecord:
        """Look up an id in both sources; the external record wins.

        Raises:
            NotFoundError: neither source has the id.
        """
        logger.info("Fetching user by ID", extra={"userId": user_id})
        external, internal = await asyncio.gather(
            self._soft(self.source.get_by_id(user_id), None, op='get_by_id'),
            asyncio.to_thread(self.repo.find_by_id, user_id),
        )
        if external is not None:
            return with_origin(external, UserOrigin.EXTERNAL)
        if internal is not None:
            return with_origin(internal, UserOrigin.INTERNAL)
        raise NotFoundError(f"User {user_id} not found")

    async def get_by_username(self, username: str | None) -> UserRecord:
        """Exact username lookup with the same precedence as get_by_id.

        Raises:
            ValidationError: username missing or blank.
            NotFoundError: no match in either source.
        """
        username = _require_username(username)
        logger.info("Fetching user by username", extra={"username": username})
        external, internal = await asyncio.gather(
            self._soft(self.source.get_by_username(username), [], op='get_by_username'),
            asyncio.to_thread(self.repo.find_by_username, username),
        )
        if external:
            return with_origin(external[0], UserOrigin.EXTERNAL)
        if internal is not None:
            return with_origin(internal, UserOrigin.INTERNAL)
        raise NotFoundError(f"User {username} not found")

    async def search_by_username(self, username: str | None) -> list[UserRecord]:
        """Every external match, then every stored user whose username contains the input."""
        username = _require_username(username)
        logger.info("Searching users by username", extra={"username": username})
        external, internal = await asyncio.gather(
            self._soft(self.source.get_by_username(username), [], op='get_by_username'),
            asyncio.to_thread(self.repo.find_by_username_like, username),
        )
        return tag_all(external, UserOrigin.EXTERNAL) + tag_all(internal, UserOrigin.INTERNAL)

    async def create(self, user: UserRecord) -> UserRecord:
        """Persist a user locally. The result is always INTERNAL."""
        saved = await asyncio.to_thread(self.repo.save, replace(user, origin=None))
        logger.info("User created", extra={"userId": saved.id, "username": saved.username})
        return with_origin(saved, UserOrigin.INTERNAL)

    async def _soft(self, call: Awaitable[T], default: T, op: str) -> T:
        try:
            return await call
        except ExternalSourceError as e:
            logger.warning(
                "External source failed, continuing with local store only",
                extra={"operation": op, "error": str(e)},
            )
            return default


def _require_username(username: str | None) -> str:
    if username is None or not username.strip():
        raise ValidationError("Username query parameter is required")
    return username
