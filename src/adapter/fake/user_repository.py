"""In-memory implementation of UserRepository for testing."""

import uuid
from dataclasses import replace

from domain.model.errors import PersistenceError
from domain.model.user import UserRecord


class FakeUserRepository:
    def __init__(self, users: list[UserRecord] | None = None, fail: bool = False):
        self.store: dict[str, UserRecord] = {}
        self.fail = fail
        self.calls: list[str] = []
        for user in users or []:
            self.store[user.id] = user

    def _record(self, op: str) -> None:
        self.calls.append(op)
        if self.fail:
            raise PersistenceError(f"store unavailable ({op})")

    # ── write operations ─────────────────────────────────────

    def save(self, user: UserRecord) -> UserRecord:
        self._record('save')
        if not user.id:
            user = replace(user, id=uuid.uuid4().hex)
        user = replace(user, origin=None)
        self.store[user.id] = user
        return user

    # ── read operations ──────────────────────────────────────

    def find_all(self) -> list[UserRecord]:
        self._record('find_all')
        return list(self.store.values())

    def find_by_id(self, user_id: str) -> UserRecord | None:
        self._record('find_by_id')
        return self.store.get(user_id)

    def find_by_username(self, username: str) -> UserRecord | None:
        self._record('find_by_username')
        for user in self.store.values():
            if user.username == username:
                return user
        return None

    def find_by_username_like(self, username: str) -> list[UserRecord]:
        self._record('find_by_username_like')
        needle = username.lower()
        return [u for u in self.store.values() if u.username and needle in u.username.lower()]
