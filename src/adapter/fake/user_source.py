"""In-memory implementation of UserSource for testing."""

from domain.model.errors import ExternalSourceError
from domain.model.user import UserRecord


class FakeUserSource:
    """Fake external source that serves a fixed list of users.

    Set `fail` to make every call raise ExternalSourceError.
    """

    def __init__(self, users: list[UserRecord] | None = None, fail: bool = False):
        self.users = list(users or [])
        self.fail = fail
        self.calls: list[str] = []

    def _record(self, op: str) -> None:
        self.calls.append(op)
        if self.fail:
            raise ExternalSourceError(f"source unavailable ({op})")

    async def get_all(self) -> list[UserRecord]:
        self._record('get_all')
        return list(self.users)

    async def get_by_id(self, user_id: str) -> UserRecord | None:
        self._record('get_by_id')
        for user in self.users:
            if user.id == user_id:
                return user
        return None

    async def get_by_username(self, username: str) -> list[UserRecord]:
        self._record('get_by_username')
        return [u for u in self.users if u.username == username]
