from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any


class UserOrigin(str, Enum):
    """Which source produced a user record."""
    EXTERNAL = 'EXTERNAL'
    INTERNAL = 'INTERNAL'


# ── Value Objects ────────────────────────────────────────


@dataclass(frozen=True)
class Geo:
    lat: str | None = None
    lng: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Geo | None:
        if not data:
            return None
        return cls(lat=_as_str(data.get('lat')), lng=_as_str(data.get('lng')))


@dataclass(frozen=True)
class Address:
    street: str | None = None
    suite: str | None = None
    city: str | None = None
    zipcode: str | None = None
    geo: Geo | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Address | None:
        if not data:
            return None
        return cls(
            street=_as_str(data.get('street')),
            suite=_as_str(data.get('suite')),
            city=_as_str(data.get('city')),
            zipcode=_as_str(data.get('zipcode')),
            geo=Geo.from_dict(data.get('geo')),
        )


# ── User Domain Model ────────────────────────────────────


@dataclass(frozen=True)
class UserRecord:
    """Domain model representing a user from either source.

    `origin` is set only when records are merged for a response. It is
    never read from input and never persisted.
    """
    id: str | None = None
    name: str | None = None
    username: str | None = None
    email: str | None = None
    address: Address | None = None
    origin: UserOrigin | None = None
    active: bool | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserRecord:
        """Build a record from the shared JSON/document shape.

        Unknown keys are dropped, including any incoming `type`.
        Numeric ids (as served upstream) are normalized to strings.
        """
        return cls(
            id=_as_str(data.get('id')),
            name=_as_str(data.get('name')),
            username=_as_str(data.get('username')),
            email=_as_str(data.get('email')),
            address=Address.from_dict(data.get('address')),
            active=data.get('active'),
        )

    def to_document(self) -> dict[str, Any]:
        """Persisted shape: every field except origin."""
        doc = asdict(self)
        doc.pop('origin')
        return doc


def with_origin(user: UserRecord, origin: UserOrigin) -> UserRecord:
    """Return a copy of the record tagged with the given origin."""
    return replace(user, origin=origin)


def _as_str(value: Any) -> str | None:
    return None if value is None else str(value)
