"""JSONPlaceholder users API adapter.

Implements UserSource by reading the /users resource of a
JSONPlaceholder-compatible REST API.

API Documentation: https://jsonplaceholder.typicode.com/guide/
"""

import logging
import os
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from domain.model.errors import ExternalSourceError
from domain.model.user import UserRecord

logger = logging.getLogger(__name__)

EXTERNAL_API_BASE_URL = os.getenv('EXTERNAL_API_BASE_URL', 'https://jsonplaceholder.typicode.com')
API_TIMEOUT_SECONDS = float(os.getenv('EXTERNAL_API_TIMEOUT', '5.0'))


class JsonPlaceholderAdapter:
    """Adapter that fetches users from the external directory API.

    One attempt per call. Any transport failure, unexpected status or
    malformed body is raised as ExternalSourceError.
    """

    def __init__(
        self,
        base_url: str = EXTERNAL_API_BASE_URL,
        timeout: float = API_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.transport = transport

    async def get_all(self) -> list[UserRecord]:
        data = await self._get('/users')
        return _parse_list(data)

    async def get_by_id(self, user_id: str) -> UserRecord | None:
        data = await self._get(f"/users/{quote(user_id, safe='')}")
        if data is None:
            logger.debug("User not found in external source", extra={"userId": user_id})
            return None
        return _parse_user(data)

    async def get_by_username(self, username: str) -> list[UserRecord]:
        data = await self._get('/users', params={'username': username})
        return _parse_list(data)

    async def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        """GET a path and decode JSON. Returns None on 404."""
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, params=params)

                if response.status_code == 404:
                    return None

                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            logger.warning(
                "External users API HTTP error",
                extra={"url": url, "status_code": e.response.status_code},
            )
            raise ExternalSourceError(f"HTTP {e.response.status_code} from {url}") from e
        except httpx.RequestError as e:
            logger.warning(
                "External users API request error",
                extra={"url": url, "error_type": type(e).__name__},
            )
            raise ExternalSourceError(f"Request to {url} failed: {type(e).__name__}") from e
        except ValueError as e:
            logger.warning("External users API returned invalid JSON", extra={"url": url})
            raise ExternalSourceError(f"Invalid JSON from {url}") from e


# ── Response payloads ────────────────────────────────────────


class _GeoPayload(BaseModel):
    model_config = ConfigDict(extra='ignore', coerce_numbers_to_str=True)

    lat: Optional[str] = None
    lng: Optional[str] = None


class _AddressPayload(BaseModel):
    model_config = ConfigDict(extra='ignore', coerce_numbers_to_str=True)

    street: Optional[str] = None
    suite: Optional[str] = None
    city: Optional[str] = None
    zipcode: Optional[str] = None
    geo: Optional[_GeoPayload] = None


class _UserPayload(BaseModel):
    """One upstream user. Numbers in string fields (like `id`) become strings."""
    model_config = ConfigDict(extra='ignore', coerce_numbers_to_str=True)

    id: Optional[str] = None
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    address: Optional[_AddressPayload] = None
    active: Optional[bool] = None


_USER_LIST = TypeAdapter(list[_UserPayload])


def _parse_user(data: Any) -> UserRecord:
    try:
        payload = _UserPayload.model_validate(data)
    except ValidationError as e:
        logger.warning("External users API returned a malformed user", extra={"errors": e.error_count()})
        raise ExternalSourceError(f"Malformed user record: {e.errors()[0]['msg']}") from e
    return UserRecord.from_dict(payload.model_dump())


def _parse_list(data: Any) -> list[UserRecord]:
    if data is None:
        return []
    try:
        payloads = _USER_LIST.validate_python(data)
    except ValidationError as e:
        logger.warning("External users API returned malformed users", extra={"errors": e.error_count()})
        raise ExternalSourceError(f"Malformed user list: {e.errors()[0]['msg']}") from e
    return [UserRecord.from_dict(p.model_dump()) for p in payloads]
