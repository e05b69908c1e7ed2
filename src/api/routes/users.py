"""User routes.

Endpoints:
- GET /user: All users, external first
- POST /user: Create a local user
- GET /user/filter?username=: One user by exact username
- GET /user/search?username=: All users matching a username
- GET /user/{id}: One user by ID
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_service
from api.models import UserRequest, UserResponse
from domain.model.errors import NotFoundError, PersistenceError, ValidationError
from services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


def _store_failure(e: PersistenceError) -> HTTPException:
    logger.error("User store failure", extra={"error": str(e)})
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(e),
    )


@router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    """List every user from both sources."""
    try:
        users = await service.list_all()
    except PersistenceError as e:
        raise _store_failure(e)
    return [UserResponse.from_domain(u) for u in users]


@router.post("", response_model=UserResponse)
async def create_user(
    request: UserRequest,
    service: UserService = Depends(get_user_service),
):
    """Create a user in the local store.

    Raises:
        HTTPException: 500 if the store fails to save
    """
    try:
        user = await service.create(request.to_domain())
    except PersistenceError as e:
        raise _store_failure(e)
    return UserResponse.from_domain(user)


@router.get("/filter", response_model=UserResponse)
async def filter_user(
    username: str | None = None,
    service: UserService = Depends(get_user_service),
):
    """Get one user by exact username. External matches take precedence.

    Raises:
        HTTPException: 400 if username is missing, 404 if no source has it
    """
    try:
        user = await service.get_by_username(username)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise _store_failure(e)
    return UserResponse.from_domain(user)


@router.get("/search", response_model=list[UserResponse])
async def search_users(
    username: str | None = None,
    service: UserService = Depends(get_user_service),
):
    """Get every user matching a username from both sources."""
    try:
        users = await service.search_by_username(username)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PersistenceError as e:
        raise _store_failure(e)
    return [UserResponse.from_domain(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)):
    """Get one user by ID. External matches take precedence.

    Raises:
        HTTPException: 404 if neither source has the ID
    """
    try:
        user = await service.get_by_id(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        raise _store_failure(e)
    return UserResponse.from_domain(user)
