"""
User Handler

Registration, lookup and relationship endpoints.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model
                 ↘ Keycloak

Handlers only parse requests, call services and wrap results. Service
exceptions (UserNotFoundError, SelfReferenceError, ...) are not caught
here; the global exception handler turns them into error responses.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.shared.schemas.common import ApiResponse
from src.shared.schemas.user import (
    RelationshipUpdate,
    UserCreate,
    UserExistsResponse,
    UserResponse,
)
from src.shared.services.user_service import UserService
from src.shared.services.relationship_service import RelationshipService
from src.api.dependencies.services import get_relationship_service, get_user_service


router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    user_data: UserCreate,
    user_service: UserService = Depends(get_user_service),
):
    """
    Register a new user.

    Raises:
        409: If username or email is already registered
        503: If Keycloak fails
    """
    user = await user_service.register_user(user_data)
    return ApiResponse[UserResponse](data={"user": user}, message="User registered")


@router.get("/exists", response_model=UserExistsResponse)
async def user_exists(
    username: str = Query(..., min_length=1),
    email: str = Query(..., min_length=1),
    user_service: UserService = Depends(get_user_service),
):
    """True if the username or the email is already registered."""
    return UserExistsResponse(exists=await user_service.user_exists(username, email))


@router.get("/by-username/{username}", response_model=ApiResponse[UserResponse])
async def get_user_by_username(
    username: str,
    user_service: UserService = Depends(get_user_service),
):
    """Get a user by username."""
    user = await user_service.get_user_by_username(username)
    return ApiResponse[UserResponse](data={"user": user})


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user_by_id(
    user_id: UUID,
    user_service: UserService = Depends(get_user_service),
):
    """Get a user by id."""
    user = await user_service.get_user_by_id(user_id)
    return ApiResponse[UserResponse](data={"user": user})


@router.put("/{user_id}/followers", response_model=ApiResponse[UserResponse])
async def update_followers(
    user_id: UUID,
    body: RelationshipUpdate,
    relationship_service: RelationshipService = Depends(get_relationship_service),
):
    """
    Add or remove a follower of user_id.

    Raises:
        400: If body.user_id equals user_id
        404: If either user does not exist
    """
    user = await relationship_service.update_followers(user_id, body.user_id, body.operation)
    return ApiResponse[UserResponse](data={"user": user}, message="Followers updated")


@router.put("/{user_id}/followings", response_model=ApiResponse[UserResponse])
async def update_followings(
    user_id: UUID,
    body: RelationshipUpdate,
    relationship_service: RelationshipService = Depends(get_relationship_service),
):
    """
    Add or remove a user that user_id follows.

    Raises:
        400: If body.user_id equals user_id
        404: If either user does not exist
    """
    user = await relationship_service.update_followings(user_id, body.user_id, body.operation)
    return ApiResponse[UserResponse](data={"user": user}, message="Followings updated")
