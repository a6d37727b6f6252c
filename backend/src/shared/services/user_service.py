"""
User Service

Business logic for registration and user lookup.

Service Pattern:
================
Services encapsulate business logic and coordinate between:
- Repositories (data access)
- External services (the identity provider)
- Domain logic

Usage:
======
    from src.shared.services.user_service import UserService

    service = UserService(db, KeycloakAdapter())
    user = await service.register_user(registration)
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.adapters.keycloak_adapter import IdentityProvider
from src.shared.core.exceptions import UserAlreadyExistsError, UserNotFoundError
from src.shared.core.logging import logger
from src.shared.repositories.user_repository import UserRepository
from src.shared.schemas.user import UserCreate, UserResponse, to_user_response


class UserService:
    """
    Service for user accounts.

    Handles:
    - Registration through the identity provider
    - Lookup by username or id
    - Username/email availability

    Attributes:
        session: Database session
        repo: UserRepository instance
        identity_provider: Creates accounts and supplies the default role
    """

    def __init__(
        self,
        session: AsyncSession,
        identity_provider: Optional[IdentityProvider] = None,
    ) -> None:
        """
        Initialize UserService.

        Args:
            session: Async database session
            identity_provider: Required for register_user() only
        """
        self.session = session
        self.repo = UserRepository(session)
        self.identity_provider = identity_provider

    async def register_user(self, registration: UserCreate) -> UserResponse:
        """
        Register a new user.

        Creates the account in the identity provider first, then stores the
        local record under the identifier the provider assigned.

        Args:
            registration: Validated registration data

        Returns:
            Projection of the stored user

        Raises:
            UserAlreadyExistsError: If username or email is already registered
            IdentityProviderError: If the identity provider fails
        """
        if self.identity_provider is None:
            raise RuntimeError("UserService.register_user requires an identity provider")

        if await self.user_exists(registration.username, registration.email):
            logger.warning(
                "Registration rejected, username or email taken",
                username=registration.username,
                email=registration.email,
            )
            raise UserAlreadyExistsError()

        user_id = await self.identity_provider.create_user(registration)
        default_role = await self.identity_provider.get_default_role()

        # A concurrent registration can claim the username or email after the check above
        try:
            user = await self.repo.create(
                id=user_id,
                username=registration.username,
                email=registration.email,
                first_name=registration.first_name,
                last_name=registration.last_name,
                roles=[default_role],
            )
        except IntegrityError as e:
            logger.warning(
                "Registration lost race, username or email taken",
                username=registration.username,
                email=registration.email,
                identity_provider_user_id=str(user_id),
            )
            raise UserAlreadyExistsError() from e

        logger.info("User registered", user_id=str(user.id), username=user.username)
        logger.debug("User details", user=repr(user))
        return to_user_response(user)

    async def get_user_by_username(self, username: str) -> UserResponse:
        """
        Get a user by username.

        Raises:
            UserNotFoundError: If no user has this username
        """
        user = await self.repo.get_by_username(username)
        if not user:
            raise UserNotFoundError(username=username)

        logger.debug("User details", user=repr(user))
        return to_user_response(user)

    async def get_user_by_id(self, user_id: UUID) -> UserResponse:
        """
        Get a user by identifier.

        Raises:
            UserNotFoundError: If no user has this id
        """
        user = await self.repo.get(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))

        logger.debug("User details", user=repr(user))
        return to_user_response(user)

    async def get_user_id_by_username(self, username: str) -> UUID:
        """Resolve a username to the user's identifier."""
        return (await self.get_user_by_username(username)).id

    async def user_exists(self, username: str, email: str) -> bool:
        """
        Check whether a username OR an email is already registered.

        Args:
            username: Username to check
            email: Email to check

        Returns:
            True if either is taken, False only if both are free
        """
        return await self.repo.email_exists(email) or await self.repo.username_exists(username)
