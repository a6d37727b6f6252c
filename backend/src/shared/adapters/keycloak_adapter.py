"""
Keycloak adapter - Identity provider client.

Provides:
- Account creation in the realm (returns the Keycloak user id)
- Lookup of the realm's default role

Talks to the Keycloak admin REST API with a confidential client using
the client_credentials grant. The admin token is cached until shortly
before it expires.

Endpoints Used:
===============
    POST /realms/{realm}/protocol/openid-connect/token      ← admin token
    POST /admin/realms/{realm}/users                        ← create account
    GET  /admin/realms/{realm}/roles/default-roles-{realm}  ← default role
"""

import time
from typing import Any, Optional, Protocol
from uuid import UUID

import httpx

from src.config.settings import settings
from src.shared.core.exceptions import IdentityProviderError, UserAlreadyExistsError
from src.shared.core.logging import get_logger
from src.shared.schemas.user import UserCreate

logger = get_logger("keycloak")


class IdentityProvider(Protocol):
    """What the user service needs from an identity provider."""

    async def create_user(self, registration: UserCreate) -> UUID: ...

    async def get_default_role(self) -> str: ...


class KeycloakAdapter:
    """
    Adapter for Keycloak admin API operations.

    Handles:
    - Admin token acquisition and caching
    - User account creation
    - Default role lookup
    """

    # Refresh the admin token this many seconds before Keycloak expires it
    TOKEN_EXPIRY_MARGIN_SECONDS = 30

    def __init__(
        self,
        server_url: Optional[str] = None,
        realm: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Keycloak adapter.

        Args:
            server_url: Keycloak base URL. If not provided, uses settings.
            realm: Realm owning the accounts
            client_id: Confidential client id
            client_secret: Confidential client secret
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests pass httpx.MockTransport)
        """
        self.server_url = (server_url or settings.KEYCLOAK_SERVER_URL).rstrip("/")
        self.realm = realm or settings.KEYCLOAK_REALM
        self.client_id = client_id or settings.KEYCLOAK_CLIENT_ID
        self.client_secret = client_secret if client_secret is not None else settings.KEYCLOAK_CLIENT_SECRET
        self.timeout = timeout or settings.KEYCLOAK_TIMEOUT_SECONDS
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._token: Optional[str] = None
        self._token_expires_at = 0.0

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-loaded HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.server_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ═══════════════════════════════════════════════════════════════════════════
    # ACCOUNTS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_user(self, registration: UserCreate) -> UUID:
        """
        Create an enabled account with a permanent password.

        Args:
            registration: Validated registration data

        Returns:
            Keycloak user id, taken from the Location header of the response

        Raises:
            UserAlreadyExistsError: Keycloak already has the username or email
            IdentityProviderError: Any other failure
        """
        payload: dict[str, Any] = {
            "username": registration.username,
            "email": registration.email,
            "firstName": registration.first_name,
            "lastName": registration.last_name,
            "enabled": True,
            "emailVerified": False,
            "credentials": [
                {
                    "type": "password",
                    "value": registration.password,
                    "temporary": False,
                }
            ],
        }
        response = await self._admin_request("POST", "/users", json=payload)

        if response.status_code == 409:
            logger.warning("Keycloak reports existing account", username=registration.username)
            raise UserAlreadyExistsError()
        if response.status_code != 201:
            raise self._error("Failed to create user", response)

        location = response.headers.get("Location", "")
        try:
            user_id = UUID(location.rstrip("/").rsplit("/", 1)[-1])
        except ValueError:
            raise IdentityProviderError(
                f"Keycloak returned no user id (Location: {location!r})",
                status_code=response.status_code,
            )

        logger.info("Keycloak account created", user_id=str(user_id), username=registration.username)
        return user_id

    async def get_default_role(self) -> str:
        """
        Name of the realm's composite default role.

        Returns:
            Role name, e.g. "default-roles-troop"

        Raises:
            IdentityProviderError: If the role cannot be read
        """
        response = await self._admin_request("GET", f"/roles/default-roles-{self.realm}")
        if response.status_code != 200:
            raise self._error("Failed to read default role", response)
        try:
            return response.json()["name"]
        except (KeyError, TypeError, ValueError) as e:
            raise self._error("Malformed default role response", response) from e

    # ═══════════════════════════════════════════════════════════════════════════
    # INTERNALS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _admin_request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send an authenticated request under /admin/realms/{realm}."""
        token = await self._get_admin_token()
        url = f"/admin/realms/{self.realm}{path}"
        try:
            return await self.client.request(
                method,
                url,
                headers={"Authorization": f"Bearer {token}"},
                **kwargs,
            )
        except httpx.HTTPError as e:
            logger.error("Keycloak request failed", method=method, url=url, error=str(e))
            raise IdentityProviderError(f"Keycloak unreachable: {e}") from e

    async def _get_admin_token(self) -> str:
        """Return a cached admin token, fetching a new one when needed."""
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        url = f"/realms/{self.realm}/protocol/openid-connect/token"
        try:
            response = await self.client.post(
                url,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                },
            )
        except httpx.HTTPError as e:
            logger.error("Keycloak token request failed", error=str(e))
            raise IdentityProviderError(f"Keycloak unreachable: {e}") from e

        if response.status_code != 200:
            raise self._error("Failed to obtain admin token", response)

        try:
            body = response.json()
            token = body["access_token"]
            expires_in = int(body.get("expires_in", 60))
        except (KeyError, TypeError, ValueError) as e:
            raise self._error("Malformed admin token response", response) from e

        self._token = token
        self._token_expires_at = time.monotonic() + max(expires_in - self.TOKEN_EXPIRY_MARGIN_SECONDS, 0)
        return self._token

    def _error(self, message: str, response: httpx.Response) -> IdentityProviderError:
        logger.error(
            message,
            status_code=response.status_code,
            body=response.text[:500],
        )
        return IdentityProviderError(message, status_code=response.status_code)
