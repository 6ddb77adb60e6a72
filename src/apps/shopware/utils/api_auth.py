from typing import Any

import aiohttp

from apps.shopware.config.constants import ADMIN_CLIENT_ID, TOKEN_SCOPE, ShopwareAdminEndpoint
from apps.shopware.config.settings import settings
from apps.shopware.utils.errors import AuthenticationError, ConfigurationError
from common.logger import logger


class ShopwareAuth:
    """Handles OAuth token acquisition against the Shopware Admin API.

    Uses the client credentials grant when an integration id/secret is set,
    otherwise the password grant of the administration client.
    """

    def __init__(
        self,
        base_url: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        username: str | None = None,
        password: str | None = None,
    ):
        self.base_url = (base_url or settings.SW_ENV_URL).rstrip("/")
        self.client_id = client_id if client_id is not None else settings.SW_CLIENT_ID
        self.client_secret = client_secret if client_secret is not None else settings.SW_CLIENT_SECRET
        self.username = username or settings.SW_ADMIN_USER
        self.password = password or settings.SW_ADMIN_PASSWORD
        self.access_token: str | None = None

        if not self.base_url:
            raise ConfigurationError("SW_ENV_URL is required. Please set it in your environment or .env file.")

    @property
    def authentication_type(self) -> str:
        return "client" if self.client_id and self.client_secret else "user"

    def _token_payload(self) -> dict[str, str]:
        if self.authentication_type == "client":
            return {
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "scope": TOKEN_SCOPE,
            }

        return {
            "grant_type": "password",
            "client_id": ADMIN_CLIENT_ID,
            "username": self.username,
            "password": self.password,
            "scope": TOKEN_SCOPE,
        }

    async def authenticate_async(self, session: aiohttp.ClientSession | None = None) -> dict[str, Any]:
        """Acquire an access token. Raises AuthenticationError on failure."""
        logger.info(f"Authenticating with Shopware API ({self.authentication_type} credentials)...")

        token_url = f"{self.base_url}{ShopwareAdminEndpoint.TOKEN.value}"
        timeout = aiohttp.ClientTimeout(total=30)
        own_session = session is None
        session = session or aiohttp.ClientSession()

        try:
            async with session.post(token_url, json=self._token_payload(), timeout=timeout) as response:
                if response.status != 200:
                    error_text = await response.text()
                    raise AuthenticationError(f"Authentication failed with status {response.status}", response.status, error_text)

                auth_data = await response.json()
        except aiohttp.ClientError as e:
            raise AuthenticationError(f"Network error during authentication: {e}") from e
        finally:
            if own_session:
                await session.close()

        if not auth_data.get("access_token"):
            self.access_token = None
            raise AuthenticationError("Authentication response did not contain an access token", 200, auth_data)

        self.access_token = auth_data["access_token"]
        logger.info("Authentication successful")
        return auth_data

    def get_auth_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}

        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        return headers

    def is_authenticated(self) -> bool:
        return self.access_token is not None

    def logout(self):
        self.access_token = None
        logger.info("Logged out successfully")
