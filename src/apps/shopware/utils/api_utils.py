"""API utilities for Shopware - Admin API search, sync and media upload."""

import json
from typing import Any

import aiohttp

from apps.shopware.config.constants import ShopwareAdminEndpoint, ShopwareEntity
from apps.shopware.utils.api_auth import ShopwareAuth
from apps.shopware.utils.errors import ShopwareAPIError
from common.logger import logger


class ShopwareAPIUtils:
    """Authenticated Admin API session. Use as an async context manager."""

    def __init__(self, auth: ShopwareAuth | None = None, request_timeout_seconds: float = 120.0):
        self.auth = auth or ShopwareAuth()
        self.base_url = self.auth.base_url
        self.session: aiohttp.ClientSession | None = None
        self._timeout = aiohttp.ClientTimeout(total=request_timeout_seconds)

    async def __aenter__(self):
        logger.info("Initializing Shopware API utilities...")
        self.session = aiohttp.ClientSession(timeout=self._timeout)
        try:
            await self.auth.authenticate_async(self.session)
        except Exception:
            await self.session.close()
            self.session = None
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.auth.logout()
        if self.session:
            await self.session.close()
            self.session = None

    async def _make_post_request(
        self,
        endpoint: str,
        payload: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        data: bytes | None = None,
        content_type: str | None = None,
    ) -> dict[str, Any] | None:
        """POST to the Admin API. Raises ShopwareAPIError on any non-2xx answer."""
        if not self.auth.is_authenticated() or not self.session:
            raise RuntimeError("API utilities not initialized. Use async context manager.")

        headers = self.auth.get_auth_headers()
        if content_type:
            headers["Content-Type"] = content_type

        url = f"{self.base_url}{endpoint}"
        request_kwargs: dict[str, Any] = {"headers": headers, "params": params}
        if data is not None:
            request_kwargs["data"] = data
        else:
            request_kwargs["json"] = payload or {}

        try:
            async with self.session.post(url, **request_kwargs) as response:
                if response.status >= 300:
                    error_text = await response.text()
                    logger.error(f"Failed to post to {endpoint}: {response.status} - {error_text}")
                    raise ShopwareAPIError(f"POST {endpoint} failed with status {response.status}", response.status, error_text)

                text = await response.text()
                return json.loads(text) if text else None
        except aiohttp.ClientError as e:
            raise ShopwareAPIError(f"Network error posting to {endpoint}: {e}") from e

    async def search(self, entity: ShopwareEntity, filters: list[dict[str, Any]] | None = None, limit: int = 1) -> dict[str, Any]:
        endpoint = ShopwareAdminEndpoint.SEARCH.value.format(entity=entity.value)
        payload: dict[str, Any] = {"limit": limit}
        if filters:
            payload["filter"] = filters

        result = await self._make_post_request(endpoint, payload)
        return result or {"total": 0, "data": []}

    async def search_first(self, entity: ShopwareEntity, filters: list[dict[str, Any]] | None = None) -> dict[str, Any] | None:
        result = await self.search(entity, filters, limit=1)
        data = result.get("data") or []
        return data[0] if data else None

    async def get_currency_id(self, iso_code: str = "EUR") -> str | None:
        currency = await self.search_first(ShopwareEntity.CURRENCY, [{"type": "equals", "field": "isoCode", "value": iso_code}])
        return currency.get("id") if currency else None

    async def get_standard_tax_id(self) -> str | None:
        tax = await self.search_first(ShopwareEntity.TAX, [{"type": "equals", "field": "position", "value": 1}])
        if not tax:
            tax = await self.search_first(ShopwareEntity.TAX)
        return tax.get("id") if tax else None

    async def get_sales_channel(self, name: str = "Storefront") -> dict[str, Any] | None:
        return await self.search_first(ShopwareEntity.SALES_CHANNEL, [{"type": "equals", "field": "name", "value": name}])

    async def sync(self, operations: dict[str, tuple[ShopwareEntity, list[dict[str, Any]]]]) -> dict[str, Any] | None:
        """Run several upsert operations in one `_action/sync` request."""
        payload = {
            key: {"entity": entity.value, "action": "upsert", "payload": records}
            for key, (entity, records) in operations.items()
            if records
        }
        if not payload:
            logger.debug("Nothing to sync")
            return None

        result = await self._make_post_request(ShopwareAdminEndpoint.SYNC.value, payload)
        synced = ", ".join(f"{len(operation['payload'])} {operation['entity']}" for operation in payload.values())
        logger.info(f"Synced {synced}")
        return result

    async def upsert(self, entity: ShopwareEntity, records: list[dict[str, Any]]) -> dict[str, Any] | None:
        return await self.sync({f"upsert-{entity.value}": (entity, records)})

    async def upload_media(self, media_id: str, filename: str, content_type: str, data: bytes, extension: str = "png") -> None:
        endpoint = ShopwareAdminEndpoint.MEDIA_UPLOAD.value.format(media_id=media_id)
        await self._make_post_request(
            endpoint,
            params={"extension": extension, "fileName": filename},
            data=data,
            content_type=content_type,
        )
        logger.debug(f"Uploaded media {filename}")
