"""HTTP entry point: generate demo data for a Shopware instance on request."""

import json
from collections.abc import Awaitable, Callable
from typing import Any

from aiohttp import web

from apps.shopware.config.settings import settings
from apps.shopware.core.seed import seed_catalog
from apps.shopware.utils.ai import validate_openai_config
from apps.shopware.utils.api_auth import ShopwareAuth
from apps.shopware.utils.errors import AuthenticationError, PipelineError, ShopwareGeneratorError
from common.logger import logger


SeedFunction = Callable[..., Awaitable[dict[str, Any]]]

SEED_KEY = web.AppKey("seed", SeedFunction)


def _flag(body: dict[str, Any], key: str, default: bool) -> bool:
    value = body.get(key, default)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


async def health(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


async def generate(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except json.JSONDecodeError:
        return web.json_response({"error": "Request body must be JSON."}, status=400)
    if not isinstance(body, dict):
        return web.json_response({"error": "Request body must be a JSON object."}, status=400)

    env_path = body.get("envPath")
    if not env_path:
        return web.json_response({"error": 'Missing parameter "envPath".'}, status=400)

    shopware_user = body.get("shopwareUser")
    shopware_password = body.get("shopwarePassword")
    if not shopware_user or not shopware_password:
        return web.json_response({"error": "Missing shopware login information."}, status=400)

    try:
        product_count = int(body.get("productCount") or settings.DEFAULT_PRODUCT_COUNT)
        description_words = int(body.get("descriptionWordCount") or settings.DEFAULT_DESCRIPTION_WORDS)
    except (TypeError, ValueError):
        return web.json_response({"error": "productCount and descriptionWordCount must be integers."}, status=400)

    category = body.get("category") or settings.DEFAULT_CATEGORY
    auth = ShopwareAuth(base_url=env_path, client_id="", client_secret="", username=shopware_user, password=shopware_password)

    seed = request.app[SEED_KEY]
    try:
        summary = await seed(
            category,
            product_count,
            with_properties=_flag(body, "createProperties", True),
            with_images=_flag(body, "createImages", True),
            with_reviews=_flag(body, "createReviews", True),
            min_description_words=description_words,
            context=body.get("additionalInformation") or "",
            sales_channel=body.get("salesChannel") or settings.SW_SALES_CHANNEL,
            auth=auth,
        )
    except AuthenticationError as e:
        logger.error(f"Authentication with {env_path} failed: {e}")
        return web.json_response({"error": "Authentication with the Shopware environment failed."}, status=401)
    except PipelineError as e:
        logger.error(str(e))
        return web.json_response({"error": "No products could be generated."}, status=500)
    except ShopwareGeneratorError as e:
        logger.error(f"Generation for {env_path} failed: {e}")
        return web.json_response({"error": str(e)}, status=500)

    return web.json_response({"message": "Products generated successfully.", **summary})


def create_app(seed: SeedFunction = seed_catalog) -> web.Application:
    app = web.Application()
    app[SEED_KEY] = seed
    app.router.add_get("/health", health)
    app.router.add_post("/generate", generate)
    return app


def run_server(host: str | None = None, port: int | None = None) -> None:
    host = host or settings.SERVER_HOST
    port = port or settings.SERVER_PORT
    validate_openai_config(settings.OPENAI_API_KEY)
    logger.info(f"Server starting on {host}:{port}")
    web.run_app(create_app(), host=host, port=port, print=None)
