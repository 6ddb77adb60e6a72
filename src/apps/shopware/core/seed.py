from typing import Any

from apps.shopware.config.settings import settings
from apps.shopware.core.generate.pipeline import generate_products
from apps.shopware.core.generate.property_groups import generate_property_groups
from apps.shopware.core.hydrate import hydrate_products, hydrate_property_groups
from apps.shopware.utils.ai import get_openai_client, validate_openai_config
from apps.shopware.utils.api_auth import ShopwareAuth
from apps.shopware.utils.api_utils import ShopwareAPIUtils
from apps.shopware.utils.errors import PipelineError
from common.logger import logger


async def seed_catalog(
    category: str,
    count: int,
    *,
    with_properties: bool = True,
    with_images: bool = True,
    with_reviews: bool = True,
    min_description_words: int | None = None,
    context: str = "",
    sales_channel: str | None = None,
    auth: ShopwareAuth | None = None,
) -> dict[str, Any]:
    """Generate a catalog for one category and write it to Shopware."""
    validate_openai_config(settings.OPENAI_API_KEY)
    client = get_openai_client()

    async with ShopwareAPIUtils(auth) as api:
        property_groups = []
        if with_properties:
            generated_groups = await generate_property_groups(category, client=client)
            property_groups = await hydrate_property_groups(api, generated_groups)

        products = await generate_products(
            category,
            count,
            property_groups=property_groups or None,
            want_images=with_images,
            want_reviews=with_reviews,
            min_description_words=min_description_words or settings.DEFAULT_DESCRIPTION_WORDS,
            context=context,
            client=client,
        )

        if not products:
            raise PipelineError(f"No products could be generated for {category}")

        created = await hydrate_products(api, products, category, sales_channel)

    return {
        "category": category,
        "requested": count,
        "products": created,
        "property_groups": len(property_groups),
        "images": sum(1 for product in products if product.image),
    }
