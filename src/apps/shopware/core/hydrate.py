import asyncio
import base64
import uuid
from collections.abc import Sequence
from typing import Any

from apps.shopware.config.constants import (
    IMAGE_CONTENT_TYPE,
    PRODUCT_NUMBER_PREFIX,
    PRODUCT_VISIBILITY_ALL,
    ShopwareEntity,
)
from apps.shopware.config.settings import settings
from apps.shopware.models import HydratedPropertyGroup, HydratedPropertyOption, Product, PropertyGroup
from apps.shopware.utils.api_utils import ShopwareAPIUtils
from apps.shopware.utils.errors import HydrationError
from common.logger import logger


def create_uuid() -> str:
    """Shopware ids are uuid4 hex strings without dashes."""
    return uuid.uuid4().hex


def capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def assign_property_group_ids(property_groups: Sequence[PropertyGroup]) -> list[HydratedPropertyGroup]:
    return [
        HydratedPropertyGroup(
            id=create_uuid(),
            name=group.name,
            description=group.description,
            display_type=group.display_type,
            options=[HydratedPropertyOption(id=create_uuid(), **option.model_dump()) for option in group.options],
        )
        for group in property_groups
    ]


async def hydrate_property_groups(api: ShopwareAPIUtils, property_groups: Sequence[PropertyGroup]) -> list[HydratedPropertyGroup]:
    """Assign ids and upsert the groups. The returned ids are what products may reference."""
    if not property_groups:
        logger.warning("No property groups to hydrate")
        return []

    hydrated = assign_property_group_ids(property_groups)
    await api.upsert(ShopwareEntity.PROPERTY_GROUP, [group.to_payload() for group in hydrated])
    logger.info(f"Created {len(hydrated)} property groups")

    return hydrated


async def ensure_category(api: ShopwareAPIUtils, category: str, sales_channel: dict[str, Any]) -> dict[str, Any]:
    """Find the category below the sales channel's navigation root, or create it."""
    category_name = capitalize(category.strip())
    parent_id = sales_channel.get("navigationCategoryId")

    existing = await api.search_first(
        ShopwareEntity.CATEGORY,
        [
            {"type": "equals", "field": "name", "value": category_name},
            {"type": "equals", "field": "parentId", "value": parent_id},
        ],
    )
    if existing:
        logger.debug(f"Using existing category {category_name}")
        return existing

    category_data = {
        "id": create_uuid(),
        "name": category_name,
        "parentId": parent_id,
        "displayNestedProducts": True,
        "type": "page",
        "productAssignmentType": "product",
        "visible": True,
        "active": True,
    }
    await api.upsert(ShopwareEntity.CATEGORY, [category_data])
    logger.info(f"Created category {category_name}")

    return category_data


def build_product_payloads(
    products: Sequence[Product],
    currency_id: str,
    tax_id: str,
    sales_channel: dict[str, Any],
    category: dict[str, Any],
) -> tuple[list[dict[str, Any]], list[dict[str, Any]], list[dict[str, Any]]]:
    """Map generated products to Admin API payloads.

    Returns (product payloads, media records, pending media uploads).
    """
    product_payloads = []
    media_records = []
    media_uploads = []

    for product in products:
        product_id = create_uuid()

        payload: dict[str, Any] = {
            "id": product_id,
            "productNumber": f"{PRODUCT_NUMBER_PREFIX}{product_id}",
            "name": product.name,
            "description": product.description,
            "stock": product.stock,
            "taxId": tax_id,
            "price": [
                {
                    "currencyId": currency_id,
                    "gross": product.price,
                    "net": product.price,
                    "linked": True,
                }
            ],
            "visibilities": [
                {
                    "productId": product_id,
                    "salesChannelId": sales_channel["id"],
                    "visibility": PRODUCT_VISIBILITY_ALL,
                }
            ],
            "categories": [
                {"id": sales_channel["navigationCategoryId"]},
                {"id": category["id"]},
            ],
        }

        if product.product_reviews:
            payload["productReviews"] = [
                {**review.to_payload(), "salesChannelId": sales_channel["id"]} for review in product.product_reviews
            ]

        if product.options:
            payload["properties"] = [{"id": option.id} for option in product.options]

        if product.image:
            media_id = create_uuid()
            product_media_id = create_uuid()

            media_uploads.append({"id": media_id, "image": product.image})
            media_records.append({"id": media_id, "private": False})

            payload["coverId"] = product_media_id
            payload["media"] = [{"id": product_media_id, "media": {"id": media_id}}]

        product_payloads.append(payload)

    return product_payloads, media_records, media_uploads


async def upload_media_files(api: ShopwareAPIUtils, media_uploads: Sequence[dict[str, Any]]) -> None:
    await asyncio.gather(
        *(
            api.upload_media(
                media["id"],
                f"{media['image'].name}-{media['id']}",
                IMAGE_CONTENT_TYPE,
                base64.b64decode(media["image"].data),
            )
            for media in media_uploads
        )
    )


async def hydrate_products(
    api: ShopwareAPIUtils,
    products: Sequence[Product],
    category: str,
    sales_channel_name: str | None = None,
) -> int:
    """Write generated products (with reviews, properties and images) to Shopware.

    Returns the number of products written.
    """
    sales_channel_name = sales_channel_name or settings.SW_SALES_CHANNEL

    currency_id = await api.get_currency_id(settings.SW_CURRENCY)
    tax_id = await api.get_standard_tax_id()
    sales_channel = await api.get_sales_channel(sales_channel_name)

    if not currency_id or not tax_id or not sales_channel or not sales_channel.get("id"):
        raise HydrationError(
            f"Required ids are missing: currency={currency_id}, tax={tax_id}, "
            f"sales channel '{sales_channel_name}'={sales_channel.get('id') if sales_channel else None}"
        )

    product_category = await ensure_category(api, category, sales_channel)
    product_payloads, media_records, media_uploads = build_product_payloads(products, currency_id, tax_id, sales_channel, product_category)

    await api.sync(
        {
            "hydrateProducts": (ShopwareEntity.PRODUCT, product_payloads),
            "hydrateMedia": (ShopwareEntity.MEDIA, media_records),
        }
    )
    await upload_media_files(api, media_uploads)

    logger.info(f"Created {len(product_payloads)} products with {len(media_uploads)} images")
    return len(product_payloads)
