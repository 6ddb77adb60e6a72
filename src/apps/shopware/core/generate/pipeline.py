"""Product generation pipeline.

enrich context -> briefs -> products (concurrent) -> images (concurrent),
with a sequential, name-aware fallback when no product comes out of the
brief-based fast path.
"""

import asyncio
from collections.abc import Sequence
from pathlib import Path

from openai import AsyncOpenAI

from apps.shopware.config.settings import settings
from apps.shopware.core.generate.briefs import generate_briefs
from apps.shopware.core.generate.enrich import enrich
from apps.shopware.core.generate.images import generate_image
from apps.shopware.core.generate.products import generate_product
from apps.shopware.models import GenerationResult, HydratedPropertyGroup, Product
from apps.shopware.utils.ai import get_openai_client
from common.logger import logger


def collect_products(results: Sequence[GenerationResult[Product]]) -> list[Product]:
    products = [result.value for result in results if result.ok]

    failed = len(results) - len(products)
    if failed:
        reasons = "; ".join(result.reason for result in results if not result.ok and result.reason)
        logger.warning(f"{failed} of {len(results)} product generations failed: {reasons}")

    return products


async def generate_from_briefs(
    category: str,
    count: int,
    property_groups: Sequence[HydratedPropertyGroup] | None,
    want_reviews: bool,
    min_description_words: int,
    context: str,
    client: AsyncOpenAI,
) -> list[Product]:
    """Fast path: plan distinct concepts, then generate one product per concept concurrently."""
    briefs = await generate_briefs(category, count, context, client=client)
    if not briefs:
        return []

    results = await asyncio.gather(
        *(
            generate_product(
                category,
                property_groups=property_groups,
                want_reviews=want_reviews,
                min_description_words=min_description_words,
                context=context,
                prior_names=(),
                brief=brief,
                client=client,
            )
            for brief in briefs[:count]
        )
    )

    return collect_products(results)


async def next_sequential_product(
    accepted: tuple[Product, ...],
    category: str,
    property_groups: Sequence[HydratedPropertyGroup] | None,
    want_reviews: bool,
    min_description_words: int,
    context: str,
    client: AsyncOpenAI,
) -> tuple[Product, ...]:
    """One fallback attempt. Returns the accepted products, extended on success."""
    prior_names = [product.name for product in accepted if product.name]

    result = await generate_product(
        category,
        property_groups=property_groups,
        want_reviews=want_reviews,
        min_description_words=min_description_words,
        context=context,
        prior_names=prior_names,
        client=client,
    )

    if not result.ok:
        return accepted

    return (*accepted, result.value)


async def generate_sequentially(
    category: str,
    count: int,
    property_groups: Sequence[HydratedPropertyGroup] | None,
    want_reviews: bool,
    min_description_words: int,
    context: str,
    client: AsyncOpenAI,
) -> list[Product]:
    """Fallback path: exactly `count` attempts, each aware of every name accepted before it."""
    accepted: tuple[Product, ...] = ()

    for attempt in range(1, count + 1):
        accepted = await next_sequential_product(
            accepted,
            category,
            property_groups,
            want_reviews,
            min_description_words,
            context,
            client,
        )
        logger.debug(f"Sequential attempt {attempt}/{count}: {len(accepted)} products accepted")

    return list(accepted)


async def generate_product_images(
    products: list[Product],
    category: str,
    context: str = "",
    client: AsyncOpenAI | None = None,
    cache_dir: Path | None = None,
) -> list[Product]:
    logger.info("Generating product images ...")

    return list(
        await asyncio.gather(
            *(generate_image(product, category, context, client=client, cache_dir=cache_dir) for product in products)
        )
    )


async def generate_products(
    category: str,
    count: int = settings.DEFAULT_PRODUCT_COUNT,
    property_groups: Sequence[HydratedPropertyGroup] | None = None,
    want_images: bool = True,
    want_reviews: bool = True,
    min_description_words: int = settings.DEFAULT_DESCRIPTION_WORDS,
    context: str = "",
    client: AsyncOpenAI | None = None,
    cache_dir: Path | None = None,
) -> list[Product]:
    """Generate up to `count` products for a category.

    The result may hold fewer products than requested; an empty result means
    the pipeline failed.
    """
    logger.info(f"Generating product data ... (category={category}, count={count})")

    client = client or get_openai_client()
    enriched_context = await enrich(context)

    products: list[Product] = []
    try:
        products = await generate_from_briefs(
            category,
            count,
            property_groups,
            want_reviews,
            min_description_words,
            enriched_context,
            client,
        )
    except Exception as e:
        logger.error(f"Brief-based generation failed: {e}")

    if not products:
        logger.warning("No products from briefs, falling back to sequential generation")
        products = await generate_sequentially(
            category,
            count,
            property_groups,
            want_reviews,
            min_description_words,
            enriched_context,
            client,
        )

    if len(products) < count:
        logger.warning(f"Generated {len(products)} of {count} requested products")

    if not want_images:
        return products

    return await generate_product_images(products, category, enriched_context, client=client, cache_dir=cache_dir)
