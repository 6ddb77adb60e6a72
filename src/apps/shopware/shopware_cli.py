import asyncio
from pathlib import Path

import click

from apps.shopware.config.constants import GENERATED_PRODUCTS_FILENAME
from apps.shopware.config.settings import settings
from apps.shopware.core.generate.images import clear_image_cache
from apps.shopware.core.generate.pipeline import generate_products
from apps.shopware.core.seed import seed_catalog
from apps.shopware.server import run_server
from apps.shopware.utils.ai import validate_openai_config
from apps.shopware.utils.errors import ShopwareGeneratorError
from common.logger import logger
from common.save_to_json import save_to_json


def generation_options(func):
    """Options shared by every command that generates products."""
    options = [
        click.option("-c", "--category", default=settings.DEFAULT_CATEGORY, show_default=True, help="Industry/category of the products"),
        click.option("-n", "--products", "count", type=int, default=settings.DEFAULT_PRODUCT_COUNT, show_default=True, help="Number of products to generate"),
        click.option("--images/--no-images", default=True, show_default=True, help="Generate product images"),
        click.option("--reviews/--no-reviews", default=True, show_default=True, help="Generate product reviews"),
        click.option("--description-words", type=int, default=settings.DEFAULT_DESCRIPTION_WORDS, show_default=True, help="Minimum words per description"),
        click.option("--context", default="", help="Additional context; a URL in it is crawled for grounding"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
def shopware_cli():
    """Shopware Demo Data CLI - Generate catalog data with OpenAI and load it into Shopware"""
    logger.set_level(settings.LOG_LEVEL)
    logger.debug(f"Settings: {settings.model_dump_str()}")


@shopware_cli.command()
@generation_options
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None, help="Where to write the products JSON")
def generate(category: str, count: int, images: bool, reviews: bool, description_words: int, context: str, output: Path | None):
    """Generate products without uploading them"""
    validate_openai_config(settings.OPENAI_API_KEY)
    output = output or settings.DATA_PATH / GENERATED_PRODUCTS_FILENAME

    async def async_generate():
        logger.start(f"🎲 Generating {count} products for {category}...")
        products = await generate_products(
            category,
            count,
            want_images=images,
            want_reviews=reviews,
            min_description_words=description_words,
            context=context,
        )
        if not products:
            logger.fail("No products could be generated")
            return False

        logger.succeed(f"Generated {len(products)} products")
        if save_to_json(products, output):
            logger.info(f"Saved products to {output}")
        return True

    if not asyncio.run(async_generate()):
        raise SystemExit(1)


@shopware_cli.command()
@generation_options
@click.option("--properties/--no-properties", default=True, show_default=True, help="Generate property groups and assign options")
@click.option("--sales-channel", default=settings.SW_SALES_CHANNEL, show_default=True, help="Sales channel the products are visible in")
def seed(
    category: str,
    count: int,
    images: bool,
    reviews: bool,
    description_words: int,
    context: str,
    properties: bool,
    sales_channel: str,
):
    """Generate products and write them to the configured Shopware instance"""

    async def async_seed():
        logger.info(f"🌱 Seeding Shopware at {settings.SW_ENV_URL} with {count} {category} products...")
        try:
            summary = await seed_catalog(
                category,
                count,
                with_properties=properties,
                with_images=images,
                with_reviews=reviews,
                min_description_words=description_words,
                context=context,
                sales_channel=sales_channel,
            )
        except ShopwareGeneratorError as e:
            logger.fail(f"Seeding failed: {e}")
            return False

        logger.succeed(
            f"✅ Created {summary['products']} products ({summary['images']} images, {summary['property_groups']} property groups)"
        )
        return True

    if not asyncio.run(async_seed()):
        raise SystemExit(1)


@shopware_cli.command()
@click.option("--host", default=settings.SERVER_HOST, show_default=True)
@click.option("--port", type=int, default=settings.SERVER_PORT, show_default=True)
def serve(host: str, port: int):
    """Run the HTTP generation service"""
    run_server(host, port)


@shopware_cli.command("clear-cache")
@click.option("-c", "--category", default=None, help="Only clear images of this category")
def clear_cache(category: str | None):
    """Remove cached product images"""
    clear_image_cache(category)


if __name__ == "__main__":
    shopware_cli()
