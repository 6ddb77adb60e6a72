import re
import shutil
from pathlib import Path

from openai import AsyncOpenAI

from apps.shopware.config.constants import IMAGE_EXTENSION
from apps.shopware.config.settings import settings
from apps.shopware.core.generate.prompts.generate_images_prompts import CONTEXT_CLAUSE_TEMPLATE, IMAGE_PROMPT
from apps.shopware.models import ImageAttachment, Product
from apps.shopware.utils.ai import generate_image_b64, get_openai_client
from common.img_to_b64 import b64_to_img, img_to_b64
from common.logger import logger


def sanitize_name(value: str) -> str:
    """Strip everything but ASCII letters, e.g. 'Fizz Cola 0.5l' -> 'FizzColal'."""
    return re.sub(r"[^a-zA-Z]", "", value)


def category_image_dir(category: str, cache_dir: Path | None = None) -> Path:
    root = cache_dir or settings.IMAGE_CACHE_PATH
    directory = root / sanitize_name(category)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def clear_image_cache(category: str | None = None, cache_dir: Path | None = None) -> None:
    """Remove the cached images of one category, or the whole cache."""
    root = cache_dir or settings.IMAGE_CACHE_PATH
    target = root / sanitize_name(category) if category else root

    if target.exists():
        shutil.rmtree(target)
    logger.info(f"Image cache cleared: {target}")


def create_image_prompt(product: Product, category: str, context: str = "") -> str:
    prompt = IMAGE_PROMPT.format(name=product.name, description=product.description, category=category)

    if context and context.strip():
        prompt += CONTEXT_CLAUSE_TEMPLATE.format(context=context)

    return prompt


async def generate_image(
    product: Product,
    category: str,
    context: str = "",
    client: AsyncOpenAI | None = None,
    cache_dir: Path | None = None,
) -> Product:
    """Attach a studio product photo to the product, reusing the image cache.

    A missing image is not an error: on failure the product is returned as is.
    """
    image_name = sanitize_name(product.name)
    image_path = None

    # Names without letters have no usable cache key
    if image_name:
        try:
            image_path = category_image_dir(category, cache_dir) / f"{image_name}{IMAGE_EXTENSION}"
        except OSError as e:
            logger.warning(f"Image cache unavailable for {category}, generating without it: {e}")

    if image_path and image_path.exists():
        try:
            product.image = ImageAttachment(name=image_name, data=img_to_b64(image_path))
            logger.info(f"Image for product {product.name} used from image cache.")
            return product
        except ValueError as e:
            logger.warning(f"Cached image for {product.name} is unreadable, generating a new one: {e}")

    client = client or get_openai_client()
    prompt = create_image_prompt(product, category, context)

    try:
        image_b64 = await generate_image_b64(client, prompt)
    except Exception as e:
        logger.warning(f"Failed to generate image for product {product.name}: {e}")
        return product

    if image_path:
        try:
            b64_to_img(image_b64, image_path)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to cache image for product {product.name}: {e}")

    product.image = ImageAttachment(name=image_name, data=image_b64)
    logger.info(f"Image for product {product.name} generated successfully.")

    return product
