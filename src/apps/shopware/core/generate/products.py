from collections.abc import Sequence
from typing import Literal

from openai import AsyncOpenAI
from pydantic import Field, create_model

from apps.shopware.config.constants import MIN_PRODUCT_OPTIONS, MIN_PRODUCT_REVIEWS
from apps.shopware.config.settings import settings
from apps.shopware.core.generate.prompts.generate_products_prompts import (
    BASE_PROMPT,
    BRIEF_CLAUSE_TEMPLATE,
    CONTEXT_CLAUSE_TEMPLATE,
    OPTIONS_CLAUSE,
    PRIOR_NAMES_CLAUSE_TEMPLATE,
    REVIEWS_CLAUSE,
)
from apps.shopware.models import (
    GenerationResult,
    HydratedPropertyGroup,
    Product,
    ProductBase,
    ProductBrief,
    ProductReview,
)
from apps.shopware.models.entities import CatalogModel
from apps.shopware.utils.ai import get_openai_client, parse_completion
from common.logger import logger


def collect_option_ids(property_groups: Sequence[HydratedPropertyGroup] | None) -> list[str]:
    """Flatten the option ids of every group, keeping first-seen order."""
    if not property_groups:
        return []

    option_ids = [option_id for group in property_groups for option_id in group.option_ids]
    return list(dict.fromkeys(option_ids))


def build_product_schema(with_reviews: bool, option_ids: Sequence[str] | None = None) -> type[ProductBase]:
    """Compose the response schema for one product generation call.

    The options field is rebuilt per call because its enum is the set of
    option ids that exist for this request.
    """
    fields = {}

    if with_reviews:
        fields["product_reviews"] = (list[ProductReview], Field(min_length=MIN_PRODUCT_REVIEWS))

    if option_ids:
        option_model = create_model(
            "ProductOption",
            __base__=CatalogModel,
            id=(Literal[tuple(option_ids)], ...),
        )
        fields["options"] = (list[option_model], Field(min_length=MIN_PRODUCT_OPTIONS))

    if not fields:
        return ProductBase

    return create_model("GeneratedProduct", __base__=ProductBase, **fields)


def format_brief_clause(brief: ProductBrief) -> str:
    differentiators = "\n".join(f"• {item}" for item in brief.differentiators)

    return BRIEF_CLAUSE_TEMPLATE.format(
        name_idea=brief.name_idea,
        target_audience=brief.target_audience,
        price_tier=brief.price_tier or "",
        differentiators=differentiators,
    )


def build_product_prompt(
    category: str,
    with_reviews: bool,
    with_options: bool,
    min_description_words: int,
    context: str = "",
    prior_names: Sequence[str] = (),
    brief: ProductBrief | None = None,
) -> str:
    prompt = BASE_PROMPT.format(category=category, min_description_words=min_description_words)

    if with_reviews:
        prompt += REVIEWS_CLAUSE.format(min_reviews=MIN_PRODUCT_REVIEWS)

    if with_options:
        prompt += OPTIONS_CLAUSE.format(min_options=MIN_PRODUCT_OPTIONS)

    if context and context.strip():
        prompt += CONTEXT_CLAUSE_TEMPLATE.format(context=context)

    if prior_names:
        quoted = ", ".join(f'"{name}"' for name in prior_names)
        prompt += PRIOR_NAMES_CLAUSE_TEMPLATE.format(prior_names=quoted)

    if brief:
        prompt += format_brief_clause(brief)

    return prompt


async def generate_product(
    category: str,
    property_groups: Sequence[HydratedPropertyGroup] | None = None,
    want_reviews: bool = True,
    min_description_words: int = settings.DEFAULT_DESCRIPTION_WORDS,
    context: str = "",
    prior_names: Sequence[str] = (),
    brief: ProductBrief | None = None,
    client: AsyncOpenAI | None = None,
) -> GenerationResult[Product]:
    """Generate a single product. Failures are returned, never raised."""
    client = client or get_openai_client()

    option_ids = collect_option_ids(property_groups)
    if property_groups and not option_ids:
        logger.warning("Property groups were supplied without any options, skipping product options")

    schema = build_product_schema(want_reviews, option_ids)
    prompt = build_product_prompt(
        category,
        with_reviews=want_reviews,
        with_options=bool(option_ids),
        min_description_words=min_description_words,
        context=context,
        prior_names=prior_names,
        brief=brief,
    )

    label = brief.name_idea if brief else category
    try:
        generated = await parse_completion(client, prompt, schema)
        product = Product.model_validate(generated.model_dump())
    except Exception as e:
        logger.error(f"Failed to generate product ({label}): {e}")
        return GenerationResult.failure(f"{type(e).__name__}: {e}")

    logger.debug(f"Generated product {product.name}")
    return GenerationResult.success(product)
