from openai import AsyncOpenAI

from apps.shopware.config.constants import DEFAULT_PROPERTY_GROUP_COUNT
from apps.shopware.core.generate.prompts.generate_property_groups_prompts import USER_PROMPT
from apps.shopware.models import PropertyGroup, PropertyGroupsResponse
from apps.shopware.utils.ai import get_openai_client, parse_completion
from common.logger import logger


async def generate_property_groups(
    category: str,
    group_count: int = DEFAULT_PROPERTY_GROUP_COUNT,
    client: AsyncOpenAI | None = None,
) -> list[PropertyGroup]:
    """Generate property groups with options, without identifiers."""
    logger.info("Generating property group data ...")

    client = client or get_openai_client()
    prompt = USER_PROMPT.format(group_count=group_count, category=category)

    try:
        response = await parse_completion(client, prompt, PropertyGroupsResponse)
    except Exception as e:
        logger.error(f"Failed to generate property groups: {e}")
        return []

    logger.info(f"Generated {len(response.property_groups)} property groups")
    return response.property_groups
