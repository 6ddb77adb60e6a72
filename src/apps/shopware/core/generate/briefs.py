from openai import AsyncOpenAI

from apps.shopware.core.generate.prompts.generate_briefs_prompts import CONTEXT_CLAUSE_TEMPLATE, USER_PROMPT
from apps.shopware.models import BriefsResponse, ProductBrief
from apps.shopware.utils.ai import get_openai_client, parse_completion
from common.logger import logger


def create_briefs_prompt(category: str, count: int, context: str = "") -> str:
    context_clause = ""
    if context and context.strip():
        context_clause = CONTEXT_CLAUSE_TEMPLATE.format(context=context)

    return USER_PROMPT.format(count=count, category=category, context_clause=context_clause)


async def generate_briefs(category: str, count: int, context: str = "", client: AsyncOpenAI | None = None) -> list[ProductBrief]:
    """Plan `count` distinct product concepts in a single call.

    An empty list means the brief-based fast path is unavailable.
    """
    client = client or get_openai_client()
    prompt = create_briefs_prompt(category, count, context)

    try:
        response = await parse_completion(client, prompt, BriefsResponse)
    except Exception as e:
        logger.error(f"Failed to generate product briefs: {e}")
        return []

    logger.info(f"Generated {len(response.briefs)} product briefs for {category}")
    return response.briefs
