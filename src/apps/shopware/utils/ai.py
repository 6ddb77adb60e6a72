from functools import cache
from logging import WARNING, getLogger
from typing import Any, TypeVar

from openai import APIConnectionError, APITimeoutError, AsyncOpenAI, RateLimitError
from pydantic import BaseModel
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from apps.shopware.config.settings import settings
from apps.shopware.utils.errors import ConfigurationError
from common.logger import logger


M = TypeVar("M", bound=BaseModel)


getLogger("openai._base_client").setLevel(WARNING)
getLogger("httpx").setLevel(WARNING)


RETRYABLE_ERRORS = (RateLimitError, APIConnectionError, APITimeoutError)


def validate_openai_config(api_key: str | None = None) -> None:
    if not api_key or not api_key.strip():
        raise ConfigurationError("OPENAI_API_KEY is required. Please set it in your environment or .env file.")

    logger.debug("OpenAI API configuration validated")


@cache
def get_openai_client() -> AsyncOpenAI:
    """Shared client, created on first use once the API key has been validated."""
    validate_openai_config(settings.OPENAI_API_KEY)
    return AsyncOpenAI(api_key=settings.OPENAI_API_KEY)


def _log_retry(retry_state) -> None:
    if retry_state.outcome and retry_state.outcome.failed:
        logger.warning(f"OpenAI API attempt {retry_state.attempt_number} failed. Trying again...")


@retry(
    retry=retry_if_exception_type(RETRYABLE_ERRORS),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=15),
    after=_log_retry,
    reraise=True,
)
async def parse_completion(client: AsyncOpenAI, prompt: str, response_format: type[M], model: str | None = None) -> M:
    """Run a structured-output completion and return the parsed model.

    Raises ValueError when the model refused or returned no parsable content.
    """
    completion = await client.chat.completions.parse(
        model=model or settings.TEXT_MODEL,
        messages=[{"role": "system", "content": prompt}],
        response_format=response_format,
    )

    message = completion.choices[0].message if completion.choices else None
    if message is None:
        raise ValueError("No choices in OpenAI response")
    if getattr(message, "refusal", None):
        raise ValueError(f"Model refused the request: {message.refusal}")
    if message.parsed is None:
        raise ValueError("No parsed content in OpenAI response")

    return message.parsed


@retry(
    retry=retry_if_exception_type(RETRYABLE_ERRORS),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=15),
    after=_log_retry,
    reraise=True,
)
async def generate_image_b64(client: AsyncOpenAI, prompt: str, **kwargs: Any) -> str:
    """Generate one image and return it base64 encoded."""
    response = await client.images.generate(
        model=kwargs.get("model") or settings.IMAGE_MODEL,
        prompt=prompt,
        size=kwargs.get("size") or settings.IMAGE_SIZE,
        n=1,
    )

    if not response.data or not response.data[0].b64_json:
        raise ValueError("No image data in OpenAI response")

    return response.data[0].b64_json
