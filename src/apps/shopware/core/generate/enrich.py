import re

import aiohttp
from bs4 import BeautifulSoup
from playwright.async_api import async_playwright

from apps.shopware.config.constants import (
    CRAWLER_ACCEPT,
    CRAWLER_USER_AGENT,
    RENDER_VIEWPORT,
    STRIPPED_ELEMENTS,
    TEXT_ELEMENTS,
    TRUNCATION_MARKER,
    URL_PATTERN,
)
from apps.shopware.config.settings import settings
from apps.shopware.core.generate.prompts.enrich_prompts import CRAWLED_CONTENT_TEMPLATE
from common.logger import logger


def extract_first_url(text: str | None) -> str | None:
    if not text:
        return None

    match = re.search(URL_PATTERN, text, flags=re.IGNORECASE)
    return match.group(0) if match else None


async def fetch_html(url: str) -> str:
    """Plain GET of the page, no script execution."""
    headers = {"User-Agent": CRAWLER_USER_AGENT, "Accept": CRAWLER_ACCEPT}
    timeout = aiohttp.ClientTimeout(total=settings.STATIC_FETCH_TIMEOUT)

    async with aiohttp.ClientSession(timeout=timeout) as session, session.get(url, headers=headers) as response:
        response.raise_for_status()
        return await response.text()


async def fetch_rendered_html(url: str) -> str:
    """Render the page in headless Chromium and return the resulting DOM."""
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True, args=["--no-sandbox", "--disable-setuid-sandbox"])
        try:
            page = await browser.new_page(viewport=RENDER_VIEWPORT, user_agent=CRAWLER_USER_AGENT)
            await page.goto(url, wait_until="networkidle", timeout=settings.RENDER_TIMEOUT_MS)
            await page.wait_for_timeout(settings.RENDER_SETTLE_MS)
            return await page.content()
        finally:
            await browser.close()


def extract_readable_text(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")

    for element in soup.select(STRIPPED_ELEMENTS):
        element.decompose()

    blocks = []
    for element in soup.select(TEXT_ELEMENTS):
        text = re.sub(r"\s+", " ", element.get_text()).strip()
        if text:
            blocks.append(text)

    combined = "\n".join(blocks)
    return re.sub(r"\n{3,}", "\n\n", combined).strip()


def clip_text(text: str, max_chars: int | None = None) -> str:
    max_chars = max_chars or settings.ENRICH_MAX_CHARS
    if not text or len(text) <= max_chars:
        return text

    return text[:max_chars] + TRUNCATION_MARKER


async def enrich(raw_context: str) -> str:
    """Append readable content of the first URL in the context, if there is one.

    Best effort: on any fetch or parse error the context is returned unchanged.
    """
    url = extract_first_url(raw_context)
    if not url:
        return raw_context

    logger.info(f"Crawling {url} for additional context...")

    try:
        try:
            html = await fetch_rendered_html(url)
        except Exception as e:
            logger.debug(f"Rendered fetch failed for {url}, falling back to static fetch: {e}")
            html = await fetch_html(url)

        content = clip_text(extract_readable_text(html))
    except Exception as e:
        logger.warning(f"Failed to crawl additional context URL {url}: {e}")
        return raw_context

    return CRAWLED_CONTENT_TEMPLATE.format(context=raw_context, url=url, content=content)
