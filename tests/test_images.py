"""Tests for product image generation and the filesystem image cache"""

from unittest.mock import patch

import pytest

from apps.shopware.core.generate.images import (
    category_image_dir,
    clear_image_cache,
    create_image_prompt,
    generate_image,
    sanitize_name,
)
from common.img_to_b64 import b64_to_img
from factories import PNG_B64, PNG_BYTES, image_response


class TestImageCache:

    def test_sanitize_name(self):
        assert sanitize_name("Fizz Cola 0.5l") == "FizzColal"
        assert sanitize_name("Soft-Drinks & Co") == "SoftDrinksCo"
        assert sanitize_name("123 456") == ""

    def test_category_dir_is_created(self, image_cache):
        directory = category_image_dir("soft drinks", image_cache)

        assert directory == image_cache / "softdrinks"
        assert directory.is_dir()

    def test_write_once(self, tmp_path):
        path = tmp_path / "cola.png"

        assert b64_to_img(PNG_B64, path) is True
        assert b64_to_img("aGVsbG8=", path) is False
        assert path.read_bytes() == PNG_BYTES

    def test_clear_single_category(self, image_cache):
        drinks = category_image_dir("soft drinks", image_cache)
        furniture = category_image_dir("furniture", image_cache)

        clear_image_cache("soft drinks", image_cache)

        assert not drinks.exists()
        assert furniture.exists()

    def test_clear_everything(self, image_cache):
        category_image_dir("soft drinks", image_cache)

        clear_image_cache(cache_dir=image_cache)

        assert not image_cache.exists()


class TestGenerateImage:

    def test_prompt(self, make_product):
        product = make_product("Fizz Cola")

        prompt = create_image_prompt(product, "soft drinks", "retro style")

        assert "Fizz Cola" in prompt
        assert "soft drinks" in prompt
        assert "white background" in prompt
        assert '"retro style"' in prompt

    @pytest.mark.asyncio
    async def test_generated_image_is_attached_and_cached(self, openai_client, image_cache, make_product):
        product = await generate_image(make_product("Fizz Cola"), "soft drinks", client=openai_client, cache_dir=image_cache)

        assert product.image.name == "FizzCola"
        assert product.image.type == ".png"
        assert product.image.data == PNG_B64
        assert (image_cache / "softdrinks" / "FizzCola.png").read_bytes() == PNG_BYTES

    @pytest.mark.asyncio
    async def test_cache_hit_skips_the_provider(self, openai_client, image_cache, make_product):
        first = await generate_image(make_product("Fizz Cola"), "soft drinks", client=openai_client, cache_dir=image_cache)
        second = await generate_image(make_product("Fizz Cola"), "soft drinks", client=openai_client, cache_dir=image_cache)

        assert openai_client.images.generate.await_count == 1
        assert second.image.data == first.image.data

    @pytest.mark.asyncio
    async def test_same_name_in_other_category_is_not_shared(self, openai_client, image_cache, make_product):
        await generate_image(make_product("Classic"), "soft drinks", client=openai_client, cache_dir=image_cache)
        await generate_image(make_product("Classic"), "furniture", client=openai_client, cache_dir=image_cache)

        assert openai_client.images.generate.await_count == 2

    @pytest.mark.asyncio
    async def test_provider_failure_leaves_product_without_image(self, openai_client, image_cache, make_product):
        openai_client.images.generate.side_effect = RuntimeError("content policy")

        product = await generate_image(make_product("Fizz Cola"), "soft drinks", client=openai_client, cache_dir=image_cache)

        assert product.image is None
        assert not (image_cache / "softdrinks" / "FizzCola.png").exists()

    @pytest.mark.asyncio
    async def test_name_without_letters_is_not_cached(self, openai_client, image_cache, make_product):
        openai_client.images.generate.return_value = image_response()

        first = await generate_image(make_product("1000"), "soft drinks", client=openai_client, cache_dir=image_cache)
        await generate_image(make_product("2000"), "soft drinks", client=openai_client, cache_dir=image_cache)

        assert first.image.data == PNG_B64
        assert openai_client.images.generate.await_count == 2
        assert not list(image_cache.rglob("*.png"))

    @pytest.mark.asyncio
    async def test_unusable_cache_dir_still_attaches_image(self, openai_client, tmp_path, make_product):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        product = await generate_image(make_product("Fizz Cola"), "soft drinks", client=openai_client, cache_dir=blocker / "cache")

        assert product.image.data == PNG_B64
        assert openai_client.images.generate.await_count == 1
        assert blocker.read_text() == "not a directory"

    @pytest.mark.asyncio
    async def test_failed_cache_write_still_attaches_image(self, openai_client, image_cache, make_product):
        with patch("apps.shopware.core.generate.images.b64_to_img", side_effect=PermissionError("read-only")):
            product = await generate_image(make_product("Fizz Cola"), "soft drinks", client=openai_client, cache_dir=image_cache)

        assert product.image.data == PNG_B64
