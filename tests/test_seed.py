"""Tests for the generate-and-upload flow"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from apps.shopware.core.seed import seed_catalog
from apps.shopware.models import ImageAttachment, PropertyGroup, PropertyOption
from apps.shopware.utils.errors import ConfigurationError, PipelineError
from factories import PNG_B64


SEED = "apps.shopware.core.seed"


@pytest.fixture
def api():
    api = MagicMock()
    api.__aenter__ = AsyncMock(return_value=api)
    api.__aexit__ = AsyncMock(return_value=False)
    return api


@pytest.fixture
def seed_env(api, openai_client):
    """Patch the collaborators of seed_catalog, yielding the mocks by name."""
    with (
        patch(f"{SEED}.validate_openai_config"),
        patch(f"{SEED}.get_openai_client", return_value=openai_client),
        patch(f"{SEED}.ShopwareAPIUtils", return_value=api),
        patch(f"{SEED}.generate_property_groups", new_callable=AsyncMock) as generate_groups,
        patch(f"{SEED}.hydrate_property_groups", new_callable=AsyncMock) as hydrate_groups,
        patch(f"{SEED}.generate_products", new_callable=AsyncMock) as generate_products,
        patch(f"{SEED}.hydrate_products", new_callable=AsyncMock) as hydrate_products,
    ):
        yield {
            "generate_groups": generate_groups,
            "hydrate_groups": hydrate_groups,
            "generate_products": generate_products,
            "hydrate_products": hydrate_products,
        }


class TestSeedCatalog:

    @pytest.mark.asyncio
    async def test_full_flow(self, seed_env, api, material_group, make_product):
        groups = [PropertyGroup(name="Material", description="", display_type="text", options=[PropertyOption(name="Oak")])]
        product = make_product("Oak Table")
        product.image = ImageAttachment(name="OakTable", data=PNG_B64)

        seed_env["generate_groups"].return_value = groups
        seed_env["hydrate_groups"].return_value = [material_group]
        seed_env["generate_products"].return_value = [product, make_product("Walnut Chair")]
        seed_env["hydrate_products"].return_value = 2

        summary = await seed_catalog("furniture", 2, sales_channel="Storefront")

        assert summary == {"category": "furniture", "requested": 2, "products": 2, "property_groups": 1, "images": 1}
        seed_env["hydrate_groups"].assert_awaited_once_with(api, groups)
        assert seed_env["generate_products"].call_args.kwargs["property_groups"] == [material_group]
        seed_env["hydrate_products"].assert_awaited_once_with(api, seed_env["generate_products"].return_value, "furniture", "Storefront")

    @pytest.mark.asyncio
    async def test_without_properties(self, seed_env, make_product):
        seed_env["generate_products"].return_value = [make_product()]
        seed_env["hydrate_products"].return_value = 1

        summary = await seed_catalog("soft drinks", 1, with_properties=False, with_images=False)

        seed_env["generate_groups"].assert_not_called()
        kwargs = seed_env["generate_products"].call_args.kwargs
        assert kwargs["property_groups"] is None
        assert kwargs["want_images"] is False
        assert summary["property_groups"] == 0

    @pytest.mark.asyncio
    async def test_no_products_is_an_error(self, seed_env):
        seed_env["generate_groups"].return_value = []
        seed_env["hydrate_groups"].return_value = []
        seed_env["generate_products"].return_value = []

        with pytest.raises(PipelineError):
            await seed_catalog("soft drinks", 3)

        seed_env["hydrate_products"].assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_openai_key(self):
        with patch(f"{SEED}.settings") as settings:
            settings.OPENAI_API_KEY = ""

            with pytest.raises(ConfigurationError):
                await seed_catalog("soft drinks", 1)
