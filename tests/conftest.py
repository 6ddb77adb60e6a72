"""Shared fixtures for the Shopware demo data generator tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from apps.shopware.models import HydratedPropertyGroup, HydratedPropertyOption, Product, ProductBrief
from factories import image_response, product_data


@pytest.fixture
def openai_client():
    """Mock AsyncOpenAI client exposing the two endpoints the generators use."""
    client = MagicMock()
    client.chat.completions.parse = AsyncMock()
    client.images.generate = AsyncMock(return_value=image_response())
    return client


@pytest.fixture
def image_cache(tmp_path):
    return tmp_path / "generated_images"


@pytest.fixture
def make_product():
    def _make(name="Fizz Cola", with_reviews=True, option_ids=()):
        return Product.model_validate(product_data(name, with_reviews, option_ids))

    return _make


@pytest.fixture
def make_brief():
    def _make(name_idea="Sparkling Yuzu Tonic"):
        return ProductBrief(
            name_idea=name_idea,
            target_audience="Young professionals",
            price_tier="mid",
            differentiators=["Low sugar", "Real fruit juice", "Glass bottle"],
        )

    return _make


@pytest.fixture
def material_group():
    return HydratedPropertyGroup(
        id="group-material",
        name="Material",
        description="What the piece is made of",
        display_type="text",
        options=[
            HydratedPropertyOption(id="a", name="Oak"),
            HydratedPropertyOption(id="b", name="Walnut"),
        ],
    )
