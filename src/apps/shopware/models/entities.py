from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from apps.shopware.config.constants import (
    MAX_DIFFERENTIATORS,
    MIN_DIFFERENTIATORS,
)


class CatalogModel(BaseModel):
    """Base model, serialized with the camelCase keys the Admin API expects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class ProductBrief(CatalogModel):
    """Short product concept used to seed one independent product generation."""

    name_idea: str = Field(description="Working name for the product, not a real brand")
    target_audience: str = Field(description="Who the product is made for")
    price_tier: Literal["budget", "mid", "premium"] | None = Field(default=None, description="Rough price positioning")
    differentiators: list[str] = Field(
        description="What sets this concept apart from the others",
        min_length=MIN_DIFFERENTIATORS,
        max_length=MAX_DIFFERENTIATORS,
    )


class BriefsResponse(CatalogModel):
    briefs: list[ProductBrief]


class PropertyOption(CatalogModel):
    name: str = Field(description="Option value, e.g. 'Red' or 'Oak'")
    color_hex_code: str | None = Field(default=None, description="Hex color code, only for color options")


class PropertyGroup(CatalogModel):
    name: str = Field(description="Property name, e.g. 'Color' or 'Material'")
    description: str
    display_type: Literal["text", "color"]
    options: list[PropertyOption]


class PropertyGroupsResponse(CatalogModel):
    property_groups: list[PropertyGroup]


class HydratedPropertyOption(PropertyOption):
    id: str


class HydratedPropertyGroup(PropertyGroup):
    """Property group after identifiers were assigned for upload."""

    id: str
    options: list[HydratedPropertyOption]

    @property
    def option_ids(self) -> list[str]:
        return [option.id for option in self.options]


class ProductReview(CatalogModel):
    external_user: str = Field(description="Display name of the reviewer")
    external_email: str
    title: str
    content: str
    points: int = Field(ge=1, le=5, description="Rating between 1 and 5")
    status: bool = Field(description="Whether the review is published")


class ProductOptionRef(CatalogModel):
    id: str


class ImageAttachment(CatalogModel):
    name: str
    type: Literal[".png"] = ".png"
    data: str


class ProductBase(CatalogModel):
    """Fields every generated product has, regardless of requested extras."""

    name: str
    description: str = Field(description="Product description, simple HTML allowed")
    price: float = Field(gt=0, description="Gross price")
    stock: int = Field(ge=0)


class Product(ProductBase):
    product_reviews: list[ProductReview] | None = None
    options: list[ProductOptionRef] | None = None
    image: ImageAttachment | None = None


T = TypeVar("T")


@dataclass(frozen=True)
class GenerationResult(Generic[T]):
    """Outcome of generating a single item: a value, or the reason there is none."""

    value: T | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None and self.value is not None

    @classmethod
    def success(cls, value: T) -> "GenerationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, reason: str) -> "GenerationResult[T]":
        return cls(reason=reason)
