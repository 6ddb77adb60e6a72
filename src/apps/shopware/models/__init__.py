"""Catalog entity models."""

from .entities import (
    BriefsResponse,
    GenerationResult,
    HydratedPropertyGroup,
    HydratedPropertyOption,
    ImageAttachment,
    Product,
    ProductBase,
    ProductBrief,
    ProductOptionRef,
    ProductReview,
    PropertyGroup,
    PropertyGroupsResponse,
    PropertyOption,
)


__all__ = [
    "BriefsResponse",
    "GenerationResult",
    "HydratedPropertyGroup",
    "HydratedPropertyOption",
    "ImageAttachment",
    "Product",
    "ProductBase",
    "ProductBrief",
    "ProductOptionRef",
    "ProductReview",
    "PropertyGroup",
    "PropertyGroupsResponse",
    "PropertyOption",
]
