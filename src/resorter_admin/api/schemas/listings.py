"""Catalogue request schemas (properties, cities, regions, places, blog, types).

Bodies are validated here before being forwarded to the Resorter360 API.
Field names are snake_case in Python and camelCase on the wire, matching
the upstream JSON; forward with ``model_dump(by_alias=True, exclude_none=True)``.
"""

from __future__ import annotations

__all__ = [
    "BlogCreate",
    "CityCreate",
    "LanguageText",
    "PlaceCreate",
    "PropertyCreate",
    "PropertyOrderItem",
    "RegionCreate",
    "RoomCreate",
    "TypeCreate",
]

from typing import Annotated

from pydantic import AfterValidator, AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

_URL_ADAPTER = TypeAdapter(AnyUrl)


def _url_or_empty(value: str | None) -> str | None:
    """Accept None, "" or an absolute URL. Returns the value unchanged."""
    if not value:
        return value
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError as e:
        raise ValueError(f"'{value}' is not a valid URL") from e
    return value


OptionalUrl = Annotated[str | None, AfterValidator(_url_or_empty)]
RequiredText = Annotated[str, Field(min_length=1)]
ForeignKey = Annotated[int, Field(ge=1)]
Number = int | float


class _CatalogModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LanguageText(_CatalogModel):
    """Per-language text. Every language is optional."""

    ka: str | None = None
    en: str | None = None
    ru: str | None = None


# =============================================================================
# Properties
# =============================================================================


class RoomCreate(_CatalogModel):
    """A bookable room inside a property."""

    name: RequiredText
    sqft: Annotated[Number, Field(ge=1)]
    amount_of_people: Annotated[int, Field(ge=1)]
    bedrooms: Annotated[int, Field(ge=0)]
    bathrooms: Annotated[int, Field(ge=0)]
    price: Annotated[Number, Field(ge=0)]
    kuula_embed_code: str | None = None
    i_cal_link: OptionalUrl = None


class PropertyCreate(_CatalogModel):
    """Create/update body for a property. At least one room is required."""

    name: RequiredText
    slug: RequiredText
    city_id: ForeignKey
    type_id: ForeignKey
    kuula_embed_code: str | None = None
    map_url: OptionalUrl = None
    host_name: str | None = None
    host_number: str | None = None
    host_facebook_url: OptionalUrl = None
    host_instagram_url: OptionalUrl = None
    host_youtube_url: OptionalUrl = None
    rating: str | None = None
    language: LanguageText
    rooms: list[RoomCreate] = Field(min_length=1)


class PropertyOrderItem(_CatalogModel):
    """One entry of a property display-order update."""

    property_id: ForeignKey
    order_index: Annotated[int, Field(ge=0)]


# =============================================================================
# Geography
# =============================================================================


class RegionCreate(_CatalogModel):
    name: RequiredText
    language: LanguageText


class CityCreate(_CatalogModel):
    name: RequiredText
    region_id: ForeignKey
    language: LanguageText


class PlaceCreate(_CatalogModel):
    """Point of interest shown on property pages."""

    name: RequiredText
    slug: RequiredText
    city_id: ForeignKey
    kuula_embed_code: str | None = None
    map_link: OptionalUrl = None
    language: LanguageText


# =============================================================================
# Content
# =============================================================================


class BlogCreate(_CatalogModel):
    title: RequiredText
    slug: RequiredText
    thumbnail: str | None = None
    map_link: OptionalUrl = None
    description: LanguageText


class TypeCreate(_CatalogModel):
    """Property type (hotel, cottage, ...)."""

    name: RequiredText
    image: str | None = None
